"""End-to-end tests for the agenda CLI against a real schedule file."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from agenda.__main__ import main
from core.cli_errors import ExitCode
from tests.fixtures import capture_output, read_schedule_file, record, write_schedule_file


class AgendaCLITests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)
        self.path = self.dir / "schedules.json"
        # Keep the user's real config and env out of the way
        env = patch.dict(os.environ, {"XDG_CONFIG_HOME": str(self.dir / "xdg")})
        env.start()
        self.addCleanup(env.stop)
        os.environ.pop("AGENDA_FILE", None)
        os.environ.pop("AGENDA_CONFIG", None)

    def run_cli(self, *argv):
        with capture_output() as (out, err):
            rc = main(["--file", str(self.path), *argv])
        return rc, out.getvalue(), err.getvalue()

    def test_scenario_walkthrough(self):
        rc, out, _ = self.run_cli("add", "会議", "2025-05-01T10:00:00", "2025-05-01T11:00:00")
        self.assertEqual(rc, 0)
        self.assertIn("#1", out)

        rc, _, err = self.run_cli("add", "X", "2025-05-01T10:30:00", "2025-05-01T10:45:00")
        self.assertEqual(rc, ExitCode.CONFLICT)
        self.assertIn("#1", err)

        rc, _, _ = self.run_cli("add", "Y", "2025-05-01T11:00:00", "2025-05-01T12:00:00")
        self.assertEqual(rc, 0)

        rc, out, _ = self.run_cli("list")
        self.assertEqual(rc, 0)
        self.assertEqual(out.splitlines(), [
            "ID\tSTART\tEND\tSUBJECT",
            "1\t2025-05-01 10:00\t2025-05-01 11:00\t会議",
            "2\t2025-05-01 11:00\t2025-05-01 12:00\tY",
        ])

        rc, out, _ = self.run_cli("delete", "1")
        self.assertEqual(rc, 0)
        self.assertIn("Deleted entry #1", out)

        rc, _, _ = self.run_cli("add", "Z", "2025-05-01T13:00:00", "2025-05-01T14:00:00")
        self.assertEqual(rc, 0)
        self.assertEqual([r["id"] for r in read_schedule_file(self.path)["schedules"]], [2, 3])

    def test_list_without_file_is_empty_and_creates_nothing(self):
        rc, out, _ = self.run_cli("list")
        self.assertEqual(rc, 0)
        self.assertEqual(out, "ID\tSTART\tEND\tSUBJECT\n")
        self.assertFalse(self.path.exists())

    def test_first_add_creates_file(self):
        rc, _, _ = self.run_cli("add", "会議", "2025-05-01T10:00:00", "2025-05-01T11:00:00")
        self.assertEqual(rc, 0)
        self.assertEqual(read_schedule_file(self.path), {"schedules": [
            {"id": 1, "subject": "会議", "start": "2025-05-01T10:00:00", "end": "2025-05-01T11:00:00"},
        ]})

    def test_rejected_commands_leave_file_bytes_unchanged(self):
        write_schedule_file(self.path, [record(1, "2025-05-01T10:00:00", "2025-05-01T11:00:00")])
        before = self.path.read_bytes()
        cases = [
            (("add", "X", "2025-05-01T10:30:00", "2025-05-01T10:45:00"), ExitCode.CONFLICT),
            (("add", "", "2025-05-01T10:00:00", "2025-05-01T09:00:00"), ExitCode.USAGE),
            (("add", "x", "2025-05-01 12:00", "2025-05-01T13:00:00"), ExitCode.USAGE),
            (("delete", "99"), ExitCode.NOT_FOUND),
            (("delete", "abc"), ExitCode.USAGE),
        ]
        for argv, code in cases:
            with self.subTest(argv=argv):
                rc, out, err = self.run_cli(*argv)
                self.assertEqual(rc, code)
                self.assertTrue(err.startswith("Error: "))
                self.assertEqual(self.path.read_bytes(), before)

    def test_corrupt_file_is_persistence_error(self):
        self.path.write_text("[]", encoding="utf-8")
        rc, _, err = self.run_cli("list")
        self.assertEqual(rc, ExitCode.IO_ERROR)
        self.assertIn(str(self.path), err)
        rc, _, _ = self.run_cli("add", "x", "2025-05-01T10:00:00", "2025-05-01T11:00:00")
        self.assertEqual(rc, ExitCode.IO_ERROR)
        self.assertEqual(self.path.read_text(encoding="utf-8"), "[]")

    def test_json_output(self):
        self.run_cli("add", "会議", "2025-05-01T10:00:00", "2025-05-01T11:00:00")
        rc, out, _ = self.run_cli("--output", "json", "list")
        self.assertEqual(rc, 0)
        self.assertEqual(json.loads(out)[0]["subject"], "会議")

    def test_yaml_output_for_add(self):
        rc, out, _ = self.run_cli("-o", "yaml", "add", "Gym", "2025-05-01T07:00:00", "2025-05-01T08:00:00")
        self.assertEqual(rc, 0)
        self.assertIn("added:", out)
        self.assertIn("subject: Gym", out)

    def test_quiet_suppresses_confirmation(self):
        rc, out, _ = self.run_cli("--quiet", "add", "Gym", "2025-05-01T07:00:00", "2025-05-01T08:00:00")
        self.assertEqual(rc, 0)
        self.assertEqual(out, "")
        self.assertTrue(self.path.exists())

    def test_aliases(self):
        self.run_cli("add", "Gym", "2025-05-01T07:00:00", "2025-05-01T08:00:00")
        rc, out, _ = self.run_cli("ls")
        self.assertIn("Gym", out)
        rc, _, _ = self.run_cli("rm", "1")
        self.assertEqual(rc, 0)
        self.assertEqual(read_schedule_file(self.path), {"schedules": []})

    def test_no_command_prints_help(self):
        with capture_output() as (out, _):
            rc = main([])
        self.assertEqual(rc, ExitCode.USAGE)
        self.assertIn("usage:", out.getvalue())

    def test_schedule_file_from_environment(self):
        env_path = self.dir / "env.json"
        with patch.dict(os.environ, {"AGENDA_FILE": str(env_path)}):
            with capture_output():
                rc = main(["add", "Gym", "2025-05-01T07:00:00", "2025-05-01T08:00:00"])
        self.assertEqual(rc, 0)
        self.assertTrue(env_path.exists())

    def test_bad_config_exits_with_config_error(self):
        cfg = self.dir / "config.yaml"
        cfg.write_text("- not\n- a mapping\n", encoding="utf-8")
        with capture_output() as (_, err):
            rc = main(["--config", str(cfg), "list"])
        self.assertEqual(rc, ExitCode.CONFIG_ERROR)
        self.assertIn("mapping", err.getvalue())


if __name__ == "__main__":
    unittest.main()
