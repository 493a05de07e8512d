"""Shared regex patterns for argument and file parsing."""
from __future__ import annotations

# Strict local timestamp, seconds precision, no offset: 2025-05-01T10:00:00
RE_TIMESTAMP = r'^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\Z'

# Entry identifier as typed on the command line
RE_ENTRY_ID = r'^\s*\+?(\d+)\s*$'
