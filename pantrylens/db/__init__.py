"""SQLite database module for scan history."""

from .scans import ScanHistoryDB
from .schema import ensure_schema

__all__ = [
    "ScanHistoryDB",
    "ensure_schema",
]
