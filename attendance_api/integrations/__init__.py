"""Google Sheets integrations for the attendance API."""

from .google_sheets_attendance import (
    read_day_attendance,
    read_summary,
    resolve_day_column,
    write_day_attendance,
)
from .sheets_client import SheetsClient, SheetsClientHandle

__all__ = [
    "SheetsClient",
    "SheetsClientHandle",
    "read_day_attendance",
    "read_summary",
    "resolve_day_column",
    "write_day_attendance",
]
