#!/usr/bin/env python3
"""High level helpers for the per-class attendance tabs.

Each class (``6A1``, ``7B2`` ...) is one tab of the attendance workbook
with a rigid layout described by :class:`SheetLayout`.  The functions
here take any object offering ``read_range``, ``read_ranges`` and
``batch_write`` (normally a :class:`SheetsClient`) so the HTTP routes and
the command line below share exactly the same behaviour.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..errors import DayNotFoundError
from ..utils.cell_range import DEFAULT_LAYOUT, CellRange, SheetLayout, column_letter

log = logging.getLogger(__name__)

# Zero-based offsets inside the summary row, with the value used when the
# row is shorter than the offset.
SUMMARY_FIELDS = (
    ("totalStudents", 0, 0),
    ("presentCount", 19, 0),
    ("paidLessons", 21, 0),
    ("revenue", 24, 0),
    ("dept", 25, 0),
    ("attendanceRate", 23, "0%"),
)


def _first_cell(rows: List[List[Any]], idx: int) -> Any:
    if idx < len(rows) and rows[idx]:
        return rows[idx][0]
    return ""


def _clean(value: Any) -> str:
    return str(value if value is not None else "").strip()


# ---------------------------------------------------------------------------
# Day column resolver
# ---------------------------------------------------------------------------


def find_day_index(header: Iterable[Any], day_label: str) -> Optional[int]:
    wanted = _clean(day_label)
    for idx, cell in enumerate(header):
        if _clean(cell) == wanted:
            return idx
    return None


def resolve_day_column(
    client, class_name: str, day_label: str, layout: SheetLayout = DEFAULT_LAYOUT
) -> int:
    """Return the 1-based sheet column whose header matches *day_label*."""
    sheet = _clean(class_name)
    rows = client.read_range(layout.header_range(sheet))
    header = rows[0] if rows else []

    idx = find_day_index(header, day_label)
    if idx is None:
        log.info(
            "Day label not found in header",
            extra={"class_name": class_name, "day_label": day_label},
        )
        raise DayNotFoundError(
            f"Day '{day_label}' not found in {layout.header_range(sheet).to_a1()}"
        )

    col = layout.day_column(idx)
    log.debug("Resolved day %s of %s to column %s", day_label, class_name, column_letter(col))
    return col


# ---------------------------------------------------------------------------
# Reader / writer
# ---------------------------------------------------------------------------


def build_day_records(
    names: List[List[Any]], statuses: List[List[Any]], layout: SheetLayout = DEFAULT_LAYOUT
) -> List[Dict[str, Any]]:
    return [
        {
            "row": layout.student_row(idx),
            "name": _first_cell(names, idx),
            "status": _first_cell(statuses, idx),
        }
        for idx in range(len(names))
    ]


def read_day_attendance(
    client, class_name: str, day_label: str, layout: SheetLayout = DEFAULT_LAYOUT
) -> Dict[str, Any]:
    log.info("Reading attendance", extra={"class_name": class_name, "day_label": day_label})
    sheet = _clean(class_name)
    col = resolve_day_column(client, sheet, day_label, layout)

    names, statuses = client.read_ranges(
        [layout.name_range(sheet), layout.student_column_range(sheet, col)]
    )
    data = build_day_records(names, statuses, layout)

    log.info("Attendance read: %d students", len(data), extra={"class_name": class_name})
    return {
        "className": class_name,
        "dayLabel": day_label,
        "column": column_letter(col),
        "data": data,
    }


def name_row_index(names: List[List[Any]], layout: SheetLayout = DEFAULT_LAYOUT) -> Dict[str, int]:
    """Map trimmed student names to their sheet rows; later duplicates win."""
    index: Dict[str, int] = {}
    for idx in range(len(names)):
        name = _clean(_first_cell(names, idx))
        if name:
            index[name] = layout.student_row(idx)
    return index


def write_day_attendance(
    client,
    class_name: str,
    day_label: str,
    items: List[Mapping[str, Any]],
    layout: SheetLayout = DEFAULT_LAYOUT,
) -> Dict[str, Any]:
    log.info(
        "Writing %d attendance items",
        len(items),
        extra={"class_name": class_name, "day_label": day_label},
    )
    sheet = _clean(class_name)
    col = resolve_day_column(client, sheet, day_label, layout)
    rows_by_name = name_row_index(client.read_range(layout.name_range(sheet)), layout)

    updates = []
    unmatched = []
    for item in items:
        name = item.get("name")
        status = item.get("status")
        row = rows_by_name.get(_clean(name))
        if row is None:
            unmatched.append(name)
            continue
        updates.append((CellRange.cell(sheet, col, row), "" if status is None else status))

    if unmatched:
        log.warning(
            "Skipped %d unknown students", len(unmatched), extra={"class_name": class_name, "names": unmatched}
        )

    updated = client.batch_write(updates)
    log.info(
        "Attendance written to %d cells in column %s",
        updated,
        column_letter(col),
        extra={"class_name": class_name},
    )
    return {"success": True, "updatedCells": updated, "unmatched": unmatched}


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def extract_summary(row: List[Any]) -> Dict[str, Any]:
    return {
        field: row[offset] if offset < len(row) else default
        for field, offset, default in SUMMARY_FIELDS
    }


def read_summary(client, class_name: str, layout: SheetLayout = DEFAULT_LAYOUT) -> Dict[str, Any]:
    log.info("Reading summary", extra={"class_name": class_name})
    rows = client.read_range(layout.summary_range(_clean(class_name)))
    summary = {"className": class_name}
    summary.update(extract_summary(rows[0] if rows else []))
    return summary


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------


USAGE = (
    "Usage:\n"
    "  day CLASS_NAME DAY_LABEL\n"
    "  summary CLASS_NAME\n"
    "Credentials are read from GOOGLE_SERVICE_ACCOUNT_JSON."
)


def main(argv: List[str]) -> int:
    from ..config import Config
    from .sheets_client import SheetsClient

    mode = argv[1].lower() if len(argv) > 1 else ""
    if not ((mode == "day" and len(argv) == 4) or (mode == "summary" and len(argv) == 3)):
        print(USAGE)
        return 1

    level = os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING))
    client = SheetsClient.from_credentials(
        Config.GOOGLE_SERVICE_ACCOUNT_JSON, Config.SPREADSHEET_ID
    )
    if mode == "day":
        result = read_day_attendance(client, argv[2], argv[3])
    else:
        result = read_summary(client, argv[2])
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
