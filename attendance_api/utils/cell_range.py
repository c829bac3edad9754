"""Typed cell addresses for the class attendance sheets.

Every range the service touches is built from a :class:`SheetLayout` and
rendered to A1 notation by :meth:`CellRange.to_a1`, so no caller ever
concatenates column letters and row numbers by hand.
"""

from __future__ import annotations

from dataclasses import dataclass

from gspread.utils import absolute_range_name, rowcol_to_a1


def column_letter(col: int) -> str:
    """Return the letter(s) for a 1-based column index (8 -> ``"H"``)."""
    if col < 1:
        raise ValueError(f"Column index must be >= 1, got {col}")
    return rowcol_to_a1(1, col)[:-1]


@dataclass(frozen=True)
class CellRange:
    sheet: str
    start_col: int
    start_row: int
    end_col: int
    end_row: int

    def __post_init__(self):
        if self.start_col < 1 or self.start_row < 1:
            raise ValueError("Cell ranges are 1-based")
        if self.end_col < self.start_col or self.end_row < self.start_row:
            raise ValueError(
                f"Range end ({self.end_col}, {self.end_row}) precedes start "
                f"({self.start_col}, {self.start_row})"
            )

    @classmethod
    def cell(cls, sheet: str, col: int, row: int) -> "CellRange":
        return cls(sheet, col, row, col, row)

    @property
    def is_single_cell(self) -> bool:
        return self.start_col == self.end_col and self.start_row == self.end_row

    def to_a1(self) -> str:
        start = rowcol_to_a1(self.start_row, self.start_col)
        if self.is_single_cell:
            return absolute_range_name(self.sheet, start)
        end = rowcol_to_a1(self.end_row, self.end_col)
        return absolute_range_name(self.sheet, f"{start}:{end}")

    def __str__(self) -> str:
        return self.to_a1()


@dataclass(frozen=True)
class SheetLayout:
    """Fixed positions inside every class tab.

    Row 3 H:S holds the day headers, B5:B50 the student names, the same
    rows in H:S the per-day statuses and row 51 A:Y the summary figures.
    """

    header_row: int = 3
    first_day_col: int = 8
    day_columns: int = 12
    name_col: int = 2
    first_student_row: int = 5
    last_student_row: int = 50
    summary_row: int = 51
    summary_first_col: int = 1
    summary_last_col: int = 25

    @property
    def last_day_col(self) -> int:
        return self.first_day_col + self.day_columns - 1

    def day_column(self, index: int) -> int:
        """Map a zero-based header index to its sheet column."""
        if not 0 <= index < self.day_columns:
            raise ValueError(
                f"Header index {index} is outside the {self.day_columns} day columns"
            )
        return self.first_day_col + index

    def header_range(self, sheet: str) -> CellRange:
        return CellRange(
            sheet, self.first_day_col, self.header_row, self.last_day_col, self.header_row
        )

    def name_range(self, sheet: str) -> CellRange:
        return self.student_column_range(sheet, self.name_col)

    def student_column_range(self, sheet: str, col: int) -> CellRange:
        return CellRange(sheet, col, self.first_student_row, col, self.last_student_row)

    def student_row(self, offset: int) -> int:
        return self.first_student_row + offset

    def summary_range(self, sheet: str) -> CellRange:
        return CellRange(
            sheet,
            self.summary_first_col,
            self.summary_row,
            self.summary_last_col,
            self.summary_row,
        )


DEFAULT_LAYOUT = SheetLayout()
