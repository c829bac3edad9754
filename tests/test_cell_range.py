import pytest

from attendance_api.utils.cell_range import (
    DEFAULT_LAYOUT,
    CellRange,
    SheetLayout,
    column_letter,
)


def test_day_columns_map_onto_h_through_s() -> None:
    letters = [column_letter(DEFAULT_LAYOUT.day_column(i)) for i in range(12)]
    assert letters == list("HIJKLMNOPQRS")
    assert len(set(letters)) == 12


def test_day_column_rejects_index_past_header() -> None:
    with pytest.raises(ValueError):
        DEFAULT_LAYOUT.day_column(12)
    with pytest.raises(ValueError):
        DEFAULT_LAYOUT.day_column(-1)


def test_column_letter_handles_multi_letter_columns() -> None:
    assert column_letter(1) == "A"
    assert column_letter(26) == "Z"
    assert column_letter(27) == "AA"


def test_layout_ranges_render_to_a1() -> None:
    assert DEFAULT_LAYOUT.header_range("6A1").to_a1() == "'6A1'!H3:S3"
    assert DEFAULT_LAYOUT.name_range("6A1").to_a1() == "'6A1'!B5:B50"
    assert DEFAULT_LAYOUT.student_column_range("6A1", 10).to_a1() == "'6A1'!J5:J50"
    assert DEFAULT_LAYOUT.summary_range("6A1").to_a1() == "'6A1'!A51:Y51"


def test_single_cell_collapses_and_quotes_sheet_name() -> None:
    assert CellRange.cell("6A1", 10, 7).to_a1() == "'6A1'!J7"
    assert str(CellRange.cell("Lớp O'Neil", 1, 1)) == "'Lớp O''Neil'!A1"


def test_invalid_ranges_are_rejected() -> None:
    with pytest.raises(ValueError):
        CellRange("6A1", 0, 1, 1, 1)
    with pytest.raises(ValueError):
        CellRange("6A1", 5, 5, 4, 5)


def test_custom_layout_moves_ranges() -> None:
    layout = SheetLayout(header_row=1, first_day_col=3, day_columns=2, last_student_row=10)
    assert layout.header_range("X").to_a1() == "'X'!C1:D1"
    assert layout.student_column_range("X", layout.day_column(1)).to_a1() == "'X'!D5:D10"
