"""
Tests for spreadsheet grid parsing.

This module tests:
- Numeric coercion of pasted cells
- Parsing clipboard text into grids
- Pasting into an existing grid at an offset
- Reading labeled grids from Excel workbooks
"""

import math

import pytest
from openpyxl import Workbook

from line_sequencer.parsers import coerce_int, grid_to_text, parse_grid, paste_into_grid, read_grid_excel


class TestCoerceInt:

    @pytest.mark.parametrize("value,expected", [
        ("42", 42),
        (" 7 ", 7),
        ("120 units", 120),
        ("7.9", 7),
        ("-3", -3),
        (12, 12),
        (3.99, 3),
    ])
    def test_numbers(self, value, expected):
        assert coerce_int(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", "-", None, math.nan])
    def test_not_numbers(self, value):
        assert coerce_int(value) == 0
        assert coerce_int(value, default=None) is None


class TestParseGrid:

    def test_tabs_and_newlines(self):
        assert parse_grid("1\t2\t3\n4\t5\t6") == [[1, 2, 3], [4, 5, 6]]

    def test_windows_line_endings_and_blank_lines(self):
        assert parse_grid("1\t2\r\n\r\n3\t4\r\n") == [[1, 2], [3, 4]]

    def test_non_numeric_become_zero(self):
        assert parse_grid("10\tx\n\t5") == [[10, 0], [0, 5]]

    def test_fixed_shape_pads_and_clips(self):
        assert parse_grid("1\t2\t3\n4", rows=3, cols=2) == [[1, 2], [4, 0], [0, 0]]

    def test_round_trip_text(self):
        grid = [[100, 0], [30, 45]]
        assert parse_grid(grid_to_text(grid)) == grid


class TestPasteIntoGrid:

    def test_paste_at_offset(self):
        grid = [[0] * 3 for _ in range(3)]
        updated = paste_into_grid(grid, "1\t2\n3\t4", start_row=1, start_col=1)

        assert updated == 4
        assert grid == [[0, 0, 0], [0, 1, 2], [0, 3, 4]]

    def test_clipped_to_bounds(self):
        grid = [[0, 0], [0, 0]]
        updated = paste_into_grid(grid, "1\t2\t3\n4\t5\t6\n7\t8\t9", start_row=1, start_col=0)

        assert updated == 2
        assert grid == [[0, 0], [1, 2]]

    def test_non_numeric_cells_leave_value(self):
        grid = [[9, 9, 9]]
        updated = paste_into_grid(grid, "1\tn/a\t3")

        assert updated == 2
        assert grid == [[1, 9, 3]]

    def test_skip_diagonal(self):
        grid = [[0, 30], [30, 0]]
        updated = paste_into_grid(grid, "5\t6\n7\t8", skip_diagonal=True)

        assert updated == 2
        assert grid == [[0, 6], [7, 0]]


class TestReadGridExcel:

    def test_labeled_sheet(self, tmp_path):
        wb = Workbook()
        ws = wb.active
        ws.title = "Demand"
        ws.append(["Day", "P1", "P2"])
        ws.append(["Mon", 100, 50])
        ws.append(["Tue", 80, "x"])
        path = tmp_path / "demand.xlsx"
        wb.save(path)

        assert read_grid_excel(path, sheet_name="Demand") == [[100, 50], [80, 0]]

    def test_shape(self, tmp_path):
        wb = Workbook()
        ws = wb.active
        ws.append(["From\\To", "P1", "P2"])
        ws.append(["P1", 0, 30])
        ws.append(["P2", 20, 0])
        path = tmp_path / "penalty.xlsx"
        wb.save(path)

        assert read_grid_excel(path, rows=3, cols=1) == [[0], [20], [0]]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_grid_excel(tmp_path / "missing.xlsx")
