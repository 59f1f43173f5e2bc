"""Parsers for spreadsheet-style input grids."""

from .grid_parser import (
    coerce_int,
    grid_to_text,
    parse_grid,
    paste_into_grid,
    read_grid_excel,
    split_rows,
)

__all__ = [
    "coerce_int",
    "grid_to_text",
    "parse_grid",
    "paste_into_grid",
    "read_grid_excel",
    "split_rows",
]
