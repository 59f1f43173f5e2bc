"""Parsers for spreadsheet-style integer grids.

Two sources are supported:
- Clipboard text copied from a spreadsheet: rows separated by newlines,
  cells by tabs.
- A sheet of an Excel workbook whose first row and first column hold labels.

Cells are coerced the way a spreadsheet paste is: the leading integer of the
cell is taken ("120 units" -> 120, "7.9" -> 7), anything without one is not a
number.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union
import logging
import re

import pandas as pd

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')
_ROW_SPLIT = re.compile(r'\r\n|\n|\r')


def coerce_int(value, default: Optional[int] = 0) -> Optional[int]:
    """
    Leading integer of a cell value.

    Args:
        value: Cell content (str, int, float or None)
        default: Returned when the cell holds no number

    Returns:
        Parsed integer or default
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return default if value != value else int(value)

    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else default


def split_rows(text: str) -> List[List[str]]:
    """Split clipboard text into rows of raw cells, dropping blank lines."""
    return [line.split('\t') for line in _ROW_SPLIT.split(text) if line.strip() != '']


def parse_grid(text: str, rows: Optional[int] = None, cols: Optional[int] = None) -> List[List[int]]:
    """
    Parse clipboard text into an integer grid.

    Non-numeric cells become 0. When rows/cols are given the grid is padded
    with zeros or clipped to exactly that shape.

    >>> parse_grid("1\\t2\\n3\\tx")
    [[1, 2], [3, 0]]
    """
    raw = split_rows(text)
    parsed = [[coerce_int(cell) for cell in row] for row in raw]

    if rows is None:
        rows = len(parsed)
    if cols is None:
        cols = max((len(row) for row in parsed), default=0)

    grid = [[0] * cols for _ in range(rows)]
    for r, row in enumerate(parsed[:rows]):
        for c, value in enumerate(row[:cols]):
            grid[r][c] = value
    return grid


def paste_into_grid(
    grid: List[List[int]],
    text: str,
    start_row: int = 0,
    start_col: int = 0,
    skip_diagonal: bool = False,
) -> int:
    """
    Paste clipboard text into an existing grid, anchored at (start_row, start_col).

    Cells falling outside the grid are dropped. Non-numeric cells leave the
    target unchanged. With skip_diagonal (changeover grids) cells landing on
    the diagonal are ignored too.

    Args:
        grid: Grid updated in place
        text: Tab/newline separated clipboard text
        start_row: Target row of the first pasted cell
        start_col: Target column of the first pasted cell
        skip_diagonal: Leave grid[i][i] untouched

    Returns:
        Number of cells updated
    """
    updated = 0
    for r_offset, row in enumerate(split_rows(text)):
        target_row = start_row + r_offset
        if target_row < 0 or target_row >= len(grid):
            continue
        for c_offset, cell in enumerate(row):
            target_col = start_col + c_offset
            if target_col < 0 or target_col >= len(grid[target_row]):
                continue
            if skip_diagonal and target_row == target_col:
                continue
            value = coerce_int(cell, default=None)
            if value is None:
                continue
            grid[target_row][target_col] = value
            updated += 1

    logger.debug(f"Pasted {updated} values at ({start_row}, {start_col})")
    return updated


def read_grid_excel(
    file_path: Union[Path, str],
    sheet_name: Union[str, int] = 0,
    rows: Optional[int] = None,
    cols: Optional[int] = None,
) -> List[List[int]]:
    """
    Read a labeled integer grid from an Excel sheet.

    The first row holds column labels (products) and the first column row
    labels (days or "from" products); both are discarded.

    Raises:
        FileNotFoundError: If file does not exist
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    df = pd.read_excel(file_path, sheet_name=sheet_name, header=0, index_col=0, engine='openpyxl')

    if rows is None:
        rows = len(df.index)
    if cols is None:
        cols = len(df.columns)

    grid = [[0] * cols for _ in range(rows)]
    for r, (_, series) in enumerate(df.iloc[:rows, :cols].iterrows()):
        for c, value in enumerate(series.tolist()):
            grid[r][c] = coerce_int(value)
    return grid


def grid_to_text(grid: Sequence[Sequence[int]]) -> str:
    """Inverse of parse_grid for pasting back into a spreadsheet."""
    return "\n".join("\t".join(str(v) for v in row) for row in grid)
