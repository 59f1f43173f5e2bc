"""
Export templates for weekly sequencing results.

This module provides:
1. "Copy for Excel" text of one line's schedule (tab separated)
2. pandas tables of events, daily snapshots and objective totals
3. A formatted Excel workbook combining all lines and objectives
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
import logging

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..constants import DAY_NAMES, DEFAULT_MAX_BATCHES, PRODUCT_NAMES
from ..models.schedule import ScheduleResult

logger = logging.getLogger(__name__)

# Color constants
HEADER_COLOR = "1E88E5"
ALT_ROW_COLOR = "F5F5F5"
LOST_COLOR = "FFCDD2"  # Red

SNAPSHOT_FIELDS = ('inventory', 'lost_sales', 'backlog')


def day_label(day: int, day_names: Sequence[str] = DAY_NAMES) -> str:
    return day_names[day] if 0 <= day < len(day_names) else f"Day {day + 1}"


def product_label(product: int, product_names: Sequence[str] = PRODUCT_NAMES) -> str:
    return product_names[product] if 0 <= product < len(product_names) else f"P{product + 1}"


def schedule_to_tsv(
    result: ScheduleResult,
    max_batches: Optional[int] = None,
    day_names: Sequence[str] = DAY_NAMES,
    product_names: Sequence[str] = PRODUCT_NAMES,
) -> str:
    """
    Tab separated schedule, one row per day, one column per batch slot.

    Empty slots are written as "-".

    Args:
        result: Schedule of one line
        max_batches: Batch columns (default: at least 3, more if a day has more events)

    Returns:
        Text with a trailing newline after every row
    """
    if max_batches is None:
        max_batches = max([DEFAULT_MAX_BATCHES] + [len(d.events) for d in result.schedule])

    lines = ["\t".join(["Day"] + [f"Batch {i + 1}" for i in range(max_batches)])]
    for day in result.schedule:
        row = [day_label(day.day, day_names)]
        for i in range(max_batches):
            if i < len(day.events):
                event = day.events[i]
                row.append(f"{product_label(event.product, product_names)}: {event.amount} units")
            else:
                row.append("-")
        lines.append("\t".join(row))
    return "\n".join(lines) + "\n"


def schedule_to_dataframe(result: ScheduleResult, line: Optional[str] = None) -> pd.DataFrame:
    """Long-format DataFrame with one row per production event."""
    records = []
    for day in result.schedule:
        for batch, event in enumerate(day.events, 1):
            record = {
                'Day': day.day,
                'Day Name': day_label(day.day),
                'Batch': batch,
                'Product': product_label(event.product),
                'Units': event.amount,
            }
            if line is not None:
                record = {'Line': line, **record}
            records.append(record)

    columns = (['Line'] if line is not None else []) + ['Day', 'Day Name', 'Batch', 'Product', 'Units']
    return pd.DataFrame(records, columns=columns)


def snapshot_table(result: ScheduleResult, field: str = 'inventory') -> pd.DataFrame:
    """
    Product x day table of an end-of-day snapshot.

    Args:
        result: Schedule of one line
        field: 'inventory', 'lost_sales' or 'backlog'

    Raises:
        ValueError: On an unknown field
    """
    if field not in SNAPSHOT_FIELDS:
        raise ValueError(f"Unknown snapshot field '{field}', expected one of {SNAPSHOT_FIELDS}")

    data = {day_label(day.day): getattr(day, field) for day in result.schedule}
    num_products = len(result.ending_inventory)
    index = [product_label(p) for p in range(num_products)]
    return pd.DataFrame(data, index=index)


def objective_comparison(results: Mapping[str, ScheduleResult]) -> pd.DataFrame:
    """Totals per objective for one line, indexed by objective."""
    rows = []
    for objective, result in results.items():
        rows.append({
            'Objective': objective,
            'Strategy': result.strategy,
            'Changeover Time': result.total_time,
            'Changeover Cost': result.total_cost,
            'Lost Sales': result.total_lost_sales,
            'Ending Backlog': result.total_ending_backlog,
            'Units Produced': sum(result.produced_by_product()),
        })
    df = pd.DataFrame(rows, columns=[
        'Objective', 'Strategy', 'Changeover Time', 'Changeover Cost',
        'Lost Sales', 'Ending Backlog', 'Units Produced',
    ])
    return df.set_index('Objective')


_THIN = Side(style='thin')
HEADER_FONT = Font(name='Calibri', size=11, bold=True, color='FFFFFF')
HEADER_FILL = PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type='solid')
HEADER_ALIGNMENT = Alignment(horizontal='center', vertical='center', wrap_text=True)
HEADER_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
BAND_FILL = PatternFill(start_color=ALT_ROW_COLOR, end_color=ALT_ROW_COLOR, fill_type='solid')
LOST_FILL = PatternFill(start_color=LOST_COLOR, end_color=LOST_COLOR, fill_type='solid')

#: Widest column (characters) produced by the width fit
MAX_COLUMN_WIDTH = 40


def _band_starts(df: pd.DataFrame, group_columns: Sequence[str]) -> List[bool]:
    """True for every row that opens a new (objective, line, day) group."""
    columns = [c for c in group_columns if c in df.columns]
    if not columns:
        return [True] * len(df)
    keys = list(df[columns].itertuples(index=False, name=None))
    return [i == 0 or keys[i] != keys[i - 1] for i in range(len(keys))]


def write_sheet(
    workbook: Workbook,
    title: str,
    df: pd.DataFrame,
    number_columns: Sequence[str] = (),
    band_by: Sequence[str] = ('Objective', 'Line', 'Day Name'),
    lost_column: Optional[str] = None,
):
    """
    Add a sheet holding df (index dropped) below a styled header row.

    Rows are shaded in alternating bands, one band per group of band_by
    values, so every day of a line reads as one block. When lost_column is
    given, rows with a positive value there are highlighted instead.

    Returns:
        The new worksheet
    """
    worksheet = workbook.create_sheet(title)
    headers = list(df.columns)
    worksheet.append(headers)
    for cell in worksheet[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
        cell.border = HEADER_BORDER

    numeric = {i for i, name in enumerate(headers) if name in number_columns}
    lost_idx = headers.index(lost_column) if lost_column in headers else None

    band = -1
    for row_idx, (starts_band, values) in enumerate(
        zip(_band_starts(df, band_by), df.itertuples(index=False, name=None)), 2
    ):
        if starts_band:
            band += 1
        if lost_idx is not None and values[lost_idx] > 0:
            fill = LOST_FILL
        else:
            fill = BAND_FILL if band % 2 == 1 else None

        for col_idx, value in enumerate(values):
            cell = worksheet.cell(row=row_idx, column=col_idx + 1, value=value.item() if hasattr(value, 'item') else value)
            if col_idx in numeric:
                cell.number_format = '#,##0'
            if fill is not None:
                cell.fill = fill

    if headers:
        last = get_column_letter(len(headers))
        worksheet.auto_filter.ref = f"A1:{last}{max(len(df) + 1, 1)}"
        for col_idx, name in enumerate(headers, 1):
            longest = max([len(str(name))] + [len(str(v)) for v in df[name].tolist()])
            worksheet.column_dimensions[get_column_letter(col_idx)].width = min(longest + 2, MAX_COLUMN_WIDTH)
    worksheet.freeze_panes = 'A2'
    return worksheet


def export_schedule_workbook(
    results: Mapping[str, Mapping[str, ScheduleResult]],
    output_path: Union[Path, str],
) -> str:
    """
    Export schedules of every objective and line to a formatted Excel file.

    Creates 3 sheets:
    1. Production Schedule - one row per production event
    2. Daily Snapshots - inventory, lost sales and backlog per day and product
    3. Objective Comparison - totals per objective and line

    Args:
        results: results[objective][line] -> ScheduleResult
        output_path: Path to save Excel file

    Returns:
        Path to created file
    """
    wb = Workbook()
    wb.remove(wb.active)

    frames = []
    for objective, by_line in results.items():
        for line, result in by_line.items():
            df = schedule_to_dataframe(result, line=line)
            df.insert(0, 'Objective', objective)
            df.insert(2, 'Strategy', result.strategy)
            frames.append(df)
    schedule_columns = ['Objective', 'Line', 'Strategy', 'Day', 'Day Name', 'Batch', 'Product', 'Units']
    df_schedule = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame(columns=schedule_columns)
    write_sheet(wb, "Production Schedule", df_schedule, number_columns=['Units'])

    snapshot_rows: List[Dict[str, Any]] = []
    for objective, by_line in results.items():
        for line, result in by_line.items():
            for day in result.schedule:
                for p in range(len(day.inventory)):
                    snapshot_rows.append({
                        'Objective': objective,
                        'Line': line,
                        'Day Name': day_label(day.day),
                        'Product': product_label(p),
                        'Inventory': day.inventory[p],
                        'Lost Sales': day.lost_sales[p],
                        'Backlog': day.backlog[p],
                    })
    df_snapshots = pd.DataFrame(snapshot_rows, columns=[
        'Objective', 'Line', 'Day Name', 'Product', 'Inventory', 'Lost Sales', 'Backlog',
    ])
    write_sheet(
        wb, "Daily Snapshots", df_snapshots,
        number_columns=['Inventory', 'Lost Sales', 'Backlog'],
        lost_column='Lost Sales',
    )

    frames = []
    for objective, by_line in results.items():
        for line, result in by_line.items():
            df = objective_comparison({objective: result}).reset_index()
            df.insert(1, 'Line', line)
            frames.append(df)
    comparison_columns = ['Objective', 'Line', 'Strategy', 'Changeover Time', 'Changeover Cost',
                          'Lost Sales', 'Ending Backlog', 'Units Produced']
    df_comparison = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame(columns=comparison_columns)
    write_sheet(
        wb, "Objective Comparison", df_comparison,
        number_columns=comparison_columns[3:],
        band_by=('Objective',),
        lost_column='Lost Sales',
    )

    output_path = str(output_path)
    wb.save(output_path)
    logger.info(f"Exported {len(df_schedule)} production events to {output_path}")
    return output_path
