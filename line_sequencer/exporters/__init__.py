"""
Exporters for weekly sequencing results.

This module provides:
- Tab separated "Copy for Excel" text
- pandas tables for schedules, snapshots and objective totals
- A formatted Excel workbook
"""

from .schedule_export import (
    export_schedule_workbook,
    objective_comparison,
    schedule_to_dataframe,
    schedule_to_tsv,
    snapshot_table,
)

__all__ = [
    'export_schedule_workbook',
    'objective_comparison',
    'schedule_to_dataframe',
    'schedule_to_tsv',
    'snapshot_table',
]
