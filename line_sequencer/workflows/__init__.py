"""Workflows that solve complete weekly plans."""

from .weekly_workflow import WeeklyPlanResult, WeeklySequencingWorkflow, solve_line

__all__ = [
    "WeeklyPlanResult",
    "WeeklySequencingWorkflow",
    "solve_line",
]
