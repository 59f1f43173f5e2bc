"""Data models for weekly line sequencing."""

from .planning_config import (
    CombinedWeights,
    ObjectiveType,
    PlanningConfig,
    SearchSettings,
    StrategyName,
)
from .problem import LineProblem
from .line_state import LineState
from .schedule import DayResult, ProductionEvent, ScheduleResult

__all__ = [
    "CombinedWeights",
    "ObjectiveType",
    "PlanningConfig",
    "SearchSettings",
    "StrategyName",
    "LineProblem",
    "LineState",
    "DayResult",
    "ProductionEvent",
    "ScheduleResult",
]
