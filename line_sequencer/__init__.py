"""Weekly production-line sequencing.

Decides what each line produces on each day of a 7-day horizon under limited
daily capacity and changeovers, minimizing changeover time, changeover cost,
a weighted combination of the two, or lost sales.
"""

from .models import (
    CombinedWeights,
    DayResult,
    LineProblem,
    ObjectiveType,
    PlanningConfig,
    ProductionEvent,
    ScheduleResult,
    SearchSettings,
    StrategyName,
)
from .optimization import StrategySelector, create_strategy, schedule_score
from .validation import ConfigurationError, build_config, validate_problem
from .workflows import WeeklyPlanResult, WeeklySequencingWorkflow, solve_line

__version__ = "1.0.0"

__all__ = [
    "CombinedWeights",
    "DayResult",
    "LineProblem",
    "ObjectiveType",
    "PlanningConfig",
    "ProductionEvent",
    "ScheduleResult",
    "SearchSettings",
    "StrategyName",
    "StrategySelector",
    "create_strategy",
    "schedule_score",
    "ConfigurationError",
    "build_config",
    "validate_problem",
    "WeeklyPlanResult",
    "WeeklySequencingWorkflow",
    "solve_line",
]
