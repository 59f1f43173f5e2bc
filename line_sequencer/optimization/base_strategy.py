"""Base class for sequencing strategies.

This module provides an abstract base class that all strategies inherit from,
providing the common solve() entry point: objective normalization, a fresh
line state per call, timing, logging and result labeling.

Under the lostSales objective solve() also builds the schedules the same
strategy produces for the efficiency objectives and keeps whichever loses the
fewest units, so a lostSales run never loses more than a time, cost or
combined run on the same input.
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging
import time

from ..models.planning_config import ObjectiveType, PlanningConfig, StrategyName
from ..models.problem import LineProblem
from ..models.schedule import ScheduleResult
from ..production.changeover import TransitionModel
from .scoring import objective_weights, schedule_key, schedule_score

logger = logging.getLogger(__name__)

#: Objectives whose schedules a lostSales solve also considers
EFFICIENCY_OBJECTIVES = (ObjectiveType.TIME, ObjectiveType.COST, ObjectiveType.COMBINED)


class SequencingStrategy(ABC):
    """
    Abstract base class for weekly sequencing strategies.

    Subclasses implement _solve(); callers use solve(). A strategy instance
    holds only immutable configuration, so one instance may serve several
    threads at once.

    Attributes:
        key: StrategyName used for registration and selection
        display_name: Human-readable name reported as "strategy used"
        config: Planning configuration
        checks_efficiency_runs: Whether a lostSales solve also tries the
            efficiency objectives (off for wrappers whose members already do)
    """

    key: StrategyName
    display_name: str = "Strategy"
    checks_efficiency_runs: bool = True

    def __init__(self, config: Optional[PlanningConfig] = None):
        self.config = config or PlanningConfig()

    def solve(self, problem: LineProblem, objective) -> ScheduleResult:
        """
        Build a weekly schedule for one line under one objective.

        Args:
            problem: Validated demand and transition matrices
            objective: ObjectiveType or its string value

        Returns:
            ScheduleResult labeled with objective and strategy name
        """
        objective = ObjectiveType(objective)
        start_time = time.perf_counter()

        result = self._solve(problem, objective)
        if objective == ObjectiveType.LOST_SALES and self.checks_efficiency_runs:
            result = self._fewest_lost(problem, result)

        elapsed = time.perf_counter() - start_time
        result.objective = objective.value
        if result.strategy is None:
            result.strategy = self.display_name
        result.metadata.setdefault('solve_time_seconds', elapsed)

        logger.info(
            f"{self.display_name} [{objective.value}]: penalty={result.total_penalty}, "
            f"cost={result.total_cost}, lost={result.total_lost_sales}, "
            f"backlog={result.total_ending_backlog} ({elapsed:.3f}s)"
        )
        return result

    def _fewest_lost(self, problem: LineProblem, result: ScheduleResult) -> ScheduleResult:
        """Swap in an efficiency-objective schedule when it loses fewer units."""
        best_key = schedule_key(self.score(result, ObjectiveType.LOST_SALES), result)
        for objective in EFFICIENCY_OBJECTIVES:
            alternative = self._solve(problem, objective)
            key = schedule_key(self.score(alternative, ObjectiveType.LOST_SALES), alternative)
            if key < best_key:
                logger.debug(
                    f"{self.display_name}: {objective.value} ranking loses {alternative.total_lost_sales} "
                    f"units vs {result.total_lost_sales}, keeping it for lostSales"
                )
                result, best_key = alternative, key
                result.metadata['ranked_for'] = objective.value
        return result

    @abstractmethod
    def _solve(self, problem: LineProblem, objective: ObjectiveType) -> ScheduleResult:
        """Strategy-specific construction."""

    def score(self, result: ScheduleResult, objective) -> float:
        """Objective score of a schedule under this strategy's configuration."""
        return schedule_score(result, objective, self.config)

    def weights(self, objective):
        return objective_weights(objective, self.config)

    @staticmethod
    def transitions_for(problem: LineProblem) -> TransitionModel:
        return TransitionModel.from_problem(problem)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_batches={self.config.max_batches}, capacity={self.config.daily_capacity})"
