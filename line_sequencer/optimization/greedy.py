"""Greedy constructors: the baseline strategy and its leveled variant.

GreedyConstructor ranks the day's candidates once, at the start of the day,
and produces them in that order until the batch limit or capacity is
reached. No backtracking; identical inputs give identical schedules. It is the
fallback for every other strategy.
"""

import logging

from ..models.planning_config import ObjectiveType, StrategyName
from ..models.problem import LineProblem
from ..models.schedule import ScheduleResult
from ..production.day_state import DayState, simulate_week
from ..production.leveling import level_demand
from ..production.ranking import rank_candidates
from .base_strategy import SequencingStrategy

logger = logging.getLogger(__name__)


class GreedyConstructor(SequencingStrategy):
    """Single deterministic pass over the horizon using the shared ranking."""

    key = StrategyName.GREEDY
    display_name = "Greedy (Standard)"

    def _solve(self, problem: LineProblem, objective: ObjectiveType) -> ScheduleResult:
        return self.construct(problem.demand, problem, objective)

    def construct(self, demand, problem: LineProblem, objective: ObjectiveType) -> ScheduleResult:
        """Run the greedy pass over an explicit demand grid."""
        transitions = self.transitions_for(problem)
        weight_penalty, weight_cost = self.weights(objective)

        def plan_day(day_state: DayState) -> None:
            ranked = rank_candidates(
                day_state.candidates,
                day_state.state.last_product,
                day_state.remaining_capacity,
                transitions,
                objective,
                weight_penalty,
                weight_cost,
                self.config.max_batch_size,
                lookahead=self.lookahead_term(demand, day_state.day, transitions, weight_penalty, weight_cost),
            )
            for candidate in ranked:
                if day_state.exhausted:
                    break
                day_state.produce(candidate.product)

        return simulate_week(demand, transitions, self.config, plan_day)

    def lookahead_term(self, demand, day, transitions, weight_penalty, weight_cost):
        """Extra ranking score per product; none for the plain greedy pass."""
        return None


class LevelingConstructor(GreedyConstructor):
    """Greedy pass over a leveled copy of the demand grid."""

    key = StrategyName.LEVELING
    display_name = "Production Leveling"

    def _solve(self, problem: LineProblem, objective: ObjectiveType) -> ScheduleResult:
        leveled = level_demand(problem.demand)
        result = self.construct(leveled, problem, objective)
        result.metadata['leveled_demand'] = leveled
        return result
