"""Randomized multi-start search.

Despite the "Simulated Annealing" display name shown to planners,
this is a fixed-probability epsilon-greedy multi-start with no temperature
schedule and no acceptance criterion.

Each iteration builds a full week. At every batch-selection step the
remaining candidates are re-ranked against the current setup; with
probability epsilon a uniformly random remaining candidate is picked instead
of the top-ranked one. Iteration 0 always runs with epsilon 0, so the search
never scores worse than its own pure ranked pass. The best-scoring week
across all iterations is kept, less ending backlog breaking ties.
"""

from typing import List, Optional
import logging
import random

from ..models.planning_config import ObjectiveType, StrategyName
from ..models.problem import LineProblem
from ..models.schedule import ScheduleResult
from ..production.day_state import DayState, simulate_week
from ..production.ranking import rank_candidates
from .base_strategy import SequencingStrategy
from .parallel import fan_out
from .scoring import is_valid_score, schedule_key

logger = logging.getLogger(__name__)


class RandomizedMultiStart(SequencingStrategy):
    """Epsilon-greedy restarts, keeping the lowest objective score."""

    key = StrategyName.SEARCH
    display_name = "Simulated Annealing (Global)"

    def _solve(self, problem: LineProblem, objective: ObjectiveType) -> ScheduleResult:
        settings = self.config.search

        def run_iteration(iteration: int):
            rng = self._rng(iteration)
            epsilon = settings.epsilon if iteration > 0 else 0.0
            result = self.construct(problem, objective, epsilon, rng)
            return result, self.score(result, objective)

        outcomes = fan_out(run_iteration, range(settings.iterations), settings.max_workers)

        best: Optional[ScheduleResult] = None
        best_score = None
        best_key = None
        best_iteration = None
        skipped = 0
        for iteration, (result, score) in enumerate(outcomes):
            if not is_valid_score(score):
                skipped += 1
                continue
            rank = schedule_key(score, result)
            if best_key is None or rank < best_key:
                best, best_key, best_score, best_iteration = result, rank, score, iteration

        if best is None:
            logger.warning(
                f"All {settings.iterations} randomized iterations produced invalid scores; "
                f"falling back to a pure greedy pass"
            )
            best = self.construct(problem, objective, 0.0, self._rng(0))
            best.metadata['fallback'] = 'epsilon_zero'

        best.metadata.update({
            'iterations': settings.iterations,
            'epsilon': settings.epsilon,
            'skipped_iterations': skipped,
            'best_iteration': best_iteration,
        })
        logger.debug(f"Multi-start best iteration {best_iteration} score={best_score}")
        return best

    def _rng(self, iteration: int) -> random.Random:
        seed = self.config.search.seed
        return random.Random(None if seed is None else seed + iteration)

    def construct(
        self,
        problem: LineProblem,
        objective: ObjectiveType,
        epsilon: float,
        rng: random.Random,
    ) -> ScheduleResult:
        """One epsilon-greedy week."""
        transitions = self.transitions_for(problem)
        weight_penalty, weight_cost = self.weights(objective)
        max_batch_size = self.config.max_batch_size

        def plan_day(day_state: DayState) -> None:
            remaining: List = list(day_state.candidates)
            while remaining and not day_state.exhausted:
                ranked = rank_candidates(
                    remaining,
                    day_state.state.last_product,
                    day_state.remaining_capacity,
                    transitions,
                    objective,
                    weight_penalty,
                    weight_cost,
                    max_batch_size,
                )
                index = rng.randrange(len(ranked)) if rng.random() < epsilon else 0
                pick = ranked.pop(index)
                remaining = ranked
                day_state.produce(pick.product)

        return simulate_week(problem.demand, transitions, self.config, plan_day)
