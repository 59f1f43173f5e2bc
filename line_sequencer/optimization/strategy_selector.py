"""Strategy registry and the "auto" selector.

The registry order is also the tie-break order: when two strategies reach the
same score and ending backlog, the one registered first wins.
"""

from typing import Dict, List, Optional, Tuple, Type
import logging

from ..models.planning_config import ObjectiveType, PlanningConfig, StrategyName
from ..models.problem import LineProblem
from ..models.schedule import ScheduleResult
from .base_strategy import SequencingStrategy
from .branch_and_bound import ExactBranchAndBound
from .greedy import GreedyConstructor, LevelingConstructor
from .lookahead import LookaheadConstructor
from .parallel import Failure, fan_out
from .randomized import RandomizedMultiStart
from .scoring import is_valid_score, schedule_key

logger = logging.getLogger(__name__)


STRATEGY_REGISTRY: Dict[StrategyName, Type[SequencingStrategy]] = {
    StrategyName.GREEDY: GreedyConstructor,
    StrategyName.LEVELING: LevelingConstructor,
    StrategyName.LOOKAHEAD: LookaheadConstructor,
    StrategyName.SEARCH: RandomizedMultiStart,
    StrategyName.EXACT: ExactBranchAndBound,
}


class StrategySelector(SequencingStrategy):
    """
    Benchmark every registered strategy and keep the lowest score.

    Equal scores go to the schedule with less ending backlog, then to the
    strategy registered first.

    A strategy that raises, or whose score is not finite, is logged and
    skipped. If nothing survives, the greedy constructor is run directly.
    """

    key = StrategyName.AUTO
    display_name = "Auto"
    checks_efficiency_runs = False

    def __init__(
        self,
        config: Optional[PlanningConfig] = None,
        candidates: Optional[List[StrategyName]] = None,
    ):
        super().__init__(config)
        self.candidates = list(candidates) if candidates is not None else list(STRATEGY_REGISTRY)

    def _solve(self, problem: LineProblem, objective: ObjectiveType) -> ScheduleResult:
        def run(name: StrategyName) -> Tuple[ScheduleResult, float]:
            result = create_strategy(name, self.config).solve(problem, objective)
            return result, self.score(result, objective)

        outcomes = fan_out(run, self.candidates, self.config.search.max_workers, capture_errors=True)

        best: Optional[ScheduleResult] = None
        best_key = None
        benchmark = {}
        skipped = []

        for name, outcome in zip(self.candidates, outcomes):
            if isinstance(outcome, Failure):
                logger.warning(f"Strategy '{name.value}' failed and was skipped: {outcome.error}")
                skipped.append(name.value)
                continue

            result, score = outcome
            if not is_valid_score(score):
                logger.warning(f"Strategy '{name.value}' returned a non-finite score and was skipped")
                skipped.append(name.value)
                continue

            benchmark[name.value] = score
            rank = schedule_key(score, result)
            if best_key is None or rank < best_key:
                best, best_key = result, rank

        if best is None:
            logger.warning("No strategy produced a usable schedule; falling back to greedy")
            best = GreedyConstructor(self.config).solve(problem, objective)
            best.metadata['fallback'] = 'greedy'

        best.metadata['benchmark_scores'] = benchmark
        best.metadata['skipped_strategies'] = skipped
        logger.debug(f"Auto selected '{best.strategy}' for {objective.value} from {benchmark}")
        return best


def create_strategy(name, config: Optional[PlanningConfig] = None) -> SequencingStrategy:
    """
    Instantiate a strategy by name.

    Args:
        name: StrategyName or its string value ("auto" returns the selector)
        config: Planning configuration shared by the strategy

    Returns:
        Strategy instance
    """
    name = StrategyName(name)
    if name == StrategyName.AUTO:
        return StrategySelector(config)
    return STRATEGY_REGISTRY[name](config)
