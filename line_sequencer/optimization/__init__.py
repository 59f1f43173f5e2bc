"""Sequencing strategies for weekly production-line planning.

Every strategy derives from SequencingStrategy and shares the same one-day
simulation step, candidate ranking and scoring. Use create_strategy() to get
one by name, or StrategySelector ("auto") to benchmark all of them.
"""

from .scoring import (
    objective_weights,
    plan_weights,
    objective_metric,
    partial_score,
    schedule_score,
    schedule_key,
    horizon_score,
    is_valid_score,
)
from .parallel import Failure, SearchBudget, fan_out
from .base_strategy import SequencingStrategy
from .greedy import GreedyConstructor, LevelingConstructor
from .lookahead import LookaheadConstructor, next_day_transition_estimate
from .randomized import RandomizedMultiStart
from .branch_and_bound import ExactBranchAndBound, PlanSearch, ordered_subsets
from .strategy_selector import STRATEGY_REGISTRY, StrategySelector, create_strategy

__all__ = [
    # Scoring
    "objective_weights",
    "plan_weights",
    "objective_metric",
    "partial_score",
    "schedule_score",
    "schedule_key",
    "horizon_score",
    "is_valid_score",
    # Fan-out
    "Failure",
    "SearchBudget",
    "fan_out",
    # Strategies
    "SequencingStrategy",
    "GreedyConstructor",
    "LevelingConstructor",
    "LookaheadConstructor",
    "next_day_transition_estimate",
    "RandomizedMultiStart",
    "ExactBranchAndBound",
    "PlanSearch",
    "ordered_subsets",
    # Selection
    "STRATEGY_REGISTRY",
    "StrategySelector",
    "create_strategy",
]
