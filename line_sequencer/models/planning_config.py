"""
Pydantic configuration for a weekly sequencing solve.

All capacity limits, objective weights and search parameters travel in one
immutable PlanningConfig that is passed explicitly into every solver call.
Nothing is read from module-level mutable state, so independent solves for
different lines or objectives can run side by side.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..constants import (
    DEFAULT_COST_WEIGHT,
    DEFAULT_DAILY_CAPACITY,
    DEFAULT_MAX_BATCH_SIZE,
    DEFAULT_MAX_BATCHES,
    DEFAULT_PENALTY_WEIGHT,
    EXACT_BRANCHING_FACTOR,
    EXACT_NODE_BUDGET,
    HORIZON_DAYS,
    LOOKAHEAD_DISCOUNT,
    SEARCH_EPSILON,
    SEARCH_ITERATIONS,
    WEIGHT_PERCENT_TOTAL,
)


class ObjectiveType(str, Enum):
    """Scalar goal minimized by a solve."""
    TIME = "time"
    COST = "cost"
    COMBINED = "combined"
    LOST_SALES = "lostSales"


class StrategyName(str, Enum):
    """Solver strategies selectable by the caller."""
    AUTO = "auto"
    GREEDY = "greedy"
    LEVELING = "leveling"
    LOOKAHEAD = "lookahead"
    SEARCH = "search"
    EXACT = "exact"


class CombinedWeights(BaseModel):
    """Percentage split between changeover penalty and cost for the combined objective."""
    penalty_weight: int = Field(default=DEFAULT_PENALTY_WEIGHT, ge=0, le=WEIGHT_PERCENT_TOTAL)
    cost_weight: int = Field(default=DEFAULT_COST_WEIGHT, ge=0, le=WEIGHT_PERCENT_TOTAL)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def weights_sum_to_total(self):
        """The two shares must add up to 100 percent."""
        total = self.penalty_weight + self.cost_weight
        if total != WEIGHT_PERCENT_TOTAL:
            raise ValueError(
                f"penalty_weight ({self.penalty_weight}) + cost_weight ({self.cost_weight}) "
                f"must equal {WEIGHT_PERCENT_TOTAL}, got {total}"
            )
        return self

    @classmethod
    def from_penalty_share(cls, value: int) -> 'CombinedWeights':
        """Clamp a penalty share to 0..100 and derive the cost share as its complement."""
        penalty = min(WEIGHT_PERCENT_TOTAL, max(0, int(value)))
        return cls(penalty_weight=penalty, cost_weight=WEIGHT_PERCENT_TOTAL - penalty)

    @classmethod
    def from_cost_share(cls, value: int) -> 'CombinedWeights':
        """Clamp a cost share to 0..100 and derive the penalty share as its complement."""
        cost = min(WEIGHT_PERCENT_TOTAL, max(0, int(value)))
        return cls(penalty_weight=WEIGHT_PERCENT_TOTAL - cost, cost_weight=cost)

    def as_fractions(self) -> Tuple[float, float]:
        """Return (penalty, cost) weights as fractions of one."""
        return (
            self.penalty_weight / WEIGHT_PERCENT_TOTAL,
            self.cost_weight / WEIGHT_PERCENT_TOTAL,
        )


class SearchSettings(BaseModel):
    """Tuning knobs for the randomized and branch-and-bound strategies.

    Attributes:
        iterations: Epsilon-greedy restarts in the multi-start search
        epsilon: Probability of a random pick at each batch-selection step
        seed: Base seed; iteration i uses seed + i (None = nondeterministic)
        lookahead_discount: Weight of the next-day transition estimate
        branching_factor: Plans kept per branch-and-bound node
        node_budget: Hard cap on branch-and-bound nodes per solve
        deadline_seconds: Wall-clock limit for one branch-and-bound solve
        max_workers: Worker threads for fan-out (1 = run inline)
    """
    iterations: int = Field(default=SEARCH_ITERATIONS, ge=1)
    epsilon: float = Field(default=SEARCH_EPSILON, ge=0.0, le=1.0)
    seed: Optional[int] = Field(default=None)
    lookahead_discount: float = Field(default=LOOKAHEAD_DISCOUNT, ge=0.0)
    branching_factor: int = Field(default=EXACT_BRANCHING_FACTOR, ge=1)
    node_budget: int = Field(default=EXACT_NODE_BUDGET, ge=1)
    deadline_seconds: Optional[float] = Field(default=None, gt=0)
    max_workers: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True)


class PlanningConfig(BaseModel):
    """Capacity constants, objective weights and strategy for one solve.

    Attributes:
        daily_capacity: Units plus changeover penalty consumable per day
        max_batch_size: Maximum units in one production event
        max_batches: Maximum production events per day
        weights: Penalty/cost split used by the combined objective
        strategy: Strategy to run ("auto" benchmarks all of them)
        horizon_days: Number of days in the horizon
        search: Parameters of the search-based strategies
    """
    daily_capacity: int = Field(default=DEFAULT_DAILY_CAPACITY, ge=0)
    max_batch_size: int = Field(default=DEFAULT_MAX_BATCH_SIZE, ge=0)
    max_batches: int = Field(default=DEFAULT_MAX_BATCHES, ge=0)
    weights: CombinedWeights = Field(default_factory=CombinedWeights)
    strategy: StrategyName = Field(default=StrategyName.AUTO)
    horizon_days: int = Field(default=HORIZON_DAYS, ge=1)
    search: SearchSettings = Field(default_factory=SearchSettings)

    model_config = ConfigDict(frozen=True)

    def with_strategy(self, strategy) -> 'PlanningConfig':
        """Copy of this config with a different strategy."""
        return self.model_copy(update={'strategy': StrategyName(strategy)})
