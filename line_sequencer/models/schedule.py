"""Schedule result structures returned by every solver strategy."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ProductionEvent:
    """One contiguous production run of a single product within a day.

    Attributes:
        product: Product index
        amount: Units produced (never above max_batch_size)
    """
    product: int
    amount: int

    def __str__(self) -> str:
        return f"P{self.product + 1}: {self.amount} units"


@dataclass
class DayResult:
    """
    Production plan and end-of-day snapshots for one day.

    Attributes:
        day: Day index within the horizon
        events: Ordered production events (at most max_batches)
        inventory: On-hand stock per product at end of day
        lost_sales: Units lost per product on this day
        backlog: Unmet demand per product carried into the next day
        changeover_penalty: Changeover penalty paid on this day
        changeover_cost: Changeover cost paid on this day
    """
    day: int
    events: List[ProductionEvent] = field(default_factory=list)
    inventory: List[int] = field(default_factory=list)
    lost_sales: List[int] = field(default_factory=list)
    backlog: List[int] = field(default_factory=list)
    changeover_penalty: int = 0
    changeover_cost: int = 0

    @property
    def produced(self) -> int:
        """Total units produced on this day."""
        return sum(e.amount for e in self.events)

    @property
    def capacity_used(self) -> int:
        """Production plus changeover penalty charged against daily capacity."""
        return self.produced + self.changeover_penalty


@dataclass
class ScheduleResult:
    """
    Complete weekly schedule for one line under one objective.

    Attributes:
        schedule: DayResult per day, in horizon order
        total_penalty: Sum of changeover penalties (changeover time)
        total_cost: Sum of changeover costs
        total_lost_sales: Units lost across the horizon
        ending_inventory: Stock per product after the last day
        ending_backlog: Unmet demand per product still open after the last day
        objective: Objective the schedule was built for
        strategy: Display name of the strategy that produced it
        metadata: Strategy-specific details (search statistics, fallbacks)
    """
    schedule: List[DayResult] = field(default_factory=list)
    total_penalty: int = 0
    total_cost: int = 0
    total_lost_sales: int = 0
    ending_inventory: List[int] = field(default_factory=list)
    ending_backlog: List[int] = field(default_factory=list)
    objective: Optional[str] = None
    strategy: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_time(self) -> int:
        """Changeover penalty expressed as time (same quantity as total_penalty)."""
        return self.total_penalty

    @property
    def total_ending_backlog(self) -> int:
        return sum(self.ending_backlog)

    def produced_by_product(self) -> List[int]:
        """Units produced per product across the horizon."""
        num_products = len(self.ending_inventory)
        totals = [0] * num_products
        for day in self.schedule:
            for event in day.events:
                totals[event.product] += event.amount
        return totals

    def lost_by_product(self) -> List[int]:
        """Units lost per product across the horizon."""
        num_products = len(self.ending_inventory)
        totals = [0] * num_products
        for day in self.schedule:
            for p, lost in enumerate(day.lost_sales):
                totals[p] += lost
        return totals

    def __str__(self) -> str:
        strategy = f" [{self.strategy}]" if self.strategy else ""
        return (
            f"ScheduleResult{strategy}: penalty={self.total_penalty}, cost={self.total_cost}, "
            f"lost={self.total_lost_sales}, backlog={self.total_ending_backlog}"
        )
