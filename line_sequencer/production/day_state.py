"""One-day simulation step of a production line.

A DayState opens a day by serving demand from inventory, exposes the open
candidates, applies production events against the day's capacity budget and
closes the day by settling lost sales and backlog.

Backlog policy (applied in close()):
    - Unmet mandatory demand (yesterday's backlog) is LOST and cleared.
    - Unmet desirable demand (today's fresh demand) rolls into tomorrow's backlog.
"""

from typing import Callable, Dict, List, Optional, Sequence
import logging

from ..models.line_state import LineState
from ..models.planning_config import PlanningConfig
from ..models.schedule import DayResult, ProductionEvent, ScheduleResult
from .changeover import TransitionModel
from .ranking import Candidate

logger = logging.getLogger(__name__)


class DayState:
    """
    Production day on one line.

    The day owns the capacity budget; the LineState it wraps is updated in
    place as events are applied.

    Attributes:
        day: Day index
        state: Line state (inventory, backlog, last product), mutated in place
        transitions: Changeover lookup
        remaining_capacity: Units + changeover penalty still available today
        events: Production events applied so far
        changeover_penalty: Penalty paid today
        changeover_cost: Cost paid today
        candidates: Open demand per product, in product index order
    """

    def __init__(
        self,
        day: int,
        demand_row: Sequence[int],
        state: LineState,
        transitions: TransitionModel,
        config: PlanningConfig,
    ):
        self.day = day
        self.state = state
        self.transitions = transitions
        self.max_batches = config.max_batches
        self.max_batch_size = config.max_batch_size
        self.remaining_capacity = config.daily_capacity
        self.events: List[ProductionEvent] = []
        self.changeover_penalty = 0
        self.changeover_cost = 0
        self._by_product: Dict[int, Candidate] = {}
        self.candidates: List[Candidate] = self._open(demand_row)

    def _open(self, demand_row: Sequence[int]) -> List[Candidate]:
        """Serve today's demand from inventory and collect open candidates."""
        candidates = []
        for product, demand in enumerate(demand_row):
            served = min(self.state.inventory[product], demand)
            self.state.inventory[product] -= served
            desirable = demand - served
            mandatory = self.state.backlog[product]

            if mandatory > 0 or desirable > 0:
                candidate = Candidate(product, mandatory, desirable)
                candidates.append(candidate)
                self._by_product[product] = candidate
        return candidates

    @property
    def batches_full(self) -> bool:
        return len(self.events) >= self.max_batches

    @property
    def exhausted(self) -> bool:
        """No further event can be scheduled today."""
        return self.batches_full or self.remaining_capacity <= 0

    def candidate_for(self, product: int) -> Optional[Candidate]:
        return self._by_product.get(product)

    def producible(self, product: int, target: int) -> int:
        """Units of product that could be produced now toward target."""
        if self.batches_full:
            return 0
        step = self.transitions.transition(self.state.last_product, product)
        return max(0, min(target, self.remaining_capacity - step.penalty, self.max_batch_size))

    def produce(self, product: int, target: Optional[int] = None) -> int:
        """
        Switch to product (paying its changeover) and produce toward target.

        The changeover is only paid when at least one unit can follow it.

        Args:
            product: Product index
            target: Units wanted; defaults to the candidate's open need

        Returns:
            Units produced (0 when the batch limit or capacity prevents it)
        """
        candidate = self._by_product.get(product)
        if target is None:
            target = candidate.need if candidate is not None else 0

        amount = self.producible(product, target)
        if amount <= 0:
            return 0

        step = self.transitions.transition(self.state.last_product, product)
        self.remaining_capacity -= step.penalty + amount
        self.changeover_penalty += step.penalty
        self.changeover_cost += step.cost
        self.state.last_product = product
        self.events.append(ProductionEvent(product=product, amount=amount))

        if candidate is None:
            candidate = Candidate(product)
            self._by_product[product] = candidate

        remaining = amount
        met = min(remaining, candidate.mandatory)
        candidate.mandatory -= met
        self.state.backlog[product] -= met
        remaining -= met

        met = min(remaining, candidate.desirable)
        candidate.desirable -= met
        remaining -= met

        # Anything beyond today's need is stock for later days
        self.state.inventory[product] += remaining
        return amount

    def close(self) -> DayResult:
        """
        Settle the day: lose unmet mandatory demand, roll unmet desirable into backlog.

        Returns:
            DayResult with end-of-day snapshots
        """
        num_products = self.state.num_products
        lost = [0] * num_products

        for candidate in self._by_product.values():
            product = candidate.product
            if candidate.mandatory > 0:
                lost[product] = candidate.mandatory
            self.state.backlog[product] = candidate.desirable

        if any(lost):
            logger.debug(f"Day {self.day}: lost {sum(lost)} units {lost}")

        return DayResult(
            day=self.day,
            events=list(self.events),
            inventory=list(self.state.inventory),
            lost_sales=lost,
            backlog=list(self.state.backlog),
            changeover_penalty=self.changeover_penalty,
            changeover_cost=self.changeover_cost,
        )


def simulate_week(
    demand: Sequence[Sequence[int]],
    transitions: TransitionModel,
    config: PlanningConfig,
    plan_day: Callable[[DayState], None],
) -> ScheduleResult:
    """
    Run a fresh line through the horizon, letting plan_day schedule each day.

    Args:
        demand: D x P demand grid
        transitions: Changeover lookup
        config: Capacity constants
        plan_day: Callback that applies production events to an open DayState

    Returns:
        ScheduleResult with per-day snapshots and totals
    """
    num_products = len(demand[0])
    state = LineState.fresh(num_products)
    result = ScheduleResult()

    for day, demand_row in enumerate(demand):
        day_state = DayState(day, demand_row, state, transitions, config)
        plan_day(day_state)
        day_result = day_state.close()
        append_day(result, day_result)

    finish(result, state)
    return result


def append_day(result: ScheduleResult, day_result: DayResult) -> None:
    """Add a closed day to a schedule and update its totals."""
    result.schedule.append(day_result)
    result.total_penalty += day_result.changeover_penalty
    result.total_cost += day_result.changeover_cost
    result.total_lost_sales += sum(day_result.lost_sales)


def finish(result: ScheduleResult, state: LineState) -> None:
    """Record the ending inventory and backlog of the horizon."""
    result.ending_inventory = list(state.inventory)
    result.ending_backlog = list(state.backlog)
