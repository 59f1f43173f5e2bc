"""Candidate ranking shared by every constructor.

Comparator priorities, in order:
    1. Candidates with mandatory (backlog) demand outrank those without.
    2. lostSales objective only: higher capacity density
       produced / (changeover penalty + produced) first, then the larger
       producible amount.
    3. Ascending weighted changeover score, optionally plus a look-ahead term.

Python's sort is stable, so remaining ties keep product index order.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..constants import DENSITY_TOLERANCE
from ..models.planning_config import ObjectiveType
from .changeover import TransitionModel


@dataclass
class Candidate:
    """
    Open demand for one product on one day.

    Attributes:
        product: Product index
        mandatory: Backlog carried from earlier days (lost if still unmet tonight)
        desirable: Today's demand not covered by inventory
    """
    product: int
    mandatory: int = 0
    desirable: int = 0

    @property
    def need(self) -> int:
        return self.mandatory + self.desirable


def producible_amount(need: int, remaining_capacity: int, penalty: int, max_batch_size: int) -> int:
    """Units that fit after paying the changeover penalty, capped by need and batch size."""
    return max(0, min(need, remaining_capacity - penalty, max_batch_size))


def rank_candidates(
    candidates: Sequence[Candidate],
    last_product: int,
    remaining_capacity: int,
    transitions: TransitionModel,
    objective,
    weight_penalty: float,
    weight_cost: float,
    max_batch_size: int,
    lookahead: Optional[Callable[[int], float]] = None,
) -> List[Candidate]:
    """
    Order candidates for production.

    Args:
        candidates: Open demand for the day
        last_product: Product the line is currently set up for
        remaining_capacity: Capacity left today (units + penalty)
        transitions: Changeover lookup
        objective: ObjectiveType or its string value
        weight_penalty: Weight of changeover penalty in the score
        weight_cost: Weight of changeover cost in the score
        max_batch_size: Cap per production event
        lookahead: Optional extra score per product (look-ahead constructor)

    Returns:
        New list with candidates best-first
    """
    density_first = ObjectiveType(objective) == ObjectiveType.LOST_SALES

    def sort_key(candidate: Candidate):
        step = transitions.transition(last_product, candidate.product)
        score = step.weighted(weight_penalty, weight_cost)
        if lookahead is not None:
            score += lookahead(candidate.product)
        urgency = 0 if candidate.mandatory > 0 else 1

        if not density_first:
            return (urgency, score)

        produced = producible_amount(candidate.need, remaining_capacity, step.penalty, max_batch_size)
        used = step.penalty + produced
        density = produced / used if used > 0 else 0.0
        return (urgency, -round(density / DENSITY_TOLERANCE), -produced, score)

    return sorted(candidates, key=sort_key)
