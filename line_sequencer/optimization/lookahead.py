"""Greedy constructor with a one-day look-ahead on changeovers.

The ranking score of a candidate adds a discounted estimate of tomorrow's
cheapest changeover away from it: the minimum weighted changeover score from
the candidate to any product with positive demand on the next day, times the
look-ahead discount. The final day of the horizon has no look-ahead term.
This keeps the line from ending the day on a product that is expensive to
leave tomorrow.
"""

from typing import Callable, Optional, Sequence

from ..models.planning_config import StrategyName
from ..production.changeover import TransitionModel
from .greedy import GreedyConstructor


def next_day_transition_estimate(
    demand: Sequence[Sequence[int]],
    day: int,
    product: int,
    transitions: TransitionModel,
    weight_penalty: float,
    weight_cost: float,
    discount: float,
) -> float:
    """
    Discounted cheapest weighted changeover from product into tomorrow's demand.

    Args:
        demand: D x P demand grid
        day: Today's index
        product: Product the line would end today on
        transitions: Changeover lookup
        weight_penalty: Weight of changeover penalty
        weight_cost: Weight of changeover cost
        discount: Multiplier applied to the estimate

    Returns:
        0.0 on the last day or when nothing is demanded tomorrow
    """
    if day >= len(demand) - 1:
        return 0.0

    best = None
    for next_product, quantity in enumerate(demand[day + 1]):
        if quantity <= 0:
            continue
        score = transitions.transition(product, next_product).weighted(weight_penalty, weight_cost)
        if best is None or score < best:
            best = score

    return 0.0 if best is None else best * discount


class LookaheadConstructor(GreedyConstructor):
    """Greedy pass whose ranking includes the next-day transition estimate."""

    key = StrategyName.LOOKAHEAD
    display_name = "Multi-day Look-ahead"

    def lookahead_term(self, demand, day, transitions, weight_penalty, weight_cost) -> Optional[Callable[[int], float]]:
        discount = self.config.search.lookahead_discount

        def term(product: int) -> float:
            return next_day_transition_estimate(
                demand, day, product, transitions, weight_penalty, weight_cost, discount,
            )

        return term
