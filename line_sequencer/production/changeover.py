"""Product changeover penalty and cost lookup.

This module handles sequence-dependent changeovers between products on a
production line. Each switch carries a penalty (time, charged against daily
capacity) and a cost (money).
"""

from dataclasses import dataclass
from typing import List, Sequence

from ..constants import NO_PRODUCT


@dataclass(frozen=True)
class Transition:
    """
    Changeover incurred when switching between two products.

    Attributes:
        penalty: Changeover time, consumes daily capacity
        cost: Changeover cost
    """
    penalty: int = 0
    cost: int = 0

    def weighted(self, weight_penalty: float, weight_cost: float) -> float:
        """Weighted changeover score."""
        return self.penalty * weight_penalty + self.cost * weight_cost

    def __iter__(self):
        # Allows `penalty, cost = model.transition(a, b)`
        yield self.penalty
        yield self.cost


NO_TRANSITION = Transition(0, 0)


class TransitionModel:
    """
    Changeover penalties and costs between products.

    Changeovers can be sequence-dependent (A→B may differ from B→A).
    The model guarantees:
    - Zero changeover when there is no prior product (NO_PRODUCT)
    - Zero changeover when the product doesn't change
    - Zero for entries missing from the matrices

    Example:
        >>> model = TransitionModel([[0, 10], [20, 0]], [[0, 5], [7, 0]])
        >>> model.transition(0, 1)
        Transition(penalty=10, cost=5)
        >>> model.transition(NO_PRODUCT, 1)
        Transition(penalty=0, cost=0)
    """

    def __init__(self, penalty: Sequence[Sequence[int]], cost: Sequence[Sequence[int]]):
        """
        Initialize transition model.

        Args:
            penalty: P x P changeover penalty matrix (row = from, column = to)
            cost: P x P changeover cost matrix (row = from, column = to)
        """
        self.penalty: List[List[int]] = [list(row) for row in penalty]
        self.cost: List[List[int]] = [list(row) for row in cost]

    @classmethod
    def from_problem(cls, problem) -> 'TransitionModel':
        """Build from a validated LineProblem."""
        return cls(problem.transition_penalty, problem.transition_cost)

    @staticmethod
    def _lookup(matrix: List[List[int]], from_product: int, to_product: int) -> int:
        if 0 <= from_product < len(matrix):
            row = matrix[from_product]
            if 0 <= to_product < len(row):
                return row[to_product] or 0
        return 0

    def transition(self, from_product: int, to_product: int) -> Transition:
        """
        Get the changeover between two products.

        Args:
            from_product: Product being changed from (NO_PRODUCT if none yet)
            to_product: Product being changed to

        Returns:
            Transition with penalty and cost:
            - (0, 0) if from_product is NO_PRODUCT
            - (0, 0) if from_product == to_product
            - Matrix entries otherwise (missing entries count as 0)
        """
        if from_product == NO_PRODUCT or from_product == to_product:
            return NO_TRANSITION

        return Transition(
            penalty=self._lookup(self.penalty, from_product, to_product),
            cost=self._lookup(self.cost, from_product, to_product),
        )

    def sequence_transitions(self, start_product: int, sequence: Sequence[int]) -> Transition:
        """Total changeover along a product sequence starting after start_product."""
        penalty = 0
        cost = 0
        previous = start_product
        for product in sequence:
            step = self.transition(previous, product)
            penalty += step.penalty
            cost += step.cost
            previous = product
        return Transition(penalty, cost)

    def __repr__(self) -> str:
        return f"TransitionModel(products={len(self.penalty)})"
