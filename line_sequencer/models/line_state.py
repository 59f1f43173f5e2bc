"""Mutable per-solve state of a production line."""

from dataclasses import dataclass, field
from typing import List

from ..constants import NO_PRODUCT


@dataclass
class LineState:
    """
    Inventory, backlog and last product of a line as the horizon unfolds.

    A LineState is created zeroed at the start of every solver call and is
    never shared across lines or objectives.

    Attributes:
        inventory: On-hand stock per product (>= 0)
        backlog: Unmet demand per product carried forward (>= 0)
        last_product: Product produced most recently, NO_PRODUCT if none yet
    """
    inventory: List[int] = field(default_factory=list)
    backlog: List[int] = field(default_factory=list)
    last_product: int = NO_PRODUCT

    @classmethod
    def fresh(cls, num_products: int) -> 'LineState':
        """Zeroed state for a new solve."""
        return cls(
            inventory=[0] * num_products,
            backlog=[0] * num_products,
            last_product=NO_PRODUCT,
        )

    def copy(self) -> 'LineState':
        """Independent copy for branching searches."""
        return LineState(
            inventory=list(self.inventory),
            backlog=list(self.backlog),
            last_product=self.last_product,
        )

    @property
    def num_products(self) -> int:
        return len(self.inventory)
