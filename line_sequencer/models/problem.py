"""
Pydantic schema for the matrices describing one production line.

Architecture:
    Grid editor / paste → LineProblem (VALIDATION) → Solvers

Dimension mismatches are rejected here, at load time, so no solver ever
discovers a ragged row halfway through a search.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LineProblem(BaseModel):
    """Demand and changeover matrices for a single line.

    Attributes:
        demand: D x P demand grid, demand[day][product]
        transition_penalty: P x P changeover penalty (time) grid
        transition_cost: P x P changeover cost grid
    """
    demand: List[List[int]] = Field(..., min_length=1, description="Demand per day (rows) and product (columns)")
    transition_penalty: List[List[int]] = Field(..., description="Changeover penalty from row product to column product")
    transition_cost: List[List[int]] = Field(..., description="Changeover cost from row product to column product")

    model_config = ConfigDict(frozen=True)

    @field_validator('demand', 'transition_penalty', 'transition_cost')
    @classmethod
    def non_negative_entries(cls, v: List[List[int]]) -> List[List[int]]:
        """Reject negative quantities anywhere in a grid."""
        for r, row in enumerate(v):
            for c, value in enumerate(row):
                if value < 0:
                    raise ValueError(f"entry [{r}][{c}] must be non-negative, got {value}")
        return v

    @model_validator(mode='after')
    def validate_dimensions(self):
        """Demand must be rectangular and both transition grids square in P."""
        num_products = len(self.demand[0])
        if num_products == 0:
            raise ValueError("demand rows must contain at least one product column")

        ragged = [d for d, row in enumerate(self.demand) if len(row) != num_products]
        if ragged:
            raise ValueError(
                f"demand rows {ragged} do not have {num_products} product columns"
            )

        for name in ('transition_penalty', 'transition_cost'):
            grid = getattr(self, name)
            if len(grid) != num_products:
                raise ValueError(
                    f"{name} has {len(grid)} rows, expected {num_products} (one per product)"
                )
            bad_rows = [r for r, row in enumerate(grid) if len(row) != num_products]
            if bad_rows:
                raise ValueError(
                    f"{name} rows {bad_rows} do not have {num_products} columns"
                )

        return self

    @property
    def num_days(self) -> int:
        return len(self.demand)

    @property
    def num_products(self) -> int:
        return len(self.demand[0])

    def total_demand(self) -> List[int]:
        """Weekly demand per product."""
        return [sum(row[p] for row in self.demand) for p in range(self.num_products)]
