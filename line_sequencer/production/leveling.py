"""Production leveling: smooth demand peaks across the week.

Moves the excess of peak days (above LEVELING_PEAK_FACTOR × the weekly
average) to under-loaded neighbouring days: the previous day first (built
ahead from inventory), then the next day (served from backlog). Shifts are in
whole units, so each product's weekly total is preserved exactly.
"""

from typing import List, Sequence
import math

from ..constants import LEVELING_PEAK_FACTOR


def level_demand(
    demand: Sequence[Sequence[int]],
    peak_factor: float = LEVELING_PEAK_FACTOR,
) -> List[List[int]]:
    """
    Return a leveled copy of a demand grid.

    Args:
        demand: D x P demand grid (not modified)
        peak_factor: Days above peak_factor × average are leveled

    Returns:
        New D x P grid with the same per-product weekly totals

    Example:
        >>> level_demand([[0], [300], [0]])
        [[100], [100], [100]]
    """
    matrix = [list(row) for row in demand]
    num_days = len(matrix)
    if num_days == 0:
        return matrix
    num_products = len(matrix[0])

    for p in range(num_products):
        average = sum(row[p] for row in matrix) / num_days

        for d in range(num_days):
            if matrix[d][p] <= average * peak_factor:
                continue

            excess = math.floor(matrix[d][p] - average)

            if d > 0 and matrix[d - 1][p] < average:
                shift = min(excess, math.floor(average - matrix[d - 1][p]))
                if shift > 0:
                    matrix[d - 1][p] += shift
                    matrix[d][p] -= shift
                    excess -= shift

            if d < num_days - 1 and excess > 0 and matrix[d + 1][p] < average:
                shift = min(excess, math.floor(average - matrix[d + 1][p]))
                if shift > 0:
                    matrix[d + 1][p] += shift
                    matrix[d][p] -= shift

    return matrix
