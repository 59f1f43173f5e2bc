"""Objective weights and schedule scores.

Every strategy and the auto selector compare schedules through these
functions, so "better" means the same thing everywhere:

    score = objective metric + LOST_SALES_MULTIPLIER × lost sales

The multiplier makes feasibility dominate efficiency: one lost unit outweighs
any realistic changeover total. Ending backlog only breaks ties between equal
scores (schedule_key). The branch-and-bound search alone charges backlog like
lost sales at the horizon boundary (horizon_score).
"""

import math
from typing import Tuple

from ..models.planning_config import ObjectiveType, PlanningConfig
from ..models.schedule import ScheduleResult
from ..constants import LOST_SALES_MULTIPLIER


def objective_weights(objective, config: PlanningConfig) -> Tuple[float, float]:
    """
    Changeover (penalty, cost) weights used for ranking under an objective.

    Args:
        objective: ObjectiveType or its string value
        config: Planning configuration (combined split)

    Returns:
        (weight_penalty, weight_cost):
        - time: (1, 0)
        - cost: (0, 1)
        - combined: configured percentage split as fractions
        - lostSales: (0, 0), ranking relies on density instead
    """
    objective = ObjectiveType(objective)
    if objective == ObjectiveType.TIME:
        return 1.0, 0.0
    if objective == ObjectiveType.COST:
        return 0.0, 1.0
    if objective == ObjectiveType.COMBINED:
        return config.weights.as_fractions()
    return 0.0, 0.0


def plan_weights(objective, config: PlanningConfig) -> Tuple[float, float]:
    """Weights for ordering whole daily plans.

    Identical to objective_weights, except lostSales falls back to pure
    penalty: changeover time is what steals capacity from production.
    """
    weight_penalty, weight_cost = objective_weights(objective, config)
    if weight_penalty == 0 and weight_cost == 0:
        return 1.0, 0.0
    return weight_penalty, weight_cost


def objective_metric(
    total_penalty: float,
    total_cost: float,
    total_lost_sales: float,
    objective,
    config: PlanningConfig,
) -> float:
    """Objective-specific metric before the lost-sales multiplier."""
    objective = ObjectiveType(objective)
    if objective == ObjectiveType.TIME:
        return float(total_penalty)
    if objective == ObjectiveType.COST:
        return float(total_cost)
    if objective == ObjectiveType.COMBINED:
        weight_penalty, weight_cost = config.weights.as_fractions()
        return total_penalty * weight_penalty + total_cost * weight_cost
    return float(total_lost_sales)


def partial_score(
    total_penalty: float,
    total_cost: float,
    total_lost_sales: float,
    objective,
    config: PlanningConfig,
) -> float:
    """Score of a partial schedule: incurred metric plus realized lost sales."""
    return (
        objective_metric(total_penalty, total_cost, total_lost_sales, objective, config)
        + total_lost_sales * LOST_SALES_MULTIPLIER
    )


def schedule_score(result: ScheduleResult, objective, config: PlanningConfig) -> float:
    """Score a complete schedule (lower is better)."""
    return partial_score(
        result.total_penalty,
        result.total_cost,
        result.total_lost_sales,
        objective,
        config,
    )


def schedule_key(score: float, result: ScheduleResult) -> Tuple[float, int]:
    """Sort key for picking the best schedule: score first, then ending backlog."""
    return (score, result.total_ending_backlog)


def horizon_score(result: ScheduleResult, objective, config: PlanningConfig) -> float:
    """
    Score with the ending backlog charged like lost sales.

    Used by the branch-and-bound search, where demand still open at the end
    of the horizon counts as undelivered.
    """
    return schedule_score(result, objective, config) + result.total_ending_backlog * LOST_SALES_MULTIPLIER


def is_valid_score(score: float) -> bool:
    """False for NaN or infinite scores."""
    return isinstance(score, (int, float)) and math.isfinite(score)
