"""Entry points that turn raw grids and settings into validated models.

Architecture:
    Raw grids / kwargs → validate_problem() / build_config() → Solvers

Pydantic errors are re-raised as ConfigurationError so that callers handle a
single exception type for every malformed input.
"""

from typing import Any, Dict, Optional, Sequence
import logging
import warnings

from pydantic import ValidationError

from ..models.planning_config import PlanningConfig
from ..models.problem import LineProblem
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def _summarize(error: ValidationError) -> Dict[str, Any]:
    """Context dict with one entry per failing field."""
    context = {}
    for item in error.errors():
        location = ".".join(str(part) for part in item.get('loc', ())) or "model"
        context[location] = item.get('msg', '')
    return context


def validate_problem(
    demand: Sequence[Sequence[int]],
    transition_penalty: Sequence[Sequence[int]],
    transition_cost: Sequence[Sequence[int]],
    config: Optional[PlanningConfig] = None,
) -> LineProblem:
    """
    Validate the matrices of one line.

    Args:
        demand: D x P demand grid
        transition_penalty: P x P changeover penalty grid
        transition_cost: P x P changeover cost grid
        config: When given, the demand must cover exactly config.horizon_days days

    Returns:
        Validated LineProblem

    Raises:
        ConfigurationError: On ragged, negative or mis-sized grids
    """
    try:
        problem = LineProblem(
            demand=[list(row) for row in demand],
            transition_penalty=[list(row) for row in transition_penalty],
            transition_cost=[list(row) for row in transition_cost],
        )
    except ValidationError as e:
        raise ConfigurationError("Invalid line matrices", _summarize(e)) from e
    except TypeError as e:
        raise ConfigurationError(f"Matrices must be sequences of rows: {e}") from e

    if config is not None and problem.num_days != config.horizon_days:
        raise ConfigurationError(
            "Demand does not cover the planning horizon",
            {'demand_days': problem.num_days, 'horizon_days': config.horizon_days},
        )

    logger.debug(f"Validated line problem: {problem.num_days} days x {problem.num_products} products")
    return problem


def build_config(**settings: Any) -> PlanningConfig:
    """
    Build a PlanningConfig from keyword settings.

    Nested sections (weights, search) may be given as dicts.

    Raises:
        ConfigurationError: On out-of-range or inconsistent settings
    """
    try:
        config = PlanningConfig(**settings)
    except ValidationError as e:
        raise ConfigurationError("Invalid planning configuration", _summarize(e)) from e

    if config.daily_capacity == 0 or config.max_batch_size == 0 or config.max_batches == 0:
        warnings.warn(
            f"Configuration allows no production (daily_capacity={config.daily_capacity}, "
            f"max_batch_size={config.max_batch_size}, max_batches={config.max_batches}); "
            f"every demand unit will end up lost or in backlog.",
            UserWarning,
        )

    return config
