"""Weekly sequencing workflow: every line under every objective.

Orchestration steps:
    1. prepare_input_data() - validate every line's matrices (fails before any solve)
    2. solve every (objective, line) pair, fanned out on a worker pool
    3. validate each schedule against its invariants
    4. collect results keyed objective -> line, with the strategy used
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import logging
import time

from ..models.planning_config import ObjectiveType, PlanningConfig
from ..models.problem import LineProblem
from ..models.schedule import ScheduleResult
from ..optimization.parallel import fan_out
from ..optimization.strategy_selector import create_strategy
from ..validation.errors import ConfigurationError
from ..validation.input_validator import validate_problem
from ..validation.schedule_validator import validate_schedule

logger = logging.getLogger(__name__)

LineInput = Union[LineProblem, Mapping[str, Any]]


@dataclass
class WeeklyPlanResult:
    """Result of a weekly workflow run.

    Attributes:
        solve_timestamp: When the run started
        results: results[objective][line] -> ScheduleResult
        success: False if any solve raised
        solve_time_seconds: Wall-clock time of the whole run
        violations: Invariant violations per objective and line (empty when clean)
        error_message: Error message if a solve failed
        metadata: Configuration snapshot
    """
    solve_timestamp: datetime
    results: Dict[str, Dict[str, ScheduleResult]] = field(default_factory=dict)
    success: bool = False
    solve_time_seconds: Optional[float] = None
    violations: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get(self, objective, line: str) -> ScheduleResult:
        return self.results[ObjectiveType(objective).value][line]

    @property
    def strategy_used(self) -> Dict[str, Dict[str, Optional[str]]]:
        """Strategy display name per objective and line."""
        return {
            objective: {line: result.strategy for line, result in by_line.items()}
            for objective, by_line in self.results.items()
        }


class WeeklySequencingWorkflow:
    """Solve each line independently for each requested objective."""

    def __init__(
        self,
        config: Optional[PlanningConfig] = None,
        objectives: Optional[Iterable] = None,
    ):
        """Initialize workflow.

        Args:
            config: Planning configuration (capacity, strategy, search settings)
            objectives: Objectives to solve (default: all four)
        """
        self.config = config or PlanningConfig()
        self.objectives = [
            ObjectiveType(o) for o in (objectives if objectives is not None else list(ObjectiveType))
        ]
        self.result: Optional[WeeklyPlanResult] = None

        logger.info(
            f"Initialized weekly workflow: strategy={self.config.strategy.value}, "
            f"objectives={[o.value for o in self.objectives]}"
        )

    def prepare_input_data(self, lines: Mapping[str, LineInput]) -> Dict[str, LineProblem]:
        """Validate every line before anything is solved.

        Args:
            lines: Line name -> LineProblem, or a mapping with 'demand',
                'transition_penalty' and 'transition_cost' grids

        Raises:
            ConfigurationError: If any line is malformed
        """
        if not lines:
            raise ConfigurationError("No production lines given")

        problems = {}
        for name, line in lines.items():
            try:
                if isinstance(line, LineProblem):
                    problem = validate_problem(
                        line.demand, line.transition_penalty, line.transition_cost, self.config,
                    )
                else:
                    problem = validate_problem(
                        line['demand'], line['transition_penalty'], line['transition_cost'], self.config,
                    )
            except KeyError as e:
                raise ConfigurationError(f"Line '{name}' is missing grid {e}", {'line': name}) from e
            except ConfigurationError as e:
                raise ConfigurationError(e.message, {'line': name, **e.context}) from e
            problems[name] = problem
        return problems

    def execute(self, lines: Mapping[str, LineInput]) -> WeeklyPlanResult:
        """Run the workflow.

        Raises:
            ConfigurationError: On malformed input (before any solve starts)

        Returns:
            WeeklyPlanResult; solver failures are reported in it, not raised
        """
        start_time = datetime.now()
        started = time.perf_counter()

        logger.info("Step 1: Validating input data")
        problems = self.prepare_input_data(lines)

        tasks: List[Tuple[ObjectiveType, str]] = [
            (objective, name) for objective in self.objectives for name in problems
        ]

        def solve_task(task: Tuple[ObjectiveType, str]) -> ScheduleResult:
            objective, name = task
            strategy = create_strategy(self.config.strategy, self.config)
            return strategy.solve(problems[name], objective)

        try:
            logger.info(f"Step 2: Solving {len(tasks)} line/objective pairs")
            outcomes = fan_out(solve_task, tasks, self.config.search.max_workers)
        except Exception as e:
            logger.error(f"Weekly workflow failed: {e}", exc_info=True)
            self.result = WeeklyPlanResult(
                solve_timestamp=start_time,
                success=False,
                solve_time_seconds=time.perf_counter() - started,
                error_message=str(e),
            )
            return self.result

        logger.info("Step 3: Validating schedules")
        results: Dict[str, Dict[str, ScheduleResult]] = {}
        violations: Dict[str, Dict[str, List[str]]] = {}
        for (objective, name), result in zip(tasks, outcomes):
            results.setdefault(objective.value, {})[name] = result
            messages = validate_schedule(result, problems[name], self.config)
            if messages:
                logger.warning(f"Schedule {name}/{objective.value} violates invariants: {messages}")
                violations.setdefault(objective.value, {})[name] = messages

        solve_time = time.perf_counter() - started
        self.result = WeeklyPlanResult(
            solve_timestamp=start_time,
            results=results,
            success=True,
            solve_time_seconds=solve_time,
            violations=violations,
            metadata={
                'lines': list(problems),
                'objectives': [o.value for o in self.objectives],
                'config': self.config.model_dump(mode='json'),
            },
        )

        logger.info(f"Weekly workflow complete: {len(tasks)} schedules in {solve_time:.2f}s")
        return self.result


def solve_line(
    demand,
    transition_penalty,
    transition_cost,
    objective=ObjectiveType.TIME,
    config: Optional[PlanningConfig] = None,
) -> ScheduleResult:
    """
    Validate one line's grids and solve it under one objective.

    Raises:
        ConfigurationError: On malformed input
    """
    config = config or PlanningConfig()
    problem = validate_problem(demand, transition_penalty, transition_cost, config)
    return create_strategy(config.strategy, config).solve(problem, objective)
