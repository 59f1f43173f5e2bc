"""
Tests for the weekly sequencing workflow.

This module tests:
- Solving every line under every objective
- Validation before solving
- Worker pool fan-out
- The solve_line convenience entry point
"""

import pytest

from line_sequencer.models import ObjectiveType, PlanningConfig, SearchSettings
from line_sequencer.validation import ConfigurationError
from line_sequencer.workflows import WeeklyPlanResult, WeeklySequencingWorkflow, solve_line


@pytest.fixture
def lines(clustered_problem, mixed_problem):
    """L1 as a validated problem, L2 as raw grids."""
    return {
        'L1': clustered_problem,
        'L2': {
            'demand': mixed_problem.demand,
            'transition_penalty': mixed_problem.transition_penalty,
            'transition_cost': mixed_problem.transition_cost,
        },
    }


class TestWeeklySequencingWorkflow:

    def test_all_lines_all_objectives(self, lines, fast_config):
        config = fast_config.with_strategy("greedy")
        result = WeeklySequencingWorkflow(config).execute(lines)

        assert isinstance(result, WeeklyPlanResult)
        assert result.success
        assert set(result.results) == {'time', 'cost', 'combined', 'lostSales'}
        for by_line in result.results.values():
            assert set(by_line) == {'L1', 'L2'}
        assert result.violations == {}
        assert result.solve_time_seconds >= 0
        assert result.metadata['lines'] == ['L1', 'L2']

    def test_strategy_used_per_line(self, lines, fast_config):
        config = fast_config.with_strategy("lookahead")
        result = WeeklySequencingWorkflow(config, objectives=["time"]).execute(lines)

        assert result.strategy_used == {'time': {'L1': "Multi-day Look-ahead", 'L2': "Multi-day Look-ahead"}}

    def test_auto_strategy(self, lines, fast_config):
        result = WeeklySequencingWorkflow(fast_config, objectives=[ObjectiveType.LOST_SALES]).execute(lines)

        schedule = result.get("lostSales", "L1")
        assert schedule.objective == "lostSales"
        assert 'benchmark_scores' in schedule.metadata
        assert result.violations == {}

    def test_lines_solved_independently(self, lines, fast_config, clustered_problem):
        """A line's schedule does not depend on the other lines in the run."""
        config = fast_config.with_strategy("greedy")
        both = WeeklySequencingWorkflow(config, objectives=["time"]).execute(lines)
        alone = WeeklySequencingWorkflow(config, objectives=["time"]).execute({'L1': clustered_problem})

        assert both.get("time", "L1").schedule == alone.get("time", "L1").schedule

    def test_worker_pool_matches_inline(self, lines):
        inline = PlanningConfig(strategy="search", search=SearchSettings(iterations=4, seed=11, max_workers=1))
        pooled = PlanningConfig(strategy="search", search=SearchSettings(iterations=4, seed=11, max_workers=4))

        a = WeeklySequencingWorkflow(inline).execute(lines)
        b = WeeklySequencingWorkflow(pooled).execute(lines)

        for objective in ObjectiveType:
            for line in ('L1', 'L2'):
                assert a.get(objective, line).schedule == b.get(objective, line).schedule

    def test_invalid_line_rejected_before_solving(self, lines, fast_config):
        lines['L2']['demand'] = lines['L2']['demand'][:3]

        with pytest.raises(ConfigurationError) as exc_info:
            WeeklySequencingWorkflow(fast_config).execute(lines)
        assert exc_info.value.context['line'] == 'L2'

    def test_missing_grid(self, fast_config, mixed_problem):
        with pytest.raises(ConfigurationError, match="missing grid"):
            WeeklySequencingWorkflow(fast_config).execute({'L1': {'demand': mixed_problem.demand}})

    def test_no_lines(self, fast_config):
        with pytest.raises(ConfigurationError):
            WeeklySequencingWorkflow(fast_config).execute({})

    def test_solver_failure_reported(self, lines, fast_config, monkeypatch):
        def explode(self, problem, objective):
            raise RuntimeError("solver crashed")

        monkeypatch.setattr("line_sequencer.optimization.greedy.GreedyConstructor._solve", explode)
        result = WeeklySequencingWorkflow(fast_config.with_strategy("greedy")).execute(lines)

        assert result.success is False
        assert "solver crashed" in result.error_message
        assert result.results == {}


class TestSolveLine:

    def test_solve_line(self, mixed_problem):
        result = solve_line(
            mixed_problem.demand,
            mixed_problem.transition_penalty,
            mixed_problem.transition_cost,
            objective="cost",
            config=PlanningConfig(strategy="greedy"),
        )
        assert result.objective == "cost"
        assert result.strategy == "Greedy (Standard)"

    def test_solve_line_validates(self):
        with pytest.raises(ConfigurationError):
            solve_line([[1, 2]] * 7, [[0]], [[0]])
