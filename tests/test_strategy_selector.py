"""
Tests for the strategy registry and the "auto" selector.

This module tests:
- Selection of the lowest score across registered strategies
- Tie-breaking by registration order
- Skipping strategies that raise
- Lost sales outranking ending backlog, backlog breaking ties
- Scenario expectations across every strategy
"""

import pytest

from line_sequencer.constants import LOST_SALES_MULTIPLIER
from line_sequencer.models import ObjectiveType, ScheduleResult, StrategyName
from line_sequencer.optimization import (
    STRATEGY_REGISTRY,
    GreedyConstructor,
    StrategySelector,
    create_strategy,
    schedule_score,
)
from line_sequencer.validation import validate_schedule


class ExplodingStrategy(GreedyConstructor):
    """Strategy that always fails."""

    def _solve(self, problem, objective):
        raise RuntimeError("boom")


def fixed_schedule(lost, backlog, penalty, name):
    """Strategy class that always returns the same totals."""

    class FixedStrategy(GreedyConstructor):
        display_name = name

        def _solve(self, problem, objective):
            return ScheduleResult(
                total_penalty=penalty,
                total_lost_sales=lost,
                ending_inventory=[0],
                ending_backlog=[backlog],
            )

    return FixedStrategy


ALL_STRATEGIES = ["greedy", "leveling", "lookahead", "search", "exact", "auto"]


class TestCreateStrategy:

    def test_registry_order(self):
        assert list(STRATEGY_REGISTRY) == [
            StrategyName.GREEDY,
            StrategyName.LEVELING,
            StrategyName.LOOKAHEAD,
            StrategyName.SEARCH,
            StrategyName.EXACT,
        ]

    @pytest.mark.parametrize("name", ["greedy", "leveling", "lookahead", "search", "exact"])
    def test_by_name(self, name, fast_config):
        strategy = create_strategy(name, fast_config)
        assert strategy.key == StrategyName(name)
        assert strategy.config is fast_config

    def test_auto(self, fast_config):
        assert isinstance(create_strategy("auto", fast_config), StrategySelector)

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_strategy("genetic")


class TestStrategySelector:

    @pytest.mark.parametrize("objective", list(ObjectiveType))
    def test_picks_lowest_score(self, mixed_problem, tight_config, objective):
        result = StrategySelector(tight_config).solve(mixed_problem, objective)

        individual = {
            name.value: schedule_score(create_strategy(name, tight_config).solve(mixed_problem, objective), objective, tight_config)
            for name in STRATEGY_REGISTRY
        }
        best = schedule_score(result, objective, tight_config)

        assert best == pytest.approx(min(individual.values()))
        assert result.metadata['benchmark_scores'] == pytest.approx(individual)
        assert result.objective == objective.value
        assert validate_schedule(result, mixed_problem, tight_config) == []

    def test_reports_winning_strategy(self, clustered_problem, fast_config):
        result = StrategySelector(fast_config).solve(clustered_problem, ObjectiveType.TIME)
        display_names = {cls.display_name for cls in STRATEGY_REGISTRY.values()}
        assert result.strategy in display_names

    def test_ties_go_to_registration_order(self, zero_demand_problem, fast_config):
        result = StrategySelector(fast_config).solve(zero_demand_problem, ObjectiveType.TIME)

        assert set(result.metadata['benchmark_scores'].values()) == {0.0}
        assert result.strategy == "Greedy (Standard)"

    def test_failing_strategy_skipped(self, mixed_problem, fast_config, monkeypatch):
        monkeypatch.setitem(STRATEGY_REGISTRY, StrategyName.LOOKAHEAD, ExplodingStrategy)

        result = StrategySelector(fast_config).solve(mixed_problem, ObjectiveType.COST)

        assert result.metadata['skipped_strategies'] == ['lookahead']
        assert 'lookahead' not in result.metadata['benchmark_scores']
        assert len(result.schedule) == 7

    def test_all_failing_falls_back_to_greedy(self, mixed_problem, fast_config, monkeypatch):
        for name in list(STRATEGY_REGISTRY):
            monkeypatch.setitem(STRATEGY_REGISTRY, name, ExplodingStrategy)

        result = StrategySelector(fast_config).solve(mixed_problem, ObjectiveType.TIME)

        assert result.metadata['fallback'] == 'greedy'
        assert result.strategy == "Greedy (Standard)"
        assert len(result.metadata['skipped_strategies']) == len(STRATEGY_REGISTRY)

    def test_candidate_subset(self, mixed_problem, fast_config):
        selector = StrategySelector(fast_config, candidates=[StrategyName.GREEDY, StrategyName.LOOKAHEAD])
        result = selector.solve(mixed_problem, ObjectiveType.TIME)
        assert set(result.metadata['benchmark_scores']) == {'greedy', 'lookahead'}

    def test_lost_sales_outrank_backlog(self, mixed_problem, fast_config, monkeypatch):
        """Open backlog is not lost yet: 200 units of backlog beat 100 lost units."""
        monkeypatch.setitem(STRATEGY_REGISTRY, StrategyName.GREEDY, fixed_schedule(0, 200, 830, "Backlog"))
        monkeypatch.setitem(STRATEGY_REGISTRY, StrategyName.EXACT, fixed_schedule(100, 0, 280, "Lossy"))

        selector = StrategySelector(fast_config, candidates=[StrategyName.GREEDY, StrategyName.EXACT])
        result = selector.solve(mixed_problem, ObjectiveType.TIME)

        assert result.strategy == "Backlog"
        assert result.total_lost_sales == 0
        assert result.metadata['benchmark_scores'] == {
            'greedy': 830.0,
            'exact': 280 + 100 * LOST_SALES_MULTIPLIER,
        }

    def test_backlog_breaks_score_ties(self, mixed_problem, fast_config, monkeypatch):
        monkeypatch.setitem(STRATEGY_REGISTRY, StrategyName.GREEDY, fixed_schedule(0, 50, 300, "More backlog"))
        monkeypatch.setitem(STRATEGY_REGISTRY, StrategyName.LOOKAHEAD, fixed_schedule(0, 10, 300, "Less backlog"))

        selector = StrategySelector(fast_config, candidates=[StrategyName.GREEDY, StrategyName.LOOKAHEAD])
        result = selector.solve(mixed_problem, ObjectiveType.TIME)

        assert result.strategy == "Less backlog"
        assert result.total_ending_backlog == 10


class TestReferenceScenarios:
    """Expectations that hold for every strategy."""

    @pytest.mark.parametrize("name", ALL_STRATEGIES)
    def test_zero_demand(self, name, zero_demand_problem, fast_config):
        result = create_strategy(name, fast_config).solve(zero_demand_problem, ObjectiveType.TIME)

        assert result.total_lost_sales == 0
        assert result.total_penalty == 0
        assert result.total_cost == 0
        assert all(day.events == [] for day in result.schedule)

    @pytest.mark.parametrize("name", ALL_STRATEGIES)
    def test_single_batch_per_day(self, name, clustered_problem, single_batch_config):
        result = create_strategy(name, single_batch_config).solve(clustered_problem, ObjectiveType.TIME)

        assert all(len(day.events) <= 1 for day in result.schedule)
        assert validate_schedule(result, clustered_problem, single_batch_config) == []

    @pytest.mark.parametrize("name", ALL_STRATEGIES)
    def test_insufficient_capacity_loses_sales(self, name, clustered_problem, tight_config):
        """300 units/day of capacity against 500 units/day of demand."""
        result = create_strategy(name, tight_config).solve(clustered_problem, ObjectiveType.TIME)

        assert result.total_lost_sales > 0
        assert validate_schedule(result, clustered_problem, tight_config) == []


    @pytest.mark.parametrize("name", ALL_STRATEGIES)
    def test_ample_capacity_no_lost_sales(self, name, clustered_problem, fast_config):
        """1000 units/day of capacity against 500 units/day of demand."""
        result = create_strategy(name, fast_config).solve(clustered_problem, ObjectiveType.TIME)

        assert result.total_lost_sales == 0
        assert validate_schedule(result, clustered_problem, fast_config) == []

    @pytest.mark.parametrize("name", ALL_STRATEGIES)
    def test_ample_capacity_limits_hub_switches(self, name, clustered_problem, fast_config):
        """Switches into or out of product 0 cost 100, the rest 10; time runs keep them rare."""
        result = create_strategy(name, fast_config).solve(clustered_problem, ObjectiveType.TIME)

        hub_switches = 0
        cluster_switches = 0
        last = -1
        for day in result.schedule:
            for event in day.events:
                if last != -1 and event.product != last:
                    if event.product == 0 or last == 0:
                        hub_switches += 1
                    else:
                        cluster_switches += 1
                last = event.product

        assert hub_switches * 100 + cluster_switches * 10 == result.total_penalty
        assert hub_switches <= 8

    @pytest.mark.parametrize("name", ALL_STRATEGIES)
    def test_lost_sales_objective_loses_least(self, name, clustered_problem, tight_config):
        strategy = create_strategy(name, tight_config)
        lost = {
            objective: strategy.solve(clustered_problem, objective).total_lost_sales
            for objective in ObjectiveType
        }

        assert all(value > 0 for value in lost.values())
        assert lost[ObjectiveType.LOST_SALES] == min(lost.values())

    @pytest.mark.parametrize("name", ALL_STRATEGIES)
    @pytest.mark.parametrize("objective", [ObjectiveType.TIME, ObjectiveType.COST, ObjectiveType.COMBINED])
    def test_lost_sales_run_dominates(self, name, objective, mixed_problem, tight_config):
        strategy = create_strategy(name, tight_config)

        lost_sales_run = strategy.solve(mixed_problem, ObjectiveType.LOST_SALES)
        other_run = strategy.solve(mixed_problem, objective)

        assert lost_sales_run.total_lost_sales <= other_run.total_lost_sales
        assert validate_schedule(lost_sales_run, mixed_problem, tight_config) == []
