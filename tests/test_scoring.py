"""Tests for objective weights and schedule scores."""

import math

import pytest

from line_sequencer.constants import LOST_SALES_MULTIPLIER
from line_sequencer.models import CombinedWeights, ObjectiveType, PlanningConfig, ScheduleResult
from line_sequencer.optimization.scoring import (
    is_valid_score,
    objective_metric,
    objective_weights,
    horizon_score,
    partial_score,
    plan_weights,
    schedule_key,
    schedule_score,
)


@pytest.fixture
def config():
    return PlanningConfig(weights=CombinedWeights(penalty_weight=30, cost_weight=70))


class TestWeights:

    def test_objective_weights(self, config):
        assert objective_weights("time", config) == (1.0, 0.0)
        assert objective_weights("cost", config) == (0.0, 1.0)
        assert objective_weights("combined", config) == pytest.approx((0.3, 0.7))
        assert objective_weights("lostSales", config) == (0.0, 0.0)

    def test_plan_weights_fall_back_to_penalty(self, config):
        assert plan_weights(ObjectiveType.LOST_SALES, config) == (1.0, 0.0)
        assert plan_weights(ObjectiveType.COST, config) == (0.0, 1.0)


class TestScores:

    def test_metric_per_objective(self, config):
        assert objective_metric(10, 100, 3, "time", config) == 10
        assert objective_metric(10, 100, 3, "cost", config) == 100
        assert objective_metric(10, 100, 3, "combined", config) == pytest.approx(73.0)
        assert objective_metric(10, 100, 3, "lostSales", config) == 3

    def test_partial_score_multiplies_lost_sales(self, config):
        assert partial_score(10, 100, 2, "time", config) == 10 + 2 * LOST_SALES_MULTIPLIER

    def test_schedule_score_ignores_ending_backlog(self, config):
        result = ScheduleResult(
            total_penalty=40,
            total_cost=80,
            total_lost_sales=1,
            ending_inventory=[0, 0],
            ending_backlog=[5, 0],
        )
        assert schedule_score(result, "cost", config) == 80 + 1 * LOST_SALES_MULTIPLIER

    def test_horizon_score_charges_ending_backlog(self, config):
        result = ScheduleResult(
            total_penalty=40,
            total_cost=80,
            total_lost_sales=1,
            ending_inventory=[0, 0],
            ending_backlog=[5, 0],
        )
        assert horizon_score(result, "cost", config) == 80 + 6 * LOST_SALES_MULTIPLIER

    def test_lost_sales_outrank_backlog(self, config):
        """A week with backlog but nothing lost beats one that lost units."""
        backlog_only = ScheduleResult(total_penalty=830, ending_inventory=[0, 0], ending_backlog=[100, 100])
        lost_only = ScheduleResult(total_penalty=280, total_lost_sales=100, ending_inventory=[0, 0], ending_backlog=[0, 0])

        keep = schedule_key(schedule_score(backlog_only, "time", config), backlog_only)
        drop = schedule_key(schedule_score(lost_only, "time", config), lost_only)
        assert keep < drop

    def test_backlog_breaks_ties(self, config):
        more = ScheduleResult(total_penalty=50, ending_inventory=[0], ending_backlog=[30])
        less = ScheduleResult(total_penalty=50, ending_inventory=[0], ending_backlog=[10])
        assert schedule_key(50.0, less) < schedule_key(50.0, more)

    def test_lost_sales_dominate(self, config):
        """One lost unit outweighs a large changeover total."""
        assert partial_score(50_000, 0, 0, "time", config) < partial_score(0, 0, 1, "time", config)

    def test_valid_score(self):
        assert is_valid_score(0)
        assert is_valid_score(12.5)
        assert not is_valid_score(math.nan)
        assert not is_valid_score(math.inf)
        assert not is_valid_score(None)
