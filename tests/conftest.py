"""Pytest configuration and shared fixtures."""

import pytest

from line_sequencer.models import LineProblem, PlanningConfig, SearchSettings


def clustered_transitions(num_products: int = 5, hub_penalty: int = 100, cluster_penalty: int = 10):
    """Penalty grid: switching into or out of product 0 is expensive, the rest are cheap."""
    grid = []
    for i in range(num_products):
        row = []
        for j in range(num_products):
            if i == j:
                row.append(0)
            elif i == 0 or j == 0:
                row.append(hub_penalty)
            else:
                row.append(cluster_penalty)
        grid.append(row)
    return grid


def uniform_demand(units: int = 100, days: int = 7, products: int = 5):
    return [[units] * products for _ in range(days)]


@pytest.fixture
def search_settings():
    """Small, seeded search settings so tests stay fast and reproducible."""
    return SearchSettings(iterations=8, seed=7, node_budget=1500)


@pytest.fixture
def fast_config(search_settings):
    """Reference capacity limits with small search settings."""
    return PlanningConfig(
        daily_capacity=1000,
        max_batch_size=1000,
        max_batches=3,
        search=search_settings,
    )


@pytest.fixture
def tight_config(search_settings):
    """Capacity too small for the reference demand."""
    return PlanningConfig(
        daily_capacity=300,
        max_batch_size=1000,
        max_batches=3,
        search=search_settings,
    )


@pytest.fixture
def single_batch_config(search_settings):
    """At most one product per day."""
    return PlanningConfig(
        daily_capacity=1000,
        max_batch_size=1000,
        max_batches=1,
        search=search_settings,
    )


@pytest.fixture
def clustered_problem():
    """5 products, 100 units/day each, product 0 expensive to switch into or out of."""
    penalty = clustered_transitions()
    return LineProblem(
        demand=uniform_demand(),
        transition_penalty=penalty,
        transition_cost=[[v * 2 for v in row] for row in penalty],
    )


@pytest.fixture
def zero_demand_problem():
    penalty = clustered_transitions()
    return LineProblem(
        demand=uniform_demand(units=0),
        transition_penalty=penalty,
        transition_cost=penalty,
    )


@pytest.fixture
def mixed_problem():
    """Irregular demand with asymmetric changeovers."""
    return LineProblem(
        demand=[
            [120, 0, 80, 40],
            [0, 200, 0, 60],
            [90, 30, 150, 0],
            [0, 0, 0, 300],
            [200, 100, 0, 0],
            [50, 50, 50, 50],
            [0, 250, 100, 0],
        ],
        transition_penalty=[
            [0, 40, 15, 60],
            [25, 0, 35, 10],
            [15, 50, 0, 20],
            [70, 10, 25, 0],
        ],
        transition_cost=[
            [0, 300, 120, 80],
            [90, 0, 60, 200],
            [150, 40, 0, 110],
            [60, 250, 30, 0],
        ],
    )


@pytest.fixture
def late_spike_problem():
    """One product, all weekly demand on the last day."""
    return LineProblem(
        demand=[[0], [0], [0], [0], [0], [0], [200]],
        transition_penalty=[[0]],
        transition_cost=[[0]],
    )
