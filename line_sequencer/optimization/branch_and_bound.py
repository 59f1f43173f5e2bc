"""Bounded branch-and-bound over daily production plans.

A daily plan is an ordered tuple of up to max_batches distinct products. The
search walks the horizon depth-first, one day per level, trying the best
ranked plans at each node:

Plan generation:
    Products with backlog or any demand in the cyclic week are eligible. All
    ordered subsets of size 0..max_batches are ranked by look-ahead demand
    cleared (descending, days further ahead weigh less) and by the weighted
    changeover score of the sequence from the current setup (ascending), then
    truncated to the branching factor.

Plan simulation:
    Same production and changeover mechanics as the constructors, but each
    event targets the net need over the coming (cyclic) week, so the solver
    can build stock ahead on days with spare capacity. Only capacity the
    later products of the plan do not need for today's demand (and their
    changeovers) goes into stock.

Bounding:
    Lower bound at a node = objective metric incurred so far + multiplier ×
    lost sales realized so far; the subtree is pruned when the bound is not
    below the best complete score. Leaves also charge remaining backlog. The
    incumbent is seeded with the greedy schedule, and the best leaf only
    replaces greedy when it also wins on the regular schedule score (lost
    sales, then backlog). The result never scores worse than
    GreedyConstructor.

Guarantee:
    Optimal only within the truncated plan space and the node budget; it is
    not a global optimum in the strict OR sense.
"""

from functools import lru_cache
from itertools import permutations
from typing import Dict, List, Optional, Tuple
import logging
import threading

from ..constants import LOST_SALES_MULTIPLIER
from ..models.line_state import LineState
from ..models.planning_config import ObjectiveType, PlanningConfig, StrategyName
from ..models.problem import LineProblem
from ..models.schedule import DayResult, ScheduleResult
from ..production.changeover import TransitionModel
from ..production.day_state import DayState, append_day, finish
from .base_strategy import SequencingStrategy
from .greedy import GreedyConstructor
from .parallel import SearchBudget
from .scoring import horizon_score, partial_score, plan_weights, schedule_key

logger = logging.getLogger(__name__)

Plan = Tuple[int, ...]


@lru_cache(maxsize=256)
def ordered_subsets(products: Tuple[int, ...], max_size: int) -> Tuple[Plan, ...]:
    """All ordered tuples of 0..max_size distinct products, empty plan first."""
    plans: List[Plan] = [()]
    for size in range(1, min(max_size, len(products)) + 1):
        plans.extend(permutations(products, size))
    return tuple(plans)


class PlanSearch:
    """
    Depth-first search state for one (line, objective) solve.

    Attributes:
        best_score: Score of the incumbent (seeded by the caller)
        best_days: DayResults of the best complete path found, None if none beat the seed
        best_state: Line state at the end of that path
        leaves: Complete paths evaluated
        pruned: Nodes cut by the bound
    """

    def __init__(
        self,
        problem: LineProblem,
        objective: ObjectiveType,
        config: PlanningConfig,
        budget: SearchBudget,
        incumbent_score: float,
    ):
        self.demand = problem.demand
        self.num_days = problem.num_days
        self.num_products = problem.num_products
        self.transitions = TransitionModel.from_problem(problem)
        self.objective = objective
        self.config = config
        self.budget = budget
        self.branching_factor = config.search.branching_factor

        self.best_score = incumbent_score
        self.best_days: Optional[List[DayResult]] = None
        self.best_state: Optional[LineState] = None
        self.leaves = 0
        self.pruned = 0
        self._plan_cache: Dict[tuple, List[Plan]] = {}

        self._precompute()

    def _precompute(self) -> None:
        D, P = self.num_days, self.num_products

        # Demand over the coming week, discounted linearly with distance (today = 1)
        self.weighted_lookahead = [
            [
                sum(self.demand[(day + k) % D][p] * (D - k) / D for k in range(D))
                for p in range(P)
            ]
            for day in range(D)
        ]

        # Undiscounted demand of the next D-1 days (cyclic), used as build-ahead target
        self.future_demand = [
            [sum(self.demand[(day + k) % D][p] for k in range(1, D)) for p in range(P)]
            for day in range(D)
        ]

        self.active = [any(self.demand[d][p] > 0 for d in range(D)) for p in range(P)]

        weight_penalty, weight_cost = plan_weights(self.objective, self.config)
        # Row 0 is the "no prior product" setup
        self.step_score = [
            [
                self.transitions.transition(from_product, to_product).weighted(weight_penalty, weight_cost)
                for to_product in range(P)
            ]
            for from_product in range(-1, P)
        ]

    def plans(self, day: int, state: LineState) -> List[Plan]:
        """Best ranked plans for a node, at most branching_factor of them."""
        cache_key = (day, state.last_product, tuple(state.backlog))
        cached = self._plan_cache.get(cache_key)
        if cached is not None:
            return cached

        products = tuple(
            p for p in range(self.num_products)
            if state.backlog[p] > 0 or self.active[p]
        )
        value = [state.backlog[p] + self.weighted_lookahead[day][p] for p in range(self.num_products)]
        step_score = self.step_score

        def rank(plan: Plan):
            cleared = 0.0
            sequence = 0.0
            previous = state.last_product
            for p in plan:
                cleared += value[p]
                sequence += step_score[previous + 1][p]
                previous = p
            return (-cleared, sequence, plan)

        ranked = sorted(ordered_subsets(products, self.config.max_batches), key=rank)
        ranked = ranked[: self.branching_factor]
        self._plan_cache[cache_key] = ranked
        return ranked

    def simulate(self, day: int, state: LineState, plan: Plan) -> Tuple[LineState, DayResult]:
        """Apply a plan to a copy of state; returns the child state and the closed day."""
        child = state.copy()
        day_state = DayState(day, self.demand[day], child, self.transitions, self.config)

        needs = []
        for product in plan:
            candidate = day_state.candidate_for(product)
            needs.append(candidate.need if candidate is not None else 0)

        # Capacity the rest of the plan needs for today's demand plus its changeovers
        steps = []
        previous = state.last_product
        for product in plan:
            steps.append(self.transitions.transition(previous, product).penalty)
            previous = product
        reserve = [0] * (len(plan) + 1)
        for i in range(len(plan) - 1, -1, -1):
            reserve[i] = reserve[i + 1] + steps[i] + needs[i]

        for i, product in enumerate(plan):
            if day_state.exhausted:
                break
            build_ahead = needs[i] + self.future_demand[day][product] - child.inventory[product]
            spare = day_state.remaining_capacity - steps[i] - reserve[i + 1]
            target = max(needs[i], min(build_ahead, spare))
            if target > 0:
                day_state.produce(product, target)

        return child, day_state.close()

    def search(
        self,
        day: int,
        state: LineState,
        penalty: int,
        cost: int,
        lost: int,
        path: List[DayResult],
    ) -> None:
        """Explore the subtree below a node."""
        if not self.budget.tick():
            return

        bound = partial_score(penalty, cost, lost, self.objective, self.config)

        if day == self.num_days:
            self.leaves += 1
            score = bound + sum(state.backlog) * LOST_SALES_MULTIPLIER
            if score < self.best_score:
                logger.debug(f"New incumbent {score:,.2f} (was {self.best_score:,.2f}) at node {self.budget.nodes}")
                self.best_score = score
                self.best_days = list(path)
                self.best_state = state
            return

        if bound >= self.best_score:
            self.pruned += 1
            return

        seen = set()
        for plan in self.plans(day, state):
            if self.budget.exhausted:
                return

            child, day_result = self.simulate(day, state, plan)

            # Different plans can collapse to the same events (e.g. nothing left to build)
            signature = tuple((e.product, e.amount) for e in day_result.events)
            if signature in seen:
                continue
            seen.add(signature)

            path.append(day_result)
            self.search(
                day + 1,
                child,
                penalty + day_result.changeover_penalty,
                cost + day_result.changeover_cost,
                lost + sum(day_result.lost_sales),
                path,
            )
            path.pop()


class ExactBranchAndBound(SequencingStrategy):
    """Node-budgeted branch-and-bound, seeded with the greedy schedule."""

    key = StrategyName.EXACT
    display_name = "Exact Branch & Bound"

    def __init__(self, config: Optional[PlanningConfig] = None, cancel_event: Optional[threading.Event] = None):
        super().__init__(config)
        self.cancel_event = cancel_event

    def _solve(self, problem: LineProblem, objective: ObjectiveType) -> ScheduleResult:
        settings = self.config.search
        greedy = GreedyConstructor(self.config)
        greedy_result = greedy.construct(problem.demand, problem, objective)
        greedy_score = self.score(greedy_result, objective)

        budget = SearchBudget(
            max_nodes=settings.node_budget,
            deadline_seconds=settings.deadline_seconds,
            cancel_event=self.cancel_event,
        ).start()
        search = PlanSearch(
            problem, objective, self.config, budget,
            incumbent_score=horizon_score(greedy_result, objective, self.config),
        )
        search.search(0, LineState.fresh(problem.num_products), 0, 0, 0, [])

        if budget.exhausted:
            logger.warning(
                f"Branch-and-bound stopped early ({budget.stop_reason}) after {budget.nodes} nodes; "
                f"returning best schedule found"
            )

        result = None
        if search.best_days is not None:
            found = ScheduleResult()
            for day_result in search.best_days:
                append_day(found, day_result)
            finish(found, search.best_state)

            # The search charges ending backlog like lost sales; the greedy
            # schedule is only replaced when the found one also scores better
            if schedule_key(self.score(found, objective), found) < schedule_key(greedy_score, greedy_result):
                result = found
            else:
                logger.debug("Best search leaf loses more sales than greedy; keeping greedy")

        improved = result is not None
        if result is None:
            result = greedy_result
            result.strategy = greedy.display_name
            result.metadata['fallback'] = 'greedy'

        result.metadata.update({
            'nodes_explored': budget.nodes,
            'leaves_reached': search.leaves,
            'pruned_nodes': search.pruned,
            'budget_exhausted': budget.exhausted,
            'stop_reason': budget.stop_reason,
            'greedy_score': greedy_score,
            'best_score': self.score(result, objective),
            'search_best_score': search.best_score,
            'improved_on_greedy': improved,
        })
        return result
