"""Schedule validation: checks that must hold for every constructed schedule.

Runs after a solve and reports violations instead of raising, so a caller can
decide whether a schedule is usable. Any violation indicates a solver bug.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..models.planning_config import PlanningConfig
from ..models.problem import LineProblem
from ..models.schedule import ScheduleResult


@dataclass
class ScheduleViolation:
    """Represents a schedule invariant violation (schedule invalid)."""
    category: str
    message: str
    details: Dict = field(default_factory=dict)


class ScheduleValidator:
    """Validates a ScheduleResult against its problem and capacity limits."""

    def __init__(self, result: ScheduleResult, problem: LineProblem, config: PlanningConfig):
        """Initialize validator.

        Args:
            result: Schedule to check
            problem: Demand and transition matrices it was built from
            config: Capacity limits it was built under
        """
        self.result = result
        self.problem = problem
        self.config = config

    def validate(self) -> Tuple[bool, List[ScheduleViolation]]:
        """Run all checks.

        Returns:
            Tuple of (is_valid, list of violations)
        """
        violations = []
        violations.extend(self._validate_horizon())
        violations.extend(self._validate_batch_limits())
        violations.extend(self._validate_capacity())
        violations.extend(self._validate_non_negative_state())
        violations.extend(self._validate_flow_balance())
        violations.extend(self._validate_totals())
        return (len(violations) == 0, violations)

    def _validate_horizon(self) -> List[ScheduleViolation]:
        if len(self.result.schedule) != self.problem.num_days:
            return [ScheduleViolation(
                category='Horizon',
                message=f"Schedule has {len(self.result.schedule)} days, expected {self.problem.num_days}",
            )]
        return []

    def _validate_batch_limits(self) -> List[ScheduleViolation]:
        """At most max_batches events per day, none above max_batch_size."""
        violations = []
        for day in self.result.schedule:
            if len(day.events) > self.config.max_batches:
                violations.append(ScheduleViolation(
                    category='Batch Count',
                    message=f"Day {day.day}: {len(day.events)} events exceed max_batches={self.config.max_batches}",
                    details={'day': day.day, 'events': len(day.events)},
                ))
            for event in day.events:
                if event.amount > self.config.max_batch_size or event.amount <= 0:
                    violations.append(ScheduleViolation(
                        category='Batch Size',
                        message=f"Day {day.day}: {event} outside 1..{self.config.max_batch_size}",
                        details={'day': day.day, 'product': event.product, 'amount': event.amount},
                    ))
        return violations

    def _validate_capacity(self) -> List[ScheduleViolation]:
        """Changeover penalties plus production fit in the daily capacity."""
        violations = []
        for day in self.result.schedule:
            if day.capacity_used > self.config.daily_capacity:
                violations.append(ScheduleViolation(
                    category='Capacity',
                    message=f"Day {day.day}: used {day.capacity_used} of {self.config.daily_capacity}",
                    details={'day': day.day, 'used': day.capacity_used},
                ))
        return violations

    def _validate_non_negative_state(self) -> List[ScheduleViolation]:
        violations = []
        for day in self.result.schedule:
            for name in ('inventory', 'backlog', 'lost_sales'):
                values = getattr(day, name)
                if any(v < 0 for v in values):
                    violations.append(ScheduleViolation(
                        category='Negative State',
                        message=f"Day {day.day}: negative {name} {values}",
                        details={'day': day.day, name: values},
                    ))
        return violations

    def _validate_flow_balance(self) -> List[ScheduleViolation]:
        """produced + lost + ending backlog - ending inventory == demand, per product."""
        violations = []
        produced = self.result.produced_by_product()
        lost = self.result.lost_by_product()
        demand = self.problem.total_demand()

        for p in range(self.problem.num_products):
            balance = produced[p] + lost[p] + self.result.ending_backlog[p] - self.result.ending_inventory[p]
            if balance != demand[p]:
                violations.append(ScheduleViolation(
                    category='Flow Balance',
                    message=f"Product {p}: balance {balance} != weekly demand {demand[p]}",
                    details={
                        'product': p,
                        'produced': produced[p],
                        'lost': lost[p],
                        'ending_backlog': self.result.ending_backlog[p],
                        'ending_inventory': self.result.ending_inventory[p],
                        'demand': demand[p],
                    },
                ))
        return violations

    def _validate_totals(self) -> List[ScheduleViolation]:
        """Reported totals match the per-day figures."""
        violations = []
        expected = {
            'total_penalty': sum(d.changeover_penalty for d in self.result.schedule),
            'total_cost': sum(d.changeover_cost for d in self.result.schedule),
            'total_lost_sales': sum(sum(d.lost_sales) for d in self.result.schedule),
        }
        for name, value in expected.items():
            reported = getattr(self.result, name)
            if reported != value:
                violations.append(ScheduleViolation(
                    category='Totals',
                    message=f"{name} reported {reported}, days sum to {value}",
                    details={name: reported, 'expected': value},
                ))
        return violations


def validate_schedule(result: ScheduleResult, problem: LineProblem, config: PlanningConfig) -> List[str]:
    """Violation messages for a schedule (empty when valid)."""
    _, violations = ScheduleValidator(result, problem, config).validate()
    return [f"{v.category}: {v.message}" for v in violations]
