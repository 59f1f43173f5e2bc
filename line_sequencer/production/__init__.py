"""Production line mechanics: changeovers, candidate ranking, daily simulation."""

from .changeover import NO_TRANSITION, Transition, TransitionModel
from .ranking import Candidate, producible_amount, rank_candidates
from .day_state import DayState, append_day, finish, simulate_week
from .leveling import level_demand

__all__ = [
    "NO_TRANSITION",
    "Transition",
    "TransitionModel",
    "Candidate",
    "producible_amount",
    "rank_candidates",
    "DayState",
    "append_day",
    "finish",
    "simulate_week",
    "level_demand",
]
