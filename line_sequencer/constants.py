"""Centralized constants for the weekly sequencing solvers.

This module contains all hardcoded constants used across the constructors and
search strategies, including horizon length, scoring multipliers, search
parameters and the reference configuration defaults. Centralizing these values
ensures consistency and makes them easy to update.
"""

# ============================================================================
# HORIZON CONSTANTS
# ============================================================================

#: Number of days in the planning horizon
#: Day indices wrap modulo this value for cyclic look-ahead
HORIZON_DAYS = 7

#: Day labels used by exporters and summaries (index 0 = first planning day)
DAY_NAMES = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']

#: Product labels for the reference five-product configuration
PRODUCT_NAMES = ['P1', 'P2', 'P3', 'P4', 'P5']

#: Line identifiers for the reference two-line configuration
LINE_NAMES = ['L1', 'L2']

#: Sentinel for "no product produced yet" (first changeover of the horizon is free)
NO_PRODUCT = -1


# ============================================================================
# SCORING CONSTANTS
# ============================================================================

#: Multiplier applied to lost sales when scoring a schedule
#: Large enough that one lost unit outweighs any realistic changeover total
LOST_SALES_MULTIPLIER = 100_000

#: Percentage base for the combined objective weight split
WEIGHT_PERCENT_TOTAL = 100

#: Density values closer than this are treated as equal when ranking
DENSITY_TOLERANCE = 1e-4


# ============================================================================
# HEURISTIC / SEARCH CONSTANTS
# ============================================================================

#: Discount applied to the next-day transition estimate (look-ahead constructor)
LOOKAHEAD_DISCOUNT = 0.5

#: Number of epsilon-greedy restarts in the randomized multi-start search
SEARCH_ITERATIONS = 100

#: Probability of picking a random candidate instead of the top-ranked one
SEARCH_EPSILON = 0.15

#: Maximum number of daily plans expanded per branch-and-bound node
EXACT_BRANCHING_FACTOR = 12

#: Hard cap on branch-and-bound nodes explored per solve
EXACT_NODE_BUDGET = 50_000

#: Demand days above this multiple of the weekly average are leveled
LEVELING_PEAK_FACTOR = 1.2


# ============================================================================
# REFERENCE CONFIGURATION DEFAULTS
# ============================================================================

#: Units + changeover penalty consumable per day
DEFAULT_DAILY_CAPACITY = 1000

#: Maximum units per production event
DEFAULT_MAX_BATCH_SIZE = 1000

#: Maximum production events (changeovers) per day
DEFAULT_MAX_BATCHES = 3

#: Default penalty share of the combined objective (percent)
DEFAULT_PENALTY_WEIGHT = 50

#: Default cost share of the combined objective (percent)
DEFAULT_COST_WEIGHT = 50

#: Default demand per day and product when a grid is initialized
DEFAULT_DEMAND_UNITS = 100

#: Default off-diagonal changeover penalty when a grid is initialized
DEFAULT_TRANSITION_PENALTY = 30

#: Default off-diagonal changeover cost when a grid is initialized
DEFAULT_TRANSITION_COST = 100
