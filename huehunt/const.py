# -----------------------------
# Game rules (tweak as needed)
# -----------------------------

INITIAL_TIME = 15                  # seconds on the clock at start
TIME_BONUS = 2                     # seconds added per correct guess
WRONG_GUESS_PENALTY = 3            # seconds removed per wrong guess
MAX_TIME = 30                      # clock never exceeds this

TICK_INTERVAL_MS = 1000            # countdown cadence

# Grid progression: (min score, grid size), checked top-down
GRID_STEPS = (
    (45, 8),
    (30, 7),
    (20, 6),
    (12, 5),
    (6, 4),
    (2, 3),
)
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 8

# Color difficulty
START_DELTA = 15                   # sat/light gap (percentage points) at score 0
DELTA_STEP_EVERY = 3               # gap shrinks by 1 every N points
MIN_DELTA = 1

# Base color ranges [lo, hi)
SATURATION_RANGE = (40, 80)
LIGHTNESS_RANGE = (30, 70)
CHANNEL_MIDPOINT = 50              # above this the gap is subtracted

# Rank titles: (score below, title); last entry catches everything else
RANKS = (
    (10, "Color Novice"),
    (20, "Keen Eye"),
    (35, "Visual Artist"),
    (50, "Color Master"),
)
TOP_RANK = "Eye of God"
