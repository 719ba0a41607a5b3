"""Centralized constants for the hanzi-srs scheduler.

All magic numbers and algorithm defaults live here so every layer
imports from a single source of truth.
"""

# ---------- FSRS defaults ----------
DEFAULT_REQUEST_RETENTION = 0.9
DEFAULT_MAXIMUM_INTERVAL = 36500
DEFAULT_WEIGHTS = (
    0.40255,
    1.18385,
    3.173,
    15.69105,
    7.19497,
    0.5345,
    1.4604,
    0.0046,
    1.54575,
    0.1192,
    1.01925,
    1.9395,
    0.11,
    0.29605,
    2.2698,
    0.2315,
    2.9898,
    0.51655,
    0.6621,
)
WEIGHT_COUNT = 19

# ---------- Bounds ----------
MIN_DIFFICULTY = 1.0
MAX_DIFFICULTY = 10.0
STABILITY_EPSILON = 0.01  # floor applied before negative powers of stability

# ---------- Time ----------
SECONDS_PER_DAY = 86400.0
RELEARN_STEP_MINUTES = 1

# ---------- Deck limits ----------
DEFAULT_DAILY_NEW_LIMIT = 20
DEFAULT_DAILY_REVIEW_LIMIT = 100
