"""Matching weights, boosts and score buckets.

These are separated from the scoring logic so they're easy to tune.
"""

# Base category weights (sum to 1.0)
BASE_WEIGHTS = {
    "affordability": 0.25,
    "safety": 0.20,
    "convenience": 0.20,
    "lifestyle": 0.20,
    "commute": 0.15,
}

CATEGORIES = tuple(BASE_WEIGHTS)

# Priority tag -> per-category boost
PRIORITY_BOOSTS: dict[str, dict[str, float]] = {
    "cost": {"affordability": 0.15},
    "safety": {"safety": 0.15},
    "schools": {"convenience": 0.10, "safety": 0.05},
    "transit": {"commute": 0.10, "convenience": 0.05},
    "nightlife": {"lifestyle": 0.10},
    "commute": {"commute": 0.15},
}

# Age group -> per-category adjustment (seniors keep the boosted weights as-is)
AGE_GROUP_ADJUSTMENTS: dict[str, dict[str, float]] = {
    "family": {
        "safety": 0.05,
        "convenience": 0.05,
        "lifestyle": -0.05,
        "commute": -0.05,
    },
    "young-professional": {
        "lifestyle": 0.08,
        "commute": 0.07,
        "safety": -0.08,
        "convenience": -0.07,
    },
    "senior": {},
}

# Rent/budget ratio upper bound -> affordability score
AFFORDABILITY_BUCKETS: list[tuple[float, float]] = [
    (0.6, 1.0),
    (0.75, 0.9),
    (0.9, 0.8),
    (1.0, 0.6),
    (1.15, 0.3),
]
AFFORDABILITY_FLOOR = 0.1

# Distance to work (km) upper bound -> commute score
COMMUTE_BUCKETS: list[tuple[float, float]] = [
    (5, 1.0),
    (10, 0.85),
    (15, 0.7),
    (25, 0.5),
    (35, 0.3),
]
COMMUTE_FLOOR = 0.1
COMMUTE_TRANSIT_BONUS_THRESHOLD = 70
COMMUTE_TRANSIT_BONUS = 0.1

# Convenience component weights
CONVENIENCE_TRANSIT_WEIGHT = 0.4
CONVENIENCE_AMENITY_WEIGHT = 0.4
CONVENIENCE_SCHOOL_WEIGHT = 0.2
CONVENIENCE_WALKABLE_WEIGHT = 0.1
AMENITY_NORMALIZER = 150

# Neutral scores returned when a scorer can't evaluate a record
NEUTRAL_SCORE = 0.5
NEUTRAL_COMMUTE_SCORE = 0.7

# Relative rent difference upper bound -> cost rating (0-5)
COST_RATING_BUCKETS: list[tuple[float, float]] = [
    (-0.2, 5.0),
    (-0.1, 4.5),
    (0.1, 4.0),
    (0.2, 3.5),
    (0.3, 3.0),
]
COST_RATING_FLOOR = 2.5

# Ranking
MAX_REASONS = 4
STALE_DATA_DAYS = 7
STALE_DATA_PENALTY = 0.1
MIN_CONFIDENCE = 0.3
REASONING_THRESHOLD = 0.8
SCHOOL_HIGHLIGHT_RATING = 4.2

# Interaction feedback
INTERACTION_DELTAS = {
    "view": 1,
    "save": 3,
    "contact": 5,
    "reject": -2,
}
INTERACTION_SCALE = 0.02
MAX_INTERACTION_ADJUSTMENT = 0.2
