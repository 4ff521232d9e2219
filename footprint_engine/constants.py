# footprint_engine/constants.py
# Demo constants (illustrative estimates, not for official reporting)

import math

# -------------------------------
# BASE RATES (tCO2e / person / year)
# -------------------------------
BASE = {
    "home_per_person": 1.4,       # home / energy
    "transport_per_person": 2.1,
    "food_per_person": 1.7,
    "other_per_person": 0.9,      # other consumption
}

HOUSEHOLD_SCALE_STEP = 0.1
HOUSEHOLD_SCALE_FLOOR = 0.6

# -------------------------------
# FACTOR TABLES
# -------------------------------
FACTORS = {
    "transport": {"car": 1.4, "mixed": 1.0, "transit": 0.75, "active": 0.4},
    "diet": {"meat": 1.3, "mixed": 1.0, "veg": 0.7},
    "energy": {"high": 0.8, "mid": 1.0, "low": 1.2},
    "lifestyle": {"frugal": 0.9, "mid": 1.0, "spend": 1.1},
    # household-level addend, not scaled by people
    "flights": {"none": 0.0, "few": 0.3, "some": 0.9, "many": 2.0},
    # multi-select, multiplied together, floor 0.6
    "practice": {
        "eco_bag": 0.95,
        "tumbler": 0.95,
        "reduce_disposable": 0.9,
        "recycle": 0.9,
        "unplug": 0.9,
        "temp_control": 0.92,
    },
}

PRACTICE_FLOOR = 0.6

BONUS_STEP = 0.02
BONUS_MAX = 4
KNOWS_TRAIL_POINTS = 1
WALKED_TRAIL_POINTS = 3

AVOIDED_PER_KM_CAR_KG = 0.19  # average passenger car, kgCO2/km

# -------------------------------
# TIER BANDS (per person, upper bound inclusive)
# -------------------------------
TIER_BANDS = [
    (3.0, "S", "excellent"),
    (5.0, "A", "good"),
    (7.0, "B", "average"),
    (9.0, "C", "needs improvement"),
    (math.inf, "D", "needs significant improvement"),
]

# -------------------------------
# CATEGORIES / COLOURS
# -------------------------------
CATEGORY_KEYS = ["home", "transport", "food", "other", "flights"]

CATEGORY_NAMES = {
    "home": "Home/Energy",
    "transport": "Transport",
    "food": "Food",
    "other": "Other consumption",
    "flights": "Flights",
}

COLORS = ["#2E7D5B", "#6BBE77", "#F2B705", "#2BA7B1", "#E85D4A"]
CATEGORY_COLORS = {CATEGORY_NAMES[k]: COLORS[i] for i, k in enumerate(CATEGORY_KEYS)}

# -------------------------------
# OPTION LABELS (UI)
# -------------------------------
TRANSPORT_LABELS = {
    "car": "Private car",
    "mixed": "Mixed",
    "transit": "Public transit",
    "active": "Walking / cycling",
}
DIET_LABELS = {"meat": "Meat-heavy", "mixed": "Mixed", "veg": "Vegetarian"}
ENERGY_LABELS = {"high": "A lot", "mid": "Average", "low": "Hardly at all"}
LIFESTYLE_LABELS = {"frugal": "Frugal", "mid": "Average", "spend": "Spender"}
FLIGHT_LABELS = {"none": "0 trips", "few": "1 trip", "some": "2-4 trips", "many": "5+ trips"}
PRACTICE_LABELS = {
    "eco_bag": "Reusable shopping bag",
    "tumbler": "Reusable cup",
    "reduce_disposable": "Fewer disposables",
    "recycle": "Sort recycling",
    "unplug": "Unplug idle devices",
    "temp_control": "Moderate heating/cooling",
}

SURVEY_REASONS = ["Health/exercise", "Enjoying nature", "Leisure with family/friends", "Event", "Other"]
SURVEY_SATISFACTION = ["Natural scenery", "Comfortable course", "Signposts", "Accessibility", "Other"]

PEOPLE_MIN = 1
PEOPLE_MAX = 8
WALK_KM_MAX = 20.0
WALK_KM_STEP = 0.5

# -------------------------------
# DEFAULT INPUTS
# -------------------------------
DEFAULT_HOUSEHOLD = {
    "people": 2,
    "transport_mode": "mixed",
    "diet": "mixed",
    "energy_saving": "mid",
    "lifestyle_spending": "mid",
    "annual_flights": "none",
    "practices": [],
    "walked_km_today": 3.0,
}

DEFAULT_SURVEY = {
    "knows_trail": False,
    "has_walked_trail": False,
    "reasons": [],
    "satisfaction": [],
}
