FOOTPRINT_ENGINE_VERSION = "0.1.0"

# footprint_engine/__init__.py

import logging

from .carbon import (
    FootprintResult,
    HouseholdInput,
    Tier,
    calc_avoided_emissions,
    calc_category_subtotals,
    calc_practice_multiplier,
    classify_tier,
    estimate_footprint,
    household_scale,
)
from .constants import AVOIDED_PER_KM_CAR_KG, CATEGORY_KEYS, CATEGORY_NAMES
from .errors import InputError
from .survey import SurveyAnswers, bonus_multiplier, calc_survey_bonus, score_survey
from .validation import validate_household, validate_survey

logger = logging.getLogger(__name__)


def _household_inputs(household: HouseholdInput) -> dict:
    inputs = household.model_dump()
    inputs["practices"] = sorted(household.practices)
    return inputs


def _survey_inputs(answers: SurveyAnswers) -> dict:
    inputs = answers.model_dump()
    inputs["reasons"] = sorted(answers.reasons)
    inputs["satisfaction"] = sorted(answers.satisfaction)
    return inputs


def run_footprint(household, survey=None):
    if not isinstance(household, HouseholdInput):
        household = validate_household(household)
    if not isinstance(survey, SurveyAnswers):
        survey = validate_survey(survey)

    bonus = calc_survey_bonus(survey)
    result = estimate_footprint(household, bonus)

    logger.debug(
        "footprint run: people=%s bonus=%s total=%.4f tier=%s",
        household.people, bonus, result.total, result.tier.code,
    )

    return {
        "engine_version": FOOTPRINT_ENGINE_VERSION,
        "inputs": {
            "household": _household_inputs(household),
            "survey": _survey_inputs(survey),
        },
        "survey": {
            "bonus": bonus,
            "bonus_multiplier": result.bonus_multiplier,
        },
        "footprint": {
            "breakdown": [
                {"key": key, "name": CATEGORY_NAMES[key], "value": result.breakdown[key]}
                for key in CATEGORY_KEYS
            ],
            "subtotal": result.subtotal,
            "household_scale": result.household_scale,
            "practice_multiplier": result.practice_multiplier,
            "bonus_multiplier": result.bonus_multiplier,
            "total": result.total,
            "per_person": result.per_person,
            "tier": {"code": result.tier.code, "label": result.tier.label},
        },
        "walking": {
            "walked_km_today": household.walked_km_today,
            "avoided_kg": result.avoided_kg,
            "per_km_car_kg": AVOIDED_PER_KM_CAR_KG,
        },
    }


__all__ = [
    "FOOTPRINT_ENGINE_VERSION",
    "FootprintResult",
    "HouseholdInput",
    "InputError",
    "SurveyAnswers",
    "Tier",
    "bonus_multiplier",
    "calc_avoided_emissions",
    "calc_category_subtotals",
    "calc_practice_multiplier",
    "calc_survey_bonus",
    "classify_tier",
    "estimate_footprint",
    "household_scale",
    "run_footprint",
    "score_survey",
    "validate_household",
    "validate_survey",
]
