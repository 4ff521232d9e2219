# footprint_engine/carbon.py

from dataclasses import dataclass
from typing import Annotated, FrozenSet, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from .constants import (
    AVOIDED_PER_KM_CAR_KG,
    BASE,
    CATEGORY_KEYS,
    FACTORS,
    HOUSEHOLD_SCALE_FLOOR,
    HOUSEHOLD_SCALE_STEP,
    PRACTICE_FLOOR,
    TIER_BANDS,
)
from .errors import InputError
from .survey import bonus_multiplier


TransportMode = Literal["car", "mixed", "transit", "active"]
Diet = Literal["meat", "mixed", "veg"]
EnergySaving = Literal["high", "mid", "low"]
LifestyleSpending = Literal["frugal", "mid", "spend"]
AnnualFlights = Literal["none", "few", "some", "many"]
Practice = Literal["eco_bag", "tumbler", "reduce_disposable", "recycle", "unplug", "temp_control"]


class HouseholdInput(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    people: PositiveInt = 1
    transport_mode: TransportMode = "mixed"
    diet: Diet = "mixed"
    energy_saving: EnergySaving = "mid"
    lifestyle_spending: LifestyleSpending = "mid"
    annual_flights: AnnualFlights = "none"
    practices: FrozenSet[Practice] = frozenset()
    walked_km_today: Annotated[float, Field(allow_inf_nan=False)] = 0.0


@dataclass(frozen=True)
class Tier:
    code: str
    label: str
    upper_bound: float


@dataclass(frozen=True)
class FootprintResult:
    breakdown: dict
    subtotal: float
    household_scale: float
    practice_multiplier: float
    bonus_multiplier: float
    total: float
    per_person: float
    tier: Tier
    avoided_kg: float


def _factor(table_name, key):
    table = FACTORS[table_name]
    if key not in table:
        raise InputError(table_name, key)
    return table[key]


def household_scale(people):
    return max(HOUSEHOLD_SCALE_FLOOR, 1 - HOUSEHOLD_SCALE_STEP * (people - 1))


def calc_category_subtotals(household: HouseholdInput, scale=None) -> dict:
    """Per-category annual emissions (tCO2e/yr), keyed in CATEGORY_KEYS order."""
    people = household.people
    if scale is None:
        scale = household_scale(people)

    home = BASE["home_per_person"] * people * scale * _factor("energy", household.energy_saving)
    transport = BASE["transport_per_person"] * people * _factor("transport", household.transport_mode)
    food = BASE["food_per_person"] * people * _factor("diet", household.diet)
    other = BASE["other_per_person"] * people * _factor("lifestyle", household.lifestyle_spending)
    flights = _factor("flights", household.annual_flights)

    values = [home, transport, food, other, flights]
    return dict(zip(CATEGORY_KEYS, values))


def calc_practice_multiplier(practices, factors=None, floor=PRACTICE_FLOOR):
    if factors is None:
        factors = FACTORS["practice"]

    mul = 1.0
    for key in practices:
        if key not in factors:
            raise InputError("practice", key)
        mul *= factors[key]
    return max(floor, mul)


def classify_tier(per_person) -> Tier:
    for upper_bound, code, label in TIER_BANDS:
        if per_person <= upper_bound:
            return Tier(code=code, label=label, upper_bound=upper_bound)
    # NaN compares false everywhere; fall through to the last band
    upper_bound, code, label = TIER_BANDS[-1]
    return Tier(code=code, label=label, upper_bound=upper_bound)


def calc_avoided_emissions(walked_km, per_km_kg=AVOIDED_PER_KM_CAR_KG):
    return max(0.0, walked_km) * per_km_kg


def estimate_footprint(household: HouseholdInput, bonus: int) -> FootprintResult:
    scale = household_scale(household.people)
    breakdown = calc_category_subtotals(household, scale)
    subtotal = sum(breakdown.values())

    practice_mul = calc_practice_multiplier(household.practices)
    bonus_mul = bonus_multiplier(bonus)
    total = subtotal * practice_mul * bonus_mul

    people = household.people
    per_person = total / people if people > 0 else total

    return FootprintResult(
        breakdown=breakdown,
        subtotal=subtotal,
        household_scale=scale,
        practice_multiplier=practice_mul,
        bonus_multiplier=bonus_mul,
        total=total,
        per_person=per_person,
        tier=classify_tier(per_person),
        avoided_kg=calc_avoided_emissions(household.walked_km_today),
    )
