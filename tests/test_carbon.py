# tests/test_carbon.py
"""Footprint estimator: household scale, category subtotals, multipliers, tiers."""
import math
from itertools import accumulate

import pytest

from footprint_engine.carbon import (
    HouseholdInput,
    calc_avoided_emissions,
    calc_category_subtotals,
    calc_practice_multiplier,
    classify_tier,
    estimate_footprint,
    household_scale,
)
from footprint_engine.constants import CATEGORY_KEYS, FACTORS
from footprint_engine.errors import InputError

ALL_PRACTICES = list(FACTORS["practice"])


@pytest.fixture
def baseline():
    return HouseholdInput(people=1)


# ---------------------------------------------------------------------------
# Household scale
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("people", range(1, 11))
def test_household_scale_formula(people):
    assert household_scale(people) == pytest.approx(max(0.6, 1 - 0.1 * (people - 1)))


@pytest.mark.parametrize("people", [5, 6, 8, 20])
def test_household_scale_saturates_at_floor(people):
    assert household_scale(people) == 0.6


def test_household_scale_only_touches_home():
    one = calc_category_subtotals(HouseholdInput(people=1))
    four = calc_category_subtotals(HouseholdInput(people=4))
    assert four["home"] == pytest.approx(one["home"] * 4 * 0.7)
    assert four["transport"] == pytest.approx(one["transport"] * 4)
    assert four["food"] == pytest.approx(one["food"] * 4)
    assert four["other"] == pytest.approx(one["other"] * 4)


# ---------------------------------------------------------------------------
# Category subtotals
# ---------------------------------------------------------------------------

def test_subtotals_keep_category_order(baseline):
    assert list(calc_category_subtotals(baseline)) == CATEGORY_KEYS


def test_flights_are_household_level():
    small = calc_category_subtotals(HouseholdInput(people=1, annual_flights="many"))
    large = calc_category_subtotals(HouseholdInput(people=6, annual_flights="many"))
    assert small["flights"] == large["flights"] == 2.0


@pytest.mark.parametrize("mode,factor", sorted(FACTORS["transport"].items()))
def test_transport_factor_applied(mode, factor):
    out = calc_category_subtotals(HouseholdInput(people=2, transport_mode=mode))
    assert out["transport"] == pytest.approx(2.1 * 2 * factor)


def test_unknown_category_value_raises():
    with pytest.raises(InputError) as exc:
        calc_category_subtotals(HouseholdInput.model_construct(diet="pescatarian"))
    assert exc.value.field == "diet"


# ---------------------------------------------------------------------------
# Practice multiplier
# ---------------------------------------------------------------------------

def test_no_practices_is_neutral():
    assert calc_practice_multiplier(frozenset()) == 1.0


def test_practice_multiplier_monotonic_and_floored():
    values = [calc_practice_multiplier(ALL_PRACTICES[:n]) for n in range(len(ALL_PRACTICES) + 1)]
    assert all(b <= a for a, b in zip(values, values[1:]))
    assert min(values) >= 0.6


def test_all_practices_product():
    expected = math.prod(FACTORS["practice"].values())
    assert expected == pytest.approx(0.6052887, abs=1e-6)
    assert calc_practice_multiplier(ALL_PRACTICES) == pytest.approx(expected)


def test_practice_multiplier_floor_clamps():
    factors = {"a": 0.5, "b": 0.9}
    assert calc_practice_multiplier(["a", "b"], factors=factors) == 0.6
    assert calc_practice_multiplier(["b"], factors=factors) == pytest.approx(0.9)


def test_unknown_practice_raises():
    with pytest.raises(InputError):
        calc_practice_multiplier(["composting"])


def test_running_product_matches_accumulate():
    running = list(accumulate(FACTORS["practice"].values(), lambda a, b: a * b))
    for n, expected in enumerate(running, start=1):
        assert calc_practice_multiplier(ALL_PRACTICES[:n]) == pytest.approx(max(0.6, expected))


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("per_person,code", [
    (0.0, "S"),
    (3.0, "S"),
    (3.0001, "A"),
    (5.0, "A"),
    (5.68, "B"),
    (7.0, "B"),
    (9.0, "C"),
    (9.0001, "D"),
    (1e9, "D"),
    (math.inf, "D"),
])
def test_tier_bands_inclusive_upper(per_person, code):
    assert classify_tier(per_person).code == code


def test_tier_labels():
    assert classify_tier(1).label == "excellent"
    assert classify_tier(100).label == "needs significant improvement"


def test_tier_never_fails_to_match():
    assert classify_tier(float("nan")).code == "D"


# ---------------------------------------------------------------------------
# Avoided emissions
# ---------------------------------------------------------------------------

def test_avoided_emissions_ten_km():
    assert calc_avoided_emissions(10) == pytest.approx(1.9)


def test_avoided_emissions_negative_clamped():
    assert calc_avoided_emissions(-5) == 0.0


@pytest.mark.parametrize("km", [0.5, 3, 12.5, 20])
def test_avoided_emissions_linear(km):
    assert calc_avoided_emissions(km) == pytest.approx(0.19 * km)


# ---------------------------------------------------------------------------
# Full estimate
# ---------------------------------------------------------------------------

def test_single_person_defaults(baseline):
    r = estimate_footprint(baseline, 0)
    assert r.breakdown["home"] == pytest.approx(1.4)
    assert r.breakdown["transport"] == pytest.approx(2.1)
    assert r.breakdown["food"] == pytest.approx(1.7)
    assert r.breakdown["other"] == pytest.approx(0.9)
    assert r.breakdown["flights"] == 0.0
    assert r.subtotal == pytest.approx(6.1)
    assert r.total == pytest.approx(6.1)
    assert r.per_person == pytest.approx(6.1)
    assert r.tier.code == "B"


def test_four_person_household():
    r = estimate_footprint(HouseholdInput(people=4), 0)
    assert r.household_scale == pytest.approx(0.7)
    assert r.breakdown["home"] == pytest.approx(3.92)
    assert r.breakdown["transport"] == pytest.approx(8.4)
    assert r.breakdown["food"] == pytest.approx(6.8)
    assert r.breakdown["other"] == pytest.approx(3.6)
    assert r.subtotal == pytest.approx(22.72)
    assert r.per_person == pytest.approx(5.68)
    assert r.tier.code == "B"


def test_all_practices_with_full_bonus():
    hh = HouseholdInput(people=1, practices=frozenset(ALL_PRACTICES))
    r = estimate_footprint(hh, 4)
    assert r.bonus_multiplier == pytest.approx(0.92)
    assert r.practice_multiplier == pytest.approx(0.6052887, abs=1e-6)
    assert r.total == pytest.approx(6.1 * 0.6052887 * 0.92, abs=1e-5)
    assert r.tier.code == "A"


def test_zero_people_per_person_falls_back_to_total():
    r = estimate_footprint(HouseholdInput.model_construct(people=0, annual_flights="many"), 0)
    assert r.total == pytest.approx(2.0)
    assert r.per_person == r.total


def test_avoided_is_independent_of_household():
    a = estimate_footprint(HouseholdInput(people=1, walked_km_today=10), 0)
    b = estimate_footprint(HouseholdInput(people=7, diet="meat", walked_km_today=10), 4)
    assert a.avoided_kg == b.avoided_kg == pytest.approx(1.9)


def test_estimate_is_idempotent():
    hh = HouseholdInput(people=3, transport_mode="car", practices=frozenset(["recycle", "unplug"]))
    assert estimate_footprint(hh, 1) == estimate_footprint(hh, 1)


@pytest.mark.parametrize("bonus", range(0, 5))
def test_total_non_negative(bonus):
    hh = HouseholdInput(people=8, transport_mode="active", diet="veg", energy_saving="high",
                        lifestyle_spending="frugal", practices=frozenset(ALL_PRACTICES))
    assert estimate_footprint(hh, bonus).total >= 0


@pytest.mark.parametrize("bonus", [-1, 5, 60, 1.5, True, None])
def test_out_of_range_bonus_rejected(baseline, bonus):
    with pytest.raises(InputError) as exc:
        estimate_footprint(baseline, bonus)
    assert exc.value.field == "bonus"
