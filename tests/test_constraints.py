import datetime as dt

import pytest

from vault_mealplanner.constraints import (
    current_season,
    is_in_season,
    is_main_eligible,
    meets_constraints,
    normalize_season,
)
from vault_mealplanner.models import DayConstraints, difficulty_level
from tests.conftest import make_recipe

CONSTRAINTS = {
    "Monday": DayConstraints(max_time=30, needs_kid_meal=True),
    "Tuesday": DayConstraints(max_difficulty="medium"),
}


def test_day_without_constraints_accepts_anything():
    kid_only = make_recipe("Nuggets", kid_friendly=True)
    assert meets_constraints(kid_only, "Sunday", CONSTRAINTS)
    assert meets_constraints(kid_only, "Sunday", CONSTRAINTS, is_kid_meal=True)


def test_max_time_ignores_unknown_time():
    assert meets_constraints(make_recipe("Quick", prep_time=10, cook_time=20), "Monday", CONSTRAINTS)
    assert not meets_constraints(make_recipe("Slow", prep_time=20, cook_time=20), "Monday", CONSTRAINTS)
    assert meets_constraints(make_recipe("Unknown"), "Monday", CONSTRAINTS)


def test_max_difficulty_defaults_unknown_to_medium():
    assert meets_constraints(make_recipe("Unknown"), "Tuesday", CONSTRAINTS)
    assert meets_constraints(make_recipe("Easy", difficulty="easy"), "Tuesday", CONSTRAINTS)
    assert not meets_constraints(make_recipe("Hard", difficulty="hard"), "Tuesday", CONSTRAINTS)


def test_kid_only_recipe_rejected_as_main_on_kid_meal_day():
    kid_only = make_recipe("Nuggets", kid_friendly=True)
    both = make_recipe("Pasta", kid_friendly=True, family_friendly=True)
    assert not meets_constraints(kid_only, "Monday", CONSTRAINTS)
    assert meets_constraints(both, "Monday", CONSTRAINTS)


def test_kid_meal_mode_requires_kid_only_recipes():
    assert meets_constraints(make_recipe("Nuggets", kid_friendly=True), "Monday", CONSTRAINTS, True)
    assert not meets_constraints(
        make_recipe("Pasta", kid_friendly=True, family_friendly=True), "Monday", CONSTRAINTS, True
    )
    assert not meets_constraints(make_recipe("Curry"), "Monday", CONSTRAINTS, True)
    # time limits only apply to the main meal
    assert meets_constraints(
        make_recipe("Slow Nuggets", kid_friendly=True, prep_time=60), "Monday", CONSTRAINTS, True
    )


def test_is_main_eligible_excludes_kid_only_on_any_day():
    assert not is_main_eligible(make_recipe("Nuggets", kid_friendly=True), "Sunday", CONSTRAINTS)
    assert is_main_eligible(make_recipe("Roast"), "Sunday", CONSTRAINTS)


@pytest.mark.parametrize("value, expected", [
    ("easy", 1), ("Medium", 2), ("HARD", 3), (None, 2), ("tricky", 2),
])
def test_difficulty_level(value, expected):
    assert difficulty_level(value) == expected


def test_normalize_season():
    assert normalize_season("Autumn") == ["fall"]
    assert normalize_season(["late summer", "Winter", "monsoon", "winter"]) == ["summer", "winter"]
    assert normalize_season(None) == []


def test_current_season_by_hemisphere():
    july = dt.date(2026, 7, 1)
    assert current_season("northern", july) == "summer"
    assert current_season("southern", july) == "winter"
    assert current_season("northern", dt.date(2026, 12, 5)) == "winter"
    assert current_season("southern", dt.date(2026, 10, 19)) == "spring"


def test_is_in_season():
    assert is_in_season(make_recipe("Any"), "summer")
    assert is_in_season(make_recipe("Stew", season=("fall", "winter")), "winter")
    assert not is_in_season(make_recipe("Stew", season=("fall", "winter")), "summer")
