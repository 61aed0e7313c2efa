from vault_mealplanner.config import PlanSettings
from vault_mealplanner.models import DayConstraints
from vault_mealplanner.strategies import (
    MAIN_MEAL_STRATEGIES,
    SelectionContext,
    build_main_pool,
    family_friendly_pool,
    kid_meal_pool,
    last_resort_pool,
    regular_pool,
    select_kid_meal,
    select_main_meal,
)
from tests.conftest import NOW, FixedRandom, make_recipe

FAMILY = make_recipe("Lasagne", family_friendly=True, kid_friendly=True, prep_time=20)
ADULT = make_recipe("Curry", prep_time=15)
SLOW = make_recipe("Roast", prep_time=90)
KID_A = make_recipe("Nuggets", kid_friendly=True)
KID_B = make_recipe("Fish Fingers", kid_friendly=True)
RECIPES = [FAMILY, ADULT, SLOW, KID_A, KID_B]


def make_settings(skip=True):
    return PlanSettings(
        skip_kid_meal_if_family_friendly=skip,
        day_constraints={"Monday": DayConstraints(max_time=30, needs_kid_meal=True)},
    )


def test_strategy_order():
    assert [name for name, _ in MAIN_MEAL_STRATEGIES] == ["family_friendly", "regular", "last_resort"]


def test_family_friendly_pool_only_on_kid_meal_days_with_skip_enabled():
    ctx = SelectionContext()
    assert family_friendly_pool(RECIPES, "Monday", make_settings(), ctx) == [FAMILY]
    assert family_friendly_pool(RECIPES, "Tuesday", make_settings(), ctx) == []
    assert family_friendly_pool(RECIPES, "Monday", make_settings(skip=False), ctx) == []
    assert family_friendly_pool(RECIPES, "Monday", make_settings(), SelectionContext(selected=[FAMILY])) == []


def test_regular_pool_applies_constraints_and_excludes_kid_only():
    ctx = SelectionContext(selected=[ADULT])
    assert regular_pool(RECIPES, "Monday", make_settings(), ctx) == [FAMILY]
    assert regular_pool(RECIPES, "Tuesday", make_settings(), SelectionContext()) == [FAMILY, ADULT, SLOW]


def test_last_resort_prefers_grown_up_recipes():
    settings = make_settings()
    assert last_resort_pool(RECIPES, "Monday", settings, SelectionContext(selected=[FAMILY, ADULT])) == [SLOW]
    assert last_resort_pool(
        RECIPES, "Monday", settings, SelectionContext(selected=[FAMILY, ADULT, SLOW])
    ) == [KID_A, KID_B]


def test_build_main_pool_falls_through_the_chain():
    settings = make_settings()
    assert build_main_pool(RECIPES, "Monday", settings, SelectionContext()) == ("family_friendly", [FAMILY])
    name, pool = build_main_pool(RECIPES, "Monday", settings, SelectionContext(selected=[FAMILY]))
    assert name == "regular" and pool == [ADULT]
    name, pool = build_main_pool(RECIPES, "Monday", settings, SelectionContext(selected=[FAMILY, ADULT]))
    assert name == "last_resort" and pool == [SLOW]
    assert build_main_pool([], "Monday", settings, SelectionContext()) == (None, [])


def test_select_main_meal_scores_the_winning_pool():
    settings = make_settings()
    assert select_main_meal(RECIPES, "Monday", settings, [], rng=FixedRandom(0.0), now=NOW) == FAMILY
    assert select_main_meal([], "Monday", settings, []) is None


def test_kid_meal_pool_stages():
    settings = make_settings()
    kid_friendly = [FAMILY, KID_A, KID_B]

    assert kid_meal_pool(kid_friendly, "Monday", settings, SelectionContext(is_kid_meal=True)) == (
        1, [KID_A, KID_B]
    )
    ctx = SelectionContext(selected=[KID_A], is_kid_meal=True, week_kid_meals=[KID_A])
    assert kid_meal_pool(kid_friendly, "Monday", settings, ctx) == (1, [KID_B])

    # week repeat allowed once the strict stage is exhausted
    ctx = SelectionContext(is_kid_meal=True, week_kid_meals=[KID_A, KID_B])
    assert kid_meal_pool(kid_friendly, "Monday", settings, ctx) == (2, [KID_A, KID_B])

    # everything used: any kid-friendly recipe, family-friendly included
    ctx = SelectionContext(selected=[KID_A, KID_B], is_kid_meal=True)
    assert kid_meal_pool(kid_friendly, "Monday", settings, ctx) == (4, kid_friendly)

    assert kid_meal_pool([], "Monday", settings, SelectionContext(is_kid_meal=True)) == (0, [])


def test_select_kid_meal_returns_kid_only_recipe():
    ctx = SelectionContext(selected=[ADULT], is_kid_meal=True)
    kid = select_kid_meal([FAMILY, KID_A, KID_B], "Monday", make_settings(), ctx, rng=FixedRandom(0.0), now=NOW)
    assert kid in (KID_A, KID_B)
