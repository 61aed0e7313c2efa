"""
Plan assembly: assigns a recipe to every slot of the horizon.

Passes, in order:
1. eligibility pre-pass - strategy chain builds a pool per slot
2. sequential pass      - day order, no repeats, no identical neighbours
3. fallback pass        - fills gaps, repeats allowed
4. kid-meal pass        - secondary dish on days that need one
"""

from __future__ import annotations
import random
from typing import Dict, List, Optional, Sequence, Set

from .config import PlanSettings
from .constraints import is_main_eligible
from .models import PlanResult, Recipe
from .scoring import select_best_recipe
from .strategies import SelectionContext, build_main_pool, select_kid_meal


class _Assignment:
    """Per-slot picks plus the set of recipe paths already placed."""

    def __init__(self, count: int) -> None:
        self.slots: List[Optional[Recipe]] = [None] * count
        self.used: Set[str] = set()

    def assign(self, index: int, recipe: Recipe) -> None:
        self.slots[index] = recipe
        self.used.add(recipe.path)

    def filled(self) -> List[Recipe]:
        return [r for r in self.slots if r is not None]

    def neighbour_paths(self, index: int) -> Set[str]:
        paths = set()
        for j in (index - 1, index + 1):
            if 0 <= j < len(self.slots) and self.slots[j] is not None:
                paths.add(self.slots[j].path)
        return paths


def _prefer_spaced(pool: List[Recipe], assignment: _Assignment, index: int) -> List[Recipe]:
    neighbours = assignment.neighbour_paths(index)
    spaced = [r for r in pool if r.path not in neighbours]
    # a repeat beats an empty day
    return spaced or pool


def eligible_pools(
    recipes: Sequence[Recipe],
    settings: PlanSettings,
    count: int,
    assignment: _Assignment,
) -> List[List[Recipe]]:
    context = SelectionContext(selected=assignment.filled())
    return [
        build_main_pool(recipes, settings.day_for_slot(i), settings, context)[1]
        for i in range(count)
    ]


def assign_main_meals(
    pools: List[List[Recipe]],
    assignment: _Assignment,
    rng: random.Random,
    now: Optional[int] = None,
) -> None:
    for i, eligible in enumerate(pools):
        pool = [r for r in eligible if r.path not in assignment.used]
        pool = _prefer_spaced(pool, assignment, i)
        chosen = select_best_recipe(
            pool, assignment.filled(), rng=rng,
            day_index=i, day_sequence=assignment.slots, now=now,
        )
        if chosen is not None:
            assignment.assign(i, chosen)


def fill_gaps(
    recipes: Sequence[Recipe],
    settings: PlanSettings,
    assignment: _Assignment,
    rng: random.Random,
) -> None:
    for i, recipe in enumerate(assignment.slots):
        if recipe is not None:
            continue
        day = settings.day_for_slot(i)
        pool = [r for r in recipes if is_main_eligible(r, day, settings.day_constraints)]
        if pool:
            assignment.assign(i, rng.choice(_prefer_spaced(pool, assignment, i)))


def assign_kid_meals(
    recipes: Sequence[Recipe],
    settings: PlanSettings,
    assignment: _Assignment,
    rng: random.Random,
    now: Optional[int] = None,
) -> Dict[int, Recipe]:
    kid_meals: Dict[int, Recipe] = {}
    kid_friendly = [r for r in recipes if r.kid_friendly]
    if not kid_friendly:
        return kid_meals

    per_week = settings.meals_per_week
    for i, main in enumerate(assignment.slots):
        day = settings.day_for_slot(i)
        if not settings.needs_kid_meal(day) or main is None:
            continue
        if settings.skip_kid_meal_if_family_friendly and main.family_friendly:
            continue

        week_start = settings.week_for_slot(i) * per_week
        week_kid_meals = [
            kid_meals[j] for j in range(week_start, week_start + per_week) if j in kid_meals
        ]
        context = SelectionContext(
            selected=assignment.filled() + week_kid_meals,
            is_kid_meal=True,
            week_kid_meals=week_kid_meals,
        )
        kid = select_kid_meal(kid_friendly, day, settings, context, rng=rng, now=now)
        if kid is not None:
            kid_meals[i] = kid
    return kid_meals


def generate_plan(
    recipes: Sequence[Recipe],
    settings: PlanSettings,
    rng: Optional[random.Random] = None,
    now: Optional[int] = None,
) -> PlanResult:
    rng = rng or random.Random()
    count = settings.horizon
    assignment = _Assignment(count)
    if not recipes:
        return PlanResult(
            main_track=assignment.slots,
            warnings=["No recipes available. Add recipes to the recipe folder."],
        )

    pools = eligible_pools(recipes, settings, count, assignment)
    assign_main_meals(pools, assignment, rng, now=now)
    fill_gaps(recipes, settings, assignment, rng)
    kid_meals = assign_kid_meals(recipes, settings, assignment, rng, now=now)

    result = PlanResult(main_track=assignment.slots, kid_meals=kid_meals)
    filled = len(result.filled_meals)
    if filled < count:
        result.warnings.append(
            f"Could only select {filled} out of {count} meals. "
            "Check your constraints or add more recipes."
        )
    return result
