"""
Recipe selection strategies.

Main meals use an ordered chain of pool builders; the first builder that
returns a non-empty pool wins:

1. family_friendly - days needing a kid meal when the skip setting is on
2. regular         - everything meeting the day's constraints, no kid-only dishes
3. last_resort     - any unused recipe, ignoring day constraints

Kid meals relax through four stages (see kid_meal_pool).
"""

from __future__ import annotations
import dataclasses as dc
import random
from typing import Callable, List, Optional, Sequence, Tuple

from .config import PlanSettings
from .constraints import meets_constraints
from .models import Recipe
from .scoring import select_best_recipe


@dc.dataclass
class SelectionContext:
    selected: Sequence[Recipe] = ()        # recipes already chosen for the plan
    is_kid_meal: bool = False
    week_kid_meals: Sequence[Recipe] = ()  # kid meals chosen so far this week


PoolBuilder = Callable[[Sequence[Recipe], str, PlanSettings, SelectionContext], List[Recipe]]


def _unused(recipes: Sequence[Recipe], selected: Sequence[Recipe]) -> List[Recipe]:
    taken = {r.path for r in selected}
    return [r for r in recipes if r.path not in taken]


# ---------- Main Meal Pools ----------

def family_friendly_pool(
    recipes: Sequence[Recipe], day: str, settings: PlanSettings, context: SelectionContext
) -> List[Recipe]:
    if context.is_kid_meal or not settings.needs_kid_meal(day):
        return []
    if not settings.skip_kid_meal_if_family_friendly:
        return []
    return [
        r for r in _unused(recipes, context.selected)
        if r.family_friendly and meets_constraints(r, day, settings.day_constraints, False)
    ]


def regular_pool(
    recipes: Sequence[Recipe], day: str, settings: PlanSettings, context: SelectionContext
) -> List[Recipe]:
    pool = []
    for r in _unused(recipes, context.selected):
        if not meets_constraints(r, day, settings.day_constraints, context.is_kid_meal):
            continue
        if not context.is_kid_meal and r.is_kid_only:
            continue
        pool.append(r)
    return pool


def last_resort_pool(
    recipes: Sequence[Recipe], day: str, settings: PlanSettings, context: SelectionContext
) -> List[Recipe]:
    remaining = _unused(recipes, context.selected)
    grown_up = [r for r in remaining if not r.is_kid_only]
    return grown_up or remaining


MAIN_MEAL_STRATEGIES: List[Tuple[str, PoolBuilder]] = [
    ("family_friendly", family_friendly_pool),
    ("regular", regular_pool),
    ("last_resort", last_resort_pool),
]


def build_main_pool(
    recipes: Sequence[Recipe],
    day: str,
    settings: PlanSettings,
    context: SelectionContext,
    strategies: Sequence[Tuple[str, PoolBuilder]] = MAIN_MEAL_STRATEGIES,
) -> Tuple[Optional[str], List[Recipe]]:
    for name, builder in strategies:
        pool = builder(recipes, day, settings, context)
        if pool:
            return name, pool
    return None, []


def select_main_meal(
    recipes: Sequence[Recipe],
    day: str,
    settings: PlanSettings,
    selected: Sequence[Recipe],
    rng: Optional[random.Random] = None,
    now: Optional[int] = None,
) -> Optional[Recipe]:
    _, pool = build_main_pool(recipes, day, settings, SelectionContext(selected=selected))
    return select_best_recipe(pool, selected, rng=rng, now=now)


# ---------- Kid Meals ----------

def kid_meal_pool(
    kid_friendly: Sequence[Recipe],
    day: str,
    settings: PlanSettings,
    context: SelectionContext,
) -> Tuple[int, List[Recipe]]:
    """
    Return (stage, pool) for the first relaxation stage with candidates.

    1. meets kid constraints, unused this week and unused anywhere in the plan
    2. meets kid constraints, unused anywhere in the plan
    3. no constraint check, unused anywhere in the plan
    4. any kid-friendly recipe, including family-friendly ones

    Stages 1-3 only consider kid-only recipes. Stage 0 means no candidates.
    """
    kid_only = [r for r in kid_friendly if r.is_kid_only]
    used = {r.path for r in context.selected}
    this_week = {r.path for r in context.week_kid_meals}
    constraints = settings.day_constraints

    stages = [
        lambda r: meets_constraints(r, day, constraints, True)
        and r.path not in this_week and r.path not in used,
        lambda r: meets_constraints(r, day, constraints, True) and r.path not in used,
        lambda r: r.path not in used,
    ]
    for stage, keep in enumerate(stages, start=1):
        pool = [r for r in kid_only if keep(r)]
        if pool:
            return stage, pool

    pool = [r for r in kid_friendly if r.kid_friendly]
    return (4, pool) if pool else (0, [])


def select_kid_meal(
    kid_friendly: Sequence[Recipe],
    day: str,
    settings: PlanSettings,
    context: SelectionContext,
    rng: Optional[random.Random] = None,
    now: Optional[int] = None,
) -> Optional[Recipe]:
    _, pool = kid_meal_pool(kid_friendly, day, settings, context)
    # variety within the week matters more than over the whole horizon
    return select_best_recipe(pool, list(context.week_kid_meals), rng=rng, now=now)
