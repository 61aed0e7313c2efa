"""
Recipe scoring (higher is better) and best-candidate selection.

The score blends:
- rating bonus and a difficulty nudge
- escalating penalty for repeats inside the plan
- recency window over the previous few days
- decay based on the recipe's lastUsed timestamp
- ingredient overlap with recipes already chosen
- adjacency rules (identical recipe on a neighbouring day is excluded)
- small random jitter to break ties
"""

from __future__ import annotations
import random
import time
from typing import Optional, Sequence

from .models import Recipe

BASE_SCORE = 100.0
RATING_STEP = 3
REPEAT_PENALTY = 75
RECENT_WINDOW_DAYS = 3
RECENT_MIN_PENALTY = 25.0
RECENT_MAX_PENALTY = 100.0
NEVER_USED_BONUS = 25.0
REST_BONUS_CAP = 30.0
OVERLAP_PENALTY = 5
SAME_MEAL_TYPE_PENALTY = 30
EASY_BONUS = 10
HARD_PENALTY = 5
JITTER = 10.0
ADJACENT_REPEAT_SCORE = -9999.0

MS_PER_DAY = 1000 * 60 * 60 * 24


def now_ms() -> int:
    return int(time.time() * 1000)


def rating_bonus(recipe: Recipe) -> float:
    # unrated recipes stay neutral
    if recipe.rating is None:
        return 0.0
    return float(max(0, (recipe.rating - 1) * RATING_STEP))


def repeat_penalty(recipe: Recipe, already_selected: Sequence[Recipe]) -> float:
    count = sum(1 for r in already_selected if r.path == recipe.path)
    return float(count * REPEAT_PENALTY * (count + 1))


def recency_penalty(recipe: Recipe, day_index: int, day_sequence: Sequence[Optional[Recipe]]) -> float:
    penalty = 0.0
    for i in range(max(0, day_index - RECENT_WINDOW_DAYS), day_index):
        other = day_sequence[i] if i < len(day_sequence) else None
        if other is not None and other.path == recipe.path:
            penalty += max(RECENT_MIN_PENALTY, RECENT_MAX_PENALTY / (day_index - i))
    return penalty


def history_adjustment(recipe: Recipe, now: int) -> float:
    """Penalise recently cooked recipes, reward well-rested ones."""
    if not recipe.last_used:
        return NEVER_USED_BONUS
    days = (now - recipe.last_used) / MS_PER_DAY
    adjustment = 0.0
    if days < 7:
        adjustment -= (7 - days) * 10
    elif days < 14:
        adjustment -= (14 - days) * 2
    adjustment += min(days, REST_BONUS_CAP)
    return adjustment


def ingredient_overlap(recipe: Recipe, other: Recipe) -> int:
    theirs = [i.lower() for i in other.ingredients]
    count = 0
    for ing in recipe.ingredients:
        mine = ing.lower()
        if any(mine in t or t in mine for t in theirs):
            count += 1
    return count


def overlap_penalty(recipe: Recipe, already_selected: Sequence[Recipe]) -> float:
    return float(sum(ingredient_overlap(recipe, s) * OVERLAP_PENALTY for s in already_selected))


def score_recipe(
    recipe: Recipe,
    already_selected: Sequence[Recipe],
    day_index: Optional[int] = None,
    day_sequence: Optional[Sequence[Optional[Recipe]]] = None,
    rng: Optional[random.Random] = None,
    now: Optional[int] = None,
) -> float:
    rng = rng or random
    score = BASE_SCORE
    score += rating_bonus(recipe)
    score -= repeat_penalty(recipe, already_selected)

    has_context = day_index is not None and day_sequence is not None
    if has_context:
        score -= recency_penalty(recipe, day_index, day_sequence)

    score += history_adjustment(recipe, now if now is not None else now_ms())
    score -= overlap_penalty(recipe, already_selected)

    if has_context:
        for neighbour in (day_index - 1, day_index + 1):
            if neighbour < 0 or neighbour >= len(day_sequence):
                continue
            other = day_sequence[neighbour]
            if other is None:
                continue
            if other.path == recipe.path:
                return ADJACENT_REPEAT_SCORE
            if other.meal_type and recipe.meal_type and other.meal_type == recipe.meal_type:
                score -= SAME_MEAL_TYPE_PENALTY
    elif already_selected:
        last = already_selected[-1]
        if last.name.lower() == recipe.name.lower():
            return ADJACENT_REPEAT_SCORE
        if last.meal_type and recipe.meal_type and last.meal_type == recipe.meal_type:
            score -= SAME_MEAL_TYPE_PENALTY

    if recipe.difficulty == "easy":
        score += EASY_BONUS
    elif recipe.difficulty == "hard":
        score -= HARD_PENALTY

    score += rng.random() * JITTER
    return score


def select_best_recipe(
    pool: Sequence[Recipe],
    already_selected: Sequence[Recipe],
    rng: Optional[random.Random] = None,
    day_index: Optional[int] = None,
    day_sequence: Optional[Sequence[Optional[Recipe]]] = None,
    now: Optional[int] = None,
) -> Optional[Recipe]:
    if not pool:
        return None
    rng = rng or random
    shuffled = list(pool)
    rng.shuffle(shuffled)

    scored = [
        (score_recipe(r, already_selected, day_index, day_sequence, rng=rng, now=now), r)
        for r in shuffled
    ]
    top = max(s for s, _ in scored)
    tied = [r for s, r in scored if s == top]
    return rng.choice(tied)
