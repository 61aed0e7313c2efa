"""Per-day constraint checks and season helpers."""

from __future__ import annotations
import datetime as dt
from typing import Dict, Iterable, List, Optional, Union

from .models import DayConstraints, Recipe, difficulty_level

SEASONS = ("spring", "summer", "fall", "winter")


def meets_constraints(
    recipe: Recipe,
    day: str,
    constraints: Dict[str, DayConstraints],
    is_kid_meal: bool = False,
) -> bool:
    day_constraints = constraints.get(day)
    if not day_constraints:
        return True

    if is_kid_meal:
        # family-friendly dishes belong to the main track
        return recipe.kid_friendly and not recipe.family_friendly

    if day_constraints.needs_kid_meal and recipe.is_kid_only:
        return False

    if day_constraints.max_time:
        total = recipe.total_time
        if total > 0 and total > day_constraints.max_time:
            return False

    if day_constraints.max_difficulty:
        if recipe.difficulty_level > difficulty_level(day_constraints.max_difficulty):
            return False

    return True


def is_main_eligible(recipe: Recipe, day: str, constraints: Dict[str, DayConstraints]) -> bool:
    return not recipe.is_kid_only and meets_constraints(recipe, day, constraints, False)


# ---------- Seasons ----------

def normalize_season(value: Union[str, Iterable[str], None]) -> List[str]:
    if not value:
        return []
    raw = [value] if isinstance(value, str) else list(value)
    out: List[str] = []
    for s in raw:
        s = str(s).lower().strip()
        if "spring" in s:
            s = "spring"
        elif "summer" in s:
            s = "summer"
        elif "fall" in s or "autumn" in s:
            s = "fall"
        elif "winter" in s:
            s = "winter"
        if s in SEASONS and s not in out:
            out.append(s)
    return out


def current_season(hemisphere: str = "northern", today: Optional[dt.date] = None) -> str:
    month = (today or dt.date.today()).month
    if month in (3, 4, 5):
        season = "spring"
    elif month in (6, 7, 8):
        season = "summer"
    elif month in (9, 10, 11):
        season = "fall"
    else:
        season = "winter"
    if hemisphere == "southern":
        season = SEASONS[(SEASONS.index(season) + 2) % 4]
    return season


def is_in_season(recipe: Recipe, season: str) -> bool:
    return not recipe.season or season in recipe.season
