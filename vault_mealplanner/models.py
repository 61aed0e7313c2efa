"""
Core data types for the vault meal planner.

- Recipe: one recipe note, identified by its vault path (names may collide)
- DayConstraints: per-weekday limits (time, difficulty, kid meal)
- PlanResult: the day-by-day assignment produced by the planner
"""

from __future__ import annotations
import dataclasses as dc
from typing import Dict, List, Optional, Tuple

DIFFICULTY_LEVELS = {"easy": 1, "medium": 2, "hard": 3}
DEFAULT_DIFFICULTY_LEVEL = 2


def difficulty_level(difficulty: Optional[str]) -> int:
    if not difficulty:
        return DEFAULT_DIFFICULTY_LEVEL
    return DIFFICULTY_LEVELS.get(str(difficulty).strip().lower(), DEFAULT_DIFFICULTY_LEVEL)


# ---------- Data Models ----------

@dc.dataclass(frozen=True)
class Recipe:
    path: str
    name: str = dc.field(compare=False)
    ingredients: Tuple[str, ...] = dc.field(default=(), compare=False)
    prep_time: Optional[int] = dc.field(default=None, compare=False)
    cook_time: Optional[int] = dc.field(default=None, compare=False)
    difficulty: Optional[str] = dc.field(default=None, compare=False)   # easy | medium | hard
    kid_friendly: bool = dc.field(default=False, compare=False)
    family_friendly: bool = dc.field(default=False, compare=False)
    last_used: Optional[int] = dc.field(default=None, compare=False)    # epoch ms
    season: Tuple[str, ...] = dc.field(default=(), compare=False)
    meal_type: Optional[str] = dc.field(default=None, compare=False)
    rating: Optional[int] = dc.field(default=None, compare=False)
    tags: Tuple[str, ...] = dc.field(default=(), compare=False)

    @property
    def total_time(self) -> int:
        return (self.prep_time or 0) + (self.cook_time or 0)

    @property
    def is_kid_only(self) -> bool:
        """Kid-friendly dishes that cannot serve as the family's main meal."""
        return self.kid_friendly and not self.family_friendly

    @property
    def difficulty_level(self) -> int:
        return difficulty_level(self.difficulty)


@dc.dataclass
class DayConstraints:
    max_time: Optional[int] = None
    max_difficulty: Optional[str] = None
    needs_kid_meal: bool = False

    @staticmethod
    def from_dict(d: Dict) -> "DayConstraints":
        max_time = d.get("max_time", d.get("maxTime"))
        max_difficulty = d.get("max_difficulty", d.get("maxDifficulty"))
        return DayConstraints(
            max_time=int(max_time) if max_time else None,
            max_difficulty=str(max_difficulty).lower() if max_difficulty else None,
            needs_kid_meal=bool(d.get("needs_kid_meal", d.get("needsKidMeal", False))),
        )

    def to_dict(self) -> Dict:
        out: Dict = {}
        if self.max_time:
            out["max_time"] = self.max_time
        if self.max_difficulty:
            out["max_difficulty"] = self.max_difficulty
        if self.needs_kid_meal:
            out["needs_kid_meal"] = True
        return out


@dc.dataclass
class PlanResult:
    main_track: List[Optional[Recipe]]
    kid_meals: Dict[int, Recipe] = dc.field(default_factory=dict)
    warnings: List[str] = dc.field(default_factory=list)

    @property
    def horizon(self) -> int:
        return len(self.main_track)

    @property
    def filled_meals(self) -> List[Recipe]:
        return [r for r in self.main_track if r is not None]

    def selected_recipes(self) -> List[Recipe]:
        """Distinct recipes across both tracks, in first-use order."""
        seen: Dict[str, Recipe] = {}
        for i, recipe in enumerate(self.main_track):
            for r in (recipe, self.kid_meals.get(i)):
                if r is not None and r.path not in seen:
                    seen[r.path] = r
        return list(seen.values())
