"""
Planner settings, loaded from YAML.

Priority:
1. --settings <file> if provided and exists
2. meal_planner.yaml in current working directory
3. Built-in defaults
"""

from __future__ import annotations
import dataclasses as dc
import os
from typing import Dict, List, Optional

import yaml

from .models import DayConstraints

SETTINGS_FILENAME = "meal_planner.yaml"

DEFAULT_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

DEFAULT_DAY_EMOJIS = {
    "monday": "🌙",
    "tuesday": "🔥",
    "wednesday": "🪐",
    "thursday": "⚡",
    "friday": "🎉",
    "saturday": "🌟",
    "sunday": "☀️",
    "default": "📅",
}

DEFAULT_DIFFICULTY_EMOJIS = {
    "easy": "🟢",
    "medium": "🟡",
    "hard": "🔴",
    "default": "⚪",
}


@dc.dataclass
class PlanSettings:
    recipe_folder: str = "Recipes"
    meal_plan_folder: str = "Meal Plans"
    meals_per_week: int = 7
    weeks_to_generate: int = 1
    days_of_week: List[str] = dc.field(default_factory=lambda: list(DEFAULT_DAYS))
    respect_seasons: bool = False
    hemisphere: str = "northern"
    day_constraints: Dict[str, DayConstraints] = dc.field(default_factory=dict)
    current_plan_path: Optional[str] = None
    plan_tags: List[str] = dc.field(default_factory=lambda: ["meal_plan"])
    skip_kid_meal_if_family_friendly: bool = True
    generate_shopping_list: bool = True
    min_rating: Optional[int] = None
    day_emojis: Dict[str, str] = dc.field(default_factory=lambda: dict(DEFAULT_DAY_EMOJIS))
    difficulty_emojis: Dict[str, str] = dc.field(default_factory=lambda: dict(DEFAULT_DIFFICULTY_EMOJIS))

    def __post_init__(self) -> None:
        if not self.days_of_week:
            raise ValueError("days_of_week must name at least one day")
        if self.hemisphere not in ("northern", "southern"):
            raise ValueError(f"hemisphere must be 'northern' or 'southern', got {self.hemisphere!r}")
        self.meals_per_week = max(1, int(self.meals_per_week))
        self.weeks_to_generate = max(1, int(self.weeks_to_generate))

    @property
    def horizon(self) -> int:
        return self.meals_per_week * self.weeks_to_generate

    def day_for_slot(self, index: int) -> str:
        return self.days_of_week[index % len(self.days_of_week)]

    def week_for_slot(self, index: int) -> int:
        """Zero-based week number of a slot."""
        return index // self.meals_per_week

    def constraints_for(self, day: str) -> Optional[DayConstraints]:
        return self.day_constraints.get(day)

    def needs_kid_meal(self, day: str) -> bool:
        c = self.day_constraints.get(day)
        return bool(c and c.needs_kid_meal)

    def day_emoji(self, day: str) -> str:
        return self.day_emojis.get(day.lower()) or self.day_emojis.get("default") or "📅"

    def difficulty_emoji(self, difficulty: Optional[str]) -> str:
        key = (difficulty or "default").lower()
        return self.difficulty_emojis.get(key) or self.difficulty_emojis.get("default") or "⚪"


# ---------- Config Loading ----------

def settings_from_dict(data: Dict) -> PlanSettings:
    d = PlanSettings()
    constraints = {
        str(day): DayConstraints.from_dict(c or {})
        for day, c in (data.get("day_constraints") or {}).items()
    }
    min_rating = data.get("min_rating")
    return PlanSettings(
        recipe_folder=str(data.get("recipe_folder", d.recipe_folder)),
        meal_plan_folder=str(data.get("meal_plan_folder", d.meal_plan_folder)),
        meals_per_week=int(data.get("meals_per_week", d.meals_per_week)),
        weeks_to_generate=int(data.get("weeks_to_generate", d.weeks_to_generate)),
        days_of_week=[str(x) for x in data.get("days_of_week", d.days_of_week)],
        respect_seasons=bool(data.get("respect_seasons", d.respect_seasons)),
        hemisphere=str(data.get("hemisphere", d.hemisphere)).lower(),
        day_constraints=constraints,
        current_plan_path=data.get("current_plan_path"),
        plan_tags=[str(t) for t in data.get("plan_tags", d.plan_tags)],
        skip_kid_meal_if_family_friendly=bool(
            data.get("skip_kid_meal_if_family_friendly", d.skip_kid_meal_if_family_friendly)
        ),
        generate_shopping_list=bool(data.get("generate_shopping_list", d.generate_shopping_list)),
        min_rating=int(min_rating) if min_rating is not None else None,
        day_emojis={**d.day_emojis, **(data.get("day_emojis") or {})},
        difficulty_emojis={**d.difficulty_emojis, **(data.get("difficulty_emojis") or {})},
    )


def settings_to_dict(settings: PlanSettings) -> Dict:
    data = dc.asdict(settings)
    data["day_constraints"] = {
        day: c.to_dict() for day, c in settings.day_constraints.items()
    }
    if data["current_plan_path"] is None:
        del data["current_plan_path"]
    if data["min_rating"] is None:
        del data["min_rating"]
    return data


def resolve_settings_path(path: Optional[str]) -> Optional[str]:
    if path:
        if os.path.exists(path):
            return path
        print(f"[warn] Settings file '{path}' not found. Using defaults.")
        return None
    cand = os.path.join(os.getcwd(), SETTINGS_FILENAME)
    return cand if os.path.exists(cand) else None


def load_settings(path: Optional[str]) -> PlanSettings:
    cfg_path = resolve_settings_path(path)
    if not cfg_path:
        print(f"[info] No {SETTINGS_FILENAME} found. Using built-in defaults.")
        return PlanSettings()

    with open(cfg_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    settings = settings_from_dict(data)
    print(
        f"[info] Settings loaded from {cfg_path}: "
        f"{settings.meals_per_week} meals/week x {settings.weeks_to_generate} week(s), "
        f"constraints for {len(settings.day_constraints)} day(s)"
    )
    return settings


def save_settings(settings: PlanSettings, path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(settings_to_dict(settings), f, sort_keys=False, allow_unicode=True)
