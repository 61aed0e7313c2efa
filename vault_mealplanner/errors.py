"""Errors raised by plan generation and editing."""

from typing import Optional


class MealPlanError(Exception):
    """Base class for failures reported to the user."""


class NoActivePlanError(MealPlanError):
    def __init__(self) -> None:
        super().__init__("No active meal plan found. Generate a meal plan first.")


class PlanNotFoundError(MealPlanError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Meal plan file not found: {path}")
        self.path = path


class RecipeNotFoundError(MealPlanError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Recipe '{name}' not found.")
        self.name = name


class ChecklistParseError(MealPlanError):
    def __init__(self, line: str) -> None:
        super().__init__(f"Could not parse the checklist line: {line!r}")
        self.line = line


class EntryNotFoundError(MealPlanError):
    def __init__(self, week: int, day: str) -> None:
        super().__init__(f"No meal found for Week {week}, {day} in the meal plan.")
        self.week = week
        self.day = day


class MealNotFoundError(MealPlanError):
    def __init__(self, line: str, day: Optional[str] = None, week: Optional[int] = None) -> None:
        where = day or "the selected day"
        if week is not None:
            where = f"Week {week}, {where}"
        super().__init__(f"Could not find the meal for {where} in the meal plan: {line!r}")
        self.line = line
        self.day = day
        self.week = week
