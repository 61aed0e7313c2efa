"""
Plan generation and post-generation edits against a recipe vault.

The rendered document is the durable state: edits re-read it, rewrite
checklist lines in place and rebuild the shopping list from the result.
"""

from __future__ import annotations
import datetime as dt
import random
from typing import List, Optional, Sequence, Tuple

from .config import PlanSettings
from .document import (
    PlanEntry,
    extract_checklist_entries,
    format_checklist_line,
    parse_checklist_line,
    regenerate_shopping_list,
    render_plan,
    split_checklist_line,
)
from .errors import (
    ChecklistParseError,
    EntryNotFoundError,
    MealNotFoundError,
    NoActivePlanError,
    RecipeNotFoundError,
)
from .models import PlanResult, Recipe
from .planner import generate_plan
from .vault import RecipeVault


def create_meal_plan(
    vault: RecipeVault,
    settings: PlanSettings,
    rng: Optional[random.Random] = None,
    today: Optional[dt.date] = None,
    overwrite: bool = False,
) -> Tuple[str, PlanResult]:
    today = today or dt.date.today()
    recipes = vault.load_recipes(today=today)
    result = generate_plan(recipes, settings, rng=rng)

    path = vault.plan_path_for(today)
    if vault.plan_exists(path) and not overwrite:
        path = vault.plan_path_for(today, unique=True)

    vault.write_plan_document(path, render_plan(result, settings, generated_on=today))
    for recipe in result.selected_recipes():
        vault.mark_recipe_used(recipe.path)

    settings.current_plan_path = path
    return path, result


def _active_plan(vault: RecipeVault, settings: PlanSettings) -> Tuple[str, str]:
    if not settings.current_plan_path:
        raise NoActivePlanError()
    return settings.current_plan_path, vault.read_plan_document(settings.current_plan_path)


def _find_recipe(recipes: Sequence[Recipe], name: str) -> Recipe:
    for r in recipes:
        if r.name == name:
            return r
    raise RecipeNotFoundError(name)


def find_entry(entries: Sequence[PlanEntry], week: int, day: str) -> PlanEntry:
    for e in entries:
        if e.week == week and e.day.lower() == day.lower():
            return e
    raise EntryNotFoundError(week, day)


def pick_kid_meal(
    recipes: Sequence[Recipe],
    new_recipe: Recipe,
    day: str,
    settings: PlanSettings,
    kid_meal_name: Optional[str] = None,
) -> Optional[Recipe]:
    if kid_meal_name:
        return _find_recipe(recipes, kid_meal_name)
    # family-friendly mains already cover the kids
    if not settings.needs_kid_meal(day) or new_recipe.family_friendly:
        return None
    return next((r for r in recipes if r.is_kid_only), None)


def _save(vault: RecipeVault, settings: PlanSettings, path: str, text: str, recipes: Sequence[Recipe]) -> None:
    if settings.generate_shopping_list:
        text = regenerate_shopping_list(text, recipes)
    vault.write_plan_document(path, text)


def _locate(lines: List[str], line: str, index: Optional[int]) -> Optional[int]:
    # a known index wins; identical lines can appear in several weeks
    if index is not None and 0 <= index < len(lines) and lines[index] == line:
        return index
    if line in lines:
        return lines.index(line)
    return None


def change_meal_for_day(
    vault: RecipeVault,
    settings: PlanSettings,
    original_line: str,
    recipe_name: str,
    kid_meal_name: Optional[str] = None,
    week: Optional[int] = None,
    line_index: Optional[int] = None,
) -> str:
    """
    Replace one day's meal. Returns the new checklist line.

    The line is found by `line_index` when it still holds `original_line`,
    then by `week` and day, then by the first identical line.
    """
    path, content = _active_plan(vault, settings)
    recipes = vault.load_recipes()
    new_recipe = _find_recipe(recipes, recipe_name)

    parsed = parse_checklist_line(original_line)
    if parsed is None:
        raise ChecklistParseError(original_line)

    kid = pick_kid_meal(recipes, new_recipe, parsed.day, settings, kid_meal_name)
    new_line = format_checklist_line(parsed.day_emoji, parsed.day, new_recipe, kid, settings)

    lines = content.split("\n")
    if line_index is not None and 0 <= line_index < len(lines) and lines[line_index] == original_line:
        target = line_index
    elif week is not None:
        target = find_entry(extract_checklist_entries(content), week, parsed.day).line_index
    else:
        target = _locate(lines, original_line, None)
    if target is None:
        raise MealNotFoundError(original_line, parsed.day)

    lines[target] = new_line
    _save(vault, settings, path, "\n".join(lines), recipes)
    vault.mark_recipe_used(new_recipe.path)
    if kid is not None:
        vault.mark_recipe_used(kid.path)
    return new_line


def swap_meals(
    vault: RecipeVault,
    settings: PlanSettings,
    first_line: str,
    second_line: str,
    first_index: Optional[int] = None,
    second_index: Optional[int] = None,
) -> Tuple[str, str]:
    """Swap the recipes of two checklist lines, keeping each day label."""
    path, content = _active_plan(vault, settings)
    lines: List[str] = content.split("\n")

    i = _locate(lines, first_line, first_index)
    j = _locate(lines, second_line, second_index)
    for line, found in ((first_line, i), (second_line, j)):
        if found is None:
            parsed = parse_checklist_line(line)
            raise MealNotFoundError(line, parsed.day if parsed else None)

    first = split_checklist_line(first_line)
    if first is None:
        raise ChecklistParseError(first_line)
    second = split_checklist_line(second_line)
    if second is None:
        raise ChecklistParseError(second_line)

    new_first = first[0] + second[1]
    new_second = second[0] + first[1]
    lines[i], lines[j] = new_first, new_second
    content = "\n".join(lines)

    recipes = vault.load_recipes() if settings.generate_shopping_list else []
    _save(vault, settings, path, content, recipes)
    return new_first, new_second
