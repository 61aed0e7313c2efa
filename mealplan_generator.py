#!/usr/bin/env python3
"""
Meal Plan Generator (Recipe Vault)

- Reads recipe notes (markdown + YAML front matter) from <vault>/Recipes
- Settings come from meal_planner.yaml (or --settings)
- Commands:
    - generate: builds a multi-week plan honouring per-day constraints
      (max time, max difficulty, kid meal) and writes
      <vault>/Meal Plans/Meal Plan - <date>.md with a shopping list
    - entries:  lists the schedule lines of the active plan
    - change:   replaces the meal of one day (--week, --day, --recipe)
    - swap:     swaps the meals of two days
- Recipes picked for a plan get their lastUsed front matter updated
"""

from __future__ import annotations
import argparse
import os
import random
import sys
from typing import List, Optional

from vault_mealplanner.config import SETTINGS_FILENAME, PlanSettings, load_settings, save_settings
from vault_mealplanner.document import extract_checklist_entries
from vault_mealplanner.errors import MealPlanError, NoActivePlanError
from vault_mealplanner.service import change_meal_for_day, create_meal_plan, find_entry, swap_meals
from vault_mealplanner.vault import RecipeVault


# ---------- Commands ----------

def cmd_generate(args: argparse.Namespace, vault: RecipeVault, settings: PlanSettings) -> int:
    if args.seed is None:
        seed = random.randrange(0, 10**9)
        print(f"[info] No seed provided. Using random seed: {seed}")
    else:
        seed = args.seed
        print(f"[info] Using fixed seed: {seed}")

    path, result = create_meal_plan(vault, settings, rng=random.Random(seed), overwrite=args.overwrite)
    for warning in result.warnings:
        print(f"[warn] {warning}")
    if not result.filled_meals:
        print("No meals could be planned from", vault.root / settings.recipe_folder)
        return 1

    save_settings(settings, args.settings_path)
    print(
        f"[info] Planned {len(result.filled_meals)} meals and "
        f"{len(result.kid_meals)} kid meals over {settings.weeks_to_generate} week(s)."
    )
    print("Meal plan written to", vault.root / path)
    return 0


def _active_entries(vault: RecipeVault, settings: PlanSettings):
    if not settings.current_plan_path:
        raise NoActivePlanError()
    return extract_checklist_entries(vault.read_plan_document(settings.current_plan_path))


def cmd_entries(args: argparse.Namespace, vault: RecipeVault, settings: PlanSettings) -> int:
    for e in _active_entries(vault, settings):
        print(f"Week {e.week} {e.day}: {' & '.join(e.recipes)}")
    return 0


def cmd_change(args: argparse.Namespace, vault: RecipeVault, settings: PlanSettings) -> int:
    entry = find_entry(_active_entries(vault, settings), args.week, args.day)
    new_line = change_meal_for_day(
        vault, settings, entry.line, args.recipe,
        kid_meal_name=args.kid_meal, week=args.week, line_index=entry.line_index,
    )
    print(f"Changed meal for Week {args.week}, {entry.day} to {args.recipe}.")
    print(new_line)
    return 0


def cmd_swap(args: argparse.Namespace, vault: RecipeVault, settings: PlanSettings) -> int:
    entries = _active_entries(vault, settings)
    first = find_entry(entries, args.week, args.day)
    second = find_entry(entries, args.with_week or args.week, args.with_day)
    swap_meals(
        vault, settings, first.line, second.line,
        first_index=first.line_index, second_index=second.line_index,
    )
    print(
        f"Swapped meals between '{first.day} (Week {first.week})' "
        f"and '{second.day} (Week {second.week})'!"
    )
    return 0


# ---------- Main ----------

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Weekly meal plan generator for a recipe vault")
    ap.add_argument("--vault", default=".", help="Vault root directory")
    ap.add_argument(
        "--settings",
        default=None,
        help=f"YAML settings file (optional). If omitted, tries {SETTINGS_FILENAME}."
    )
    ap.add_argument(
        "--seed",
        type=int,
        default=None,
        help="RNG seed (omit for different plan each run)"
    )
    sub = ap.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a new meal plan")
    gen.add_argument("--overwrite", action="store_true", help="Overwrite today's plan if it exists")
    gen.set_defaults(func=cmd_generate)

    ent = sub.add_parser("entries", help="List the meals of the active plan")
    ent.set_defaults(func=cmd_entries)

    chg = sub.add_parser("change", help="Change the meal for one day")
    chg.add_argument("--week", type=int, default=1)
    chg.add_argument("--day", required=True)
    chg.add_argument("--recipe", required=True, help="Recipe note name")
    chg.add_argument("--kid-meal", default=None, help="Kid meal recipe name (optional)")
    chg.set_defaults(func=cmd_change)

    swp = sub.add_parser("swap", help="Swap the meals of two days")
    swp.add_argument("--week", type=int, default=1)
    swp.add_argument("--day", required=True)
    swp.add_argument("--with-week", type=int, default=None, help="Defaults to --week")
    swp.add_argument("--with-day", required=True)
    swp.set_defaults(func=cmd_swap)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # a named but missing settings file is created on save
    args.settings_path = args.settings or os.path.join(os.getcwd(), SETTINGS_FILENAME)
    try:
        settings = load_settings(args.settings)
    except (ValueError, TypeError) as e:
        print(f"[error] Invalid settings: {e}")
        return 1

    vault = RecipeVault(args.vault, settings)
    try:
        return args.func(args, vault, settings)
    except MealPlanError as e:
        print(f"[error] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
