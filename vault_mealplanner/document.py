"""
Meal plan document: rendering and parsing.

Schedule lines follow one grammar, shared by the writer and the editor:

    - [ ] **<emoji> <Day>** - [[Main]] & [[Kid]] - ⏱️ <minutes> min - <emoji> <Difficulty>

The kid meal reference is optional. At generation the shopping list is
built from the planned recipes themselves; after edits it is rebuilt from
the parsed schedule by recipe name. Both use the same layout, so
regenerating an untouched plan gives back the same text.
"""

from __future__ import annotations
import dataclasses as dc
import datetime as dt
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import PlanSettings
from .models import PlanResult, Recipe

CHECKLIST_RE = re.compile(r"^- \[(.)\] \*\*(.+?)\s([A-Za-z]+)\*\* - (.+)$")
LABEL_RE = re.compile(r"^(- \[.\] \*\*.+?\*\* - )(.*)$")
RECIPE_LINK_RE = re.compile(r"\[\[([^\]]+)\]\]")
WEEK_HEADING_RE = re.compile(r"^### (?:📅 )?Week (\d+)")

SCHEDULE_HEADING = "## Meal Schedule"
SHOPPING_HEADING = "# 🛒 Shopping List"


@dc.dataclass
class ChecklistLine:
    mark: str
    day_emoji: str
    day: str
    details: str
    recipes: List[str]


@dc.dataclass
class PlanEntry:
    week: int
    day: str
    day_emoji: str
    line: str
    line_index: int
    recipes: List[str]


# ---------- Line Grammar ----------

def parse_checklist_line(line: str) -> Optional[ChecklistLine]:
    m = CHECKLIST_RE.match(line)
    if not m:
        return None
    details = m.group(4)
    return ChecklistLine(
        mark=m.group(1),
        day_emoji=m.group(2).strip(),
        day=m.group(3).strip(),
        details=details,
        recipes=RECIPE_LINK_RE.findall(details),
    )


def split_checklist_line(line: str) -> Optional[Tuple[str, str]]:
    """Split into (day label prefix, recipe details)."""
    m = LABEL_RE.match(line)
    if not m:
        return None
    return m.group(1), m.group(2)


def meal_details(main: Recipe, kid: Optional[Recipe], settings: PlanSettings) -> Tuple[int, str, str]:
    total = main.total_time + (kid.total_time if kid else 0)
    difficulty = main.difficulty or (kid.difficulty if kid else None) or "default"
    return total, difficulty.capitalize(), settings.difficulty_emoji(difficulty)


def format_checklist_line(
    day_emoji: str,
    day: str,
    main: Recipe,
    kid: Optional[Recipe],
    settings: PlanSettings,
) -> str:
    line = f"- [ ] **{day_emoji} {day}** - [[{main.name}]]"
    if kid is not None:
        line += f" & [[{kid.name}]]"
    total, label, emoji = meal_details(main, kid, settings)
    return line + f" - ⏱️ {total} min - {emoji} {label}"


def extract_checklist_entries(text: str) -> List[PlanEntry]:
    entries: List[PlanEntry] = []
    week = 1
    for i, line in enumerate(text.splitlines()):
        if line.strip() == SHOPPING_HEADING:
            break
        wm = WEEK_HEADING_RE.match(line)
        if wm:
            week = int(wm.group(1))
            continue
        parsed = parse_checklist_line(line)
        if parsed:
            entries.append(PlanEntry(
                week=week,
                day=parsed.day,
                day_emoji=parsed.day_emoji,
                line=line,
                line_index=i,
                recipes=parsed.recipes,
            ))
    return entries


# ---------- Rendering ----------

def render_schedule(result: PlanResult, settings: PlanSettings) -> str:
    out = [SCHEDULE_HEADING]
    per_week = settings.meals_per_week
    for w in range(settings.weeks_to_generate):
        out.append(f"\n### 📅 Week {w + 1}\n")
        for i in range(w * per_week, min((w + 1) * per_week, result.horizon)):
            main = result.main_track[i]
            if main is None:
                continue
            day = settings.day_for_slot(i)
            out.append(format_checklist_line(
                settings.day_emoji(day), day, main, result.kid_meals.get(i), settings
            ))
    return "\n".join(out) + "\n"


def render_plan(result: PlanResult, settings: PlanSettings, generated_on: Optional[dt.date] = None) -> str:
    date = (generated_on or dt.date.today()).isoformat()
    tags = [t.strip() for t in settings.plan_tags if t.strip()] or ["meal_plan"]
    text = (
        "---\n"
        f"date_generated: {date}\n"
        f"tags: [{', '.join(tags)}]\n"
        "---\n"
        f"# Weekly Meal Plan ({settings.weeks_to_generate} Weeks)\n\n"
        + render_schedule(result, settings)
    )
    if settings.generate_shopping_list:
        text = strip_shopping_list(text) + "\n" + _render_shopping_days(_result_days(result, settings))
    return text


# ---------- Shopping List ----------

# (week, day emoji, day, [(link name, recipe or None)])
ShoppingDay = Tuple[int, str, str, List[Tuple[str, Optional[Recipe]]]]


def _recipe_label(name: str, recipe: Optional[Recipe]) -> str:
    label = f"[[{name}]]"
    if recipe is not None:
        if recipe.family_friendly:
            label += " (Family Friendly)"
        elif recipe.kid_friendly:
            label += " (Kid Friendly)"
    return label


def _render_shopping_days(days: Iterable[ShoppingDay]) -> str:
    out = [SHOPPING_HEADING]
    current_week = None
    for week, day_emoji, day, meals in days:
        if week != current_week:
            out.append(f"\n## 📅 Week {week}")
            current_week = week
        out.append(f"\n### {day_emoji} {day}")
        for name, recipe in meals:
            out.append(f"\n#### {_recipe_label(name, recipe)}")
            if recipe is not None:
                out.extend(f"- [ ] {ing}" for ing in recipe.ingredients)
    return "---\n" + "\n".join(out) + "\n\n"


def _result_days(result: PlanResult, settings: PlanSettings) -> List[ShoppingDay]:
    # recipes come straight from the plan, so same-named notes keep their own ingredients
    days: List[ShoppingDay] = []
    per_week = settings.meals_per_week
    for w in range(settings.weeks_to_generate):
        for i in range(w * per_week, min((w + 1) * per_week, result.horizon)):
            main = result.main_track[i]
            if main is None:
                continue
            day = settings.day_for_slot(i)
            meals = [(r.name, r) for r in (main, result.kid_meals.get(i)) if r is not None]
            days.append((w + 1, settings.day_emoji(day), day, meals))
    return days


def render_shopping_list(entries: Sequence[PlanEntry], recipes_by_name: Dict[str, Recipe]) -> str:
    return _render_shopping_days(
        (e.week, e.day_emoji, e.day, [(name, recipes_by_name.get(name)) for name in e.recipes])
        for e in entries
    )


def strip_shopping_list(text: str) -> str:
    lines = text.splitlines()
    cut = next((i for i, l in enumerate(lines) if l.strip() == SHOPPING_HEADING), None)
    if cut is None:
        return text.rstrip("\n") + "\n"
    if cut > 0 and lines[cut - 1].strip() == "---":
        cut -= 1
    return "\n".join(lines[:cut]).rstrip("\n") + "\n"


def index_by_name(recipes: Iterable[Recipe]) -> Dict[str, Recipe]:
    by_name: Dict[str, Recipe] = {}
    for r in recipes:
        by_name.setdefault(r.name, r)
    return by_name


def regenerate_shopping_list(text: str, recipes: Iterable[Recipe]) -> str:
    schedule = strip_shopping_list(text)
    entries = extract_checklist_entries(schedule)
    return schedule + "\n" + render_shopping_list(entries, index_by_name(recipes))
