"""
Recipe vault on disk.

- Recipes are markdown notes with YAML front matter under <vault>/<recipe_folder>
- Meal plans are markdown documents under <vault>/<meal_plan_folder>
- Paths handed around are vault-relative, using forward slashes
"""

from __future__ import annotations
import datetime as dt
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from .config import PlanSettings
from .constraints import current_season, is_in_season, normalize_season
from .errors import PlanNotFoundError
from .models import Recipe
from .scoring import now_ms

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
INGREDIENTS_HEADING_RE = re.compile(r"^##\s*(?:[^\w\s]+\s*)?Ingredients\s*$", re.IGNORECASE)
PREP_TIME_RE = re.compile(r"prep time:?\s*(\d+)", re.IGNORECASE)
COOK_TIME_RE = re.compile(r"cook time:?\s*(\d+)", re.IGNORECASE)
DIFFICULTY_RE = re.compile(r"difficulty:?\s*(easy|medium|hard)", re.IGNORECASE)


# ---------- Note Parsing ----------

def split_front_matter(text: str) -> Tuple[Dict, str]:
    m = FRONT_MATTER_RE.match(text)
    if not m:
        return {}, text
    data = yaml.safe_load(m.group(1)) or {}
    if not isinstance(data, dict):
        data = {}
    return data, text[m.end():]


def extract_ingredients(body: str) -> List[str]:
    ingredients: List[str] = []
    in_section = False
    for line in body.splitlines():
        if in_section and line.startswith("##"):
            break
        if INGREDIENTS_HEADING_RE.match(line.strip()):
            in_section = True
            continue
        if in_section and line.strip().startswith("-"):
            ingredients.append(re.sub(r"^-\s*", "", line.strip()).strip())
    return ingredients


def _first_int(*values) -> Optional[int]:
    for v in values:
        if v is None or v == "":
            continue
        try:
            n = int(v)
        except (TypeError, ValueError):
            continue
        if n:
            return n
    return None


def _match_int(pattern: re.Pattern, body: str) -> Optional[int]:
    m = pattern.search(body)
    return int(m.group(1)) if m else None


def parse_recipe_note(path: str, text: str) -> Recipe:
    fm, body = split_front_matter(text)
    difficulty = fm.get("difficulty")
    if not difficulty:
        m = DIFFICULTY_RE.search(body)
        difficulty = m.group(1) if m else None
    meal_type = fm.get("meal_type")
    tags = fm.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]

    return Recipe(
        path=path,
        name=Path(path).stem,
        ingredients=tuple(extract_ingredients(body)),
        prep_time=_first_int(fm.get("prep_time"), fm.get("prepTime"), _match_int(PREP_TIME_RE, body)),
        cook_time=_first_int(fm.get("cook_time"), fm.get("cookTime"), _match_int(COOK_TIME_RE, body)),
        difficulty=str(difficulty).lower() if difficulty else None,
        kid_friendly=bool(fm.get("kid_friendly", False)),
        family_friendly=bool(fm.get("family_friendly", False)),
        last_used=_first_int(fm.get("lastUsed")),
        season=tuple(normalize_season(fm.get("season"))),
        meal_type=str(meal_type).lower() if meal_type else None,
        rating=_first_int(fm.get("rating")),
        tags=tuple(str(t) for t in tags),
    )


# ---------- Vault ----------

class RecipeVault:
    def __init__(self, root: str, settings: PlanSettings) -> None:
        self.root = Path(root)
        self.settings = settings

    def _abs(self, rel_path: str) -> Path:
        return self.root / rel_path

    def _rel(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def load_recipes(self, today: Optional[dt.date] = None) -> List[Recipe]:
        folder = self._abs(self.settings.recipe_folder.strip("/"))
        if not folder.is_dir():
            print(f"[warn] Recipe folder '{self.settings.recipe_folder}' not found!")
            return []

        season = current_season(self.settings.hemisphere, today)
        min_rating = self.settings.min_rating
        recipes: List[Recipe] = []
        skipped = 0
        for path in sorted(folder.rglob("*.md")):
            text = path.read_text(encoding="utf-8")
            try:
                recipe = parse_recipe_note(self._rel(path), text)
            except yaml.YAMLError as e:
                print(f"[warn] Skipping {self._rel(path)}: invalid front matter ({e})")
                continue
            # unrated recipes always pass the rating floor
            if min_rating is not None and recipe.rating is not None and recipe.rating < min_rating:
                skipped += 1
                continue
            if self.settings.respect_seasons and not is_in_season(recipe, season):
                skipped += 1
                continue
            recipes.append(recipe)

        print(f"[info] Loaded {len(recipes)} recipes from {folder} ({skipped} filtered out)")
        return recipes

    def read_plan_document(self, path: str) -> str:
        target = self._abs(path)
        if not target.is_file():
            raise PlanNotFoundError(path)
        return target.read_text(encoding="utf-8")

    def write_plan_document(self, path: str, text: str) -> None:
        target = self._abs(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")

    def plan_exists(self, path: str) -> bool:
        return self._abs(path).is_file()

    def mark_recipe_used(self, recipe_path: str, timestamp: Optional[int] = None) -> None:
        target = self._abs(recipe_path)
        text = target.read_text(encoding="utf-8")
        fm, body = split_front_matter(text)
        fm["lastUsed"] = timestamp if timestamp is not None else now_ms()
        dumped = yaml.safe_dump(fm, sort_keys=False, allow_unicode=True)
        target.write_text(f"---\n{dumped}---\n{body}", encoding="utf-8")

    def plan_path_for(self, date: dt.date, unique: bool = False, now: Optional[dt.datetime] = None) -> str:
        folder = self.settings.meal_plan_folder.strip().strip("/") or "Meal Plans"
        name = f"Meal Plan - {date.isoformat()}"
        if unique:
            now = now or dt.datetime.now()
            name += f"_{now.hour}-{now.minute}-{now.second}"
        return f"{folder}/{name}.md"
