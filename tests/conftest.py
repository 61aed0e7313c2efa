"""Shared fixtures: recipe factory, deterministic RNG and a temporary vault."""

import random
from pathlib import Path

import pytest

from vault_mealplanner.config import PlanSettings
from vault_mealplanner.models import DayConstraints, Recipe
from vault_mealplanner.vault import RecipeVault

NOW = 1_700_000_000_000
DAY_MS = 24 * 60 * 60 * 1000


class FixedRandom(random.Random):
    """random() always returns the same value, so jitter, shuffles and choices are fixed."""

    def __init__(self, value=0.0):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def make_recipe(name, **kwargs):
    kwargs.setdefault("ingredients", ())
    kwargs["ingredients"] = tuple(kwargs["ingredients"])
    return Recipe(path=f"Recipes/{name}.md", name=name, **kwargs)


@pytest.fixture
def fixed_rng():
    return FixedRandom(0.0)


@pytest.fixture
def settings():
    return PlanSettings(
        meals_per_week=7,
        weeks_to_generate=1,
        day_constraints={
            "Monday": DayConstraints(max_time=30, needs_kid_meal=True),
            "Wednesday": DayConstraints(max_difficulty="easy"),
        },
    )


RECIPE_NOTES = {
    "Soup": """---
prep_time: 10
cook_time: 20
difficulty: easy
meal_type: Soup
family_friendly: true
kid_friendly: true
rating: 4
---
# Soup

## Ingredients
- 2 carrots
- 1 onion
- 1 l stock

## Steps
1. Simmer.
""",
    "Tacos": """---
prep_time: 15
cook_time: 10
difficulty: medium
rating: 5
---
## 🥕 Ingredients
- 8 tortillas
- 500 g beef mince
""",
    "Nuggets": """---
kid_friendly: true
difficulty: easy
---
Prep time: 5
Cook time: 15

## Ingredients
- chicken nuggets
""",
    "Curry": """---
difficulty: hard
rating: 2
season: [Autumn, winter]
---
## Ingredients
- 1 onion
- curry paste
""",
}


@pytest.fixture
def vault_dir(tmp_path):
    folder = tmp_path / "Recipes"
    folder.mkdir()
    for name, text in RECIPE_NOTES.items():
        (folder / f"{name}.md").write_text(text, encoding="utf-8")
    return tmp_path


@pytest.fixture
def vault(vault_dir, settings):
    return RecipeVault(str(vault_dir), settings)


def read(path: Path) -> str:
    return path.read_text(encoding="utf-8")
