"""Weekly meal planning over a vault of markdown recipe notes."""

from .config import PlanSettings, load_settings
from .models import DayConstraints, PlanResult, Recipe
from .planner import generate_plan

__version__ = "0.1.0"

__all__ = [
    "DayConstraints",
    "PlanResult",
    "PlanSettings",
    "Recipe",
    "generate_plan",
    "load_settings",
]
