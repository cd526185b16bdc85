"""Turn a recipes response from the planning service into a weekly plan."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .groceries import map_grocery_list
from .models import DAY_NAMES, DayPlan, PlanData, PlannedMeal, Recipe, WeeklyPlan


def map_backend_recipes(records: Iterable) -> List[Recipe]:
    return [Recipe.from_backend(record) for record in records]


def build_weekly_plan(recipes: Sequence[Recipe]) -> WeeklyPlan:
    """Assign one recipe per day, Monday first.

    Recipes beyond the seventh stay in the recipe list but get no day.
    """

    assigned = list(recipes[: len(DAY_NAMES)])
    days = [
        DayPlan(day_name=day_name, meals=[PlannedMeal(recipe_id=recipe.id)])
        for day_name, recipe in zip(DAY_NAMES, assigned)
    ]
    return WeeklyPlan(
        days=days,
        est_total_cost=sum(recipe.est_cost for recipe in assigned),
    )


def map_recipes_response(payload) -> PlanData:
    """Map a full recipes response; every missing field gets a default."""

    if not isinstance(payload, dict):
        payload = {}

    raw_recipes = payload.get("recipes")
    recipes = map_backend_recipes(raw_recipes if isinstance(raw_recipes, list) else [])
    overlapping = payload.get("overlappingIngredients")
    reasoning = payload.get("reasoning")

    return PlanData(
        recipes=recipes,
        weekly_plan=build_weekly_plan(recipes),
        ingredients=map_grocery_list(payload.get("groceryList")),
        reasoning=reasoning if isinstance(reasoning, str) else "",
        overlapping_ingredients=list(overlapping) if isinstance(overlapping, list) else [],
    )
