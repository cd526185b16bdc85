"""Core domain models for the meal planning assistant."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


DAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]
DEFAULT_SERVINGS = 4
DEFAULT_RECIPE_TITLE = "Recipe"
NOTES_MAX_LENGTH = 300
DEFAULT_WEEKLY_BUDGET = 50


def is_number(value) -> bool:
    """Return True for real numbers, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number(value, default: float) -> float:
    return value if is_number(value) else default


@dataclass(frozen=True)
class Preferences:
    """What the household told us about itself for one planning session."""

    zip_code: str = ""
    family_size: int = 4
    weekly_budget: float = DEFAULT_WEEKLY_BUDGET
    dietary_restrictions: List[str] = field(default_factory=list)
    health_complications: List[str] = field(default_factory=list)
    notes: str = ""

    @staticmethod
    def from_dict(data: dict) -> "Preferences":
        defaults = Preferences()
        return Preferences(
            zip_code=str(data.get("zip_code", defaults.zip_code)),
            family_size=int(data.get("family_size", defaults.family_size)),
            weekly_budget=data.get("weekly_budget", defaults.weekly_budget),
            dietary_restrictions=[str(item) for item in data.get("dietary_restrictions", [])],
            health_complications=[str(item) for item in data.get("health_complications", [])],
            notes=str(data.get("notes", "")),
        )

    def to_dict(self) -> dict:
        return {
            "zip_code": self.zip_code,
            "family_size": self.family_size,
            "weekly_budget": self.weekly_budget,
            "dietary_restrictions": list(self.dietary_restrictions),
            "health_complications": list(self.health_complications),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class Ingredient:
    name: str
    quantity: float
    unit: str

    def to_dict(self) -> dict:
        return {"name": self.name, "quantity": self.quantity, "unit": self.unit}


@dataclass(frozen=True)
class Nutrition:
    calories: float = 0
    protein: str = ""
    carbs: str = ""
    fat: str = ""
    sodium: str = ""

    @property
    def has_values(self) -> bool:
        return self.calories > 0 or bool(self.protein.strip()) or bool(self.carbs.strip())

    def to_dict(self) -> dict:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "sodium": self.sodium,
        }


@dataclass(frozen=True)
class Recipe:
    """A recipe suggested by the planning service."""

    id: str
    title: str
    tags: List[str]
    time_mins: float
    servings: float
    est_cost: float
    est_cost_per_serving: float
    ingredients: List[Ingredient]
    steps: List[str]
    nutrition: Nutrition
    why_selected: str

    @staticmethod
    def from_backend(data) -> "Recipe":
        """Map one backend recipe record, defaulting every missing field."""

        if not isinstance(data, dict):
            data = {}
        raw_id = data.get("id")
        servings = _number(data.get("servings"), DEFAULT_SERVINGS)
        est_cost = _number(data.get("totalPrice"), 0)
        directions = data.get("directions")
        name = data.get("name")
        return Recipe(
            id="" if raw_id is None else str(raw_id),
            title=name if name is not None else DEFAULT_RECIPE_TITLE,
            tags=[],
            time_mins=_number(data.get("preparationTime"), 0),
            servings=servings,
            est_cost=est_cost,
            est_cost_per_serving=est_cost / servings if servings > 0 else 0,
            # The recipes endpoint does not report per-recipe ingredients.
            ingredients=[],
            steps=list(directions) if isinstance(directions, list) else [],
            nutrition=Nutrition(),
            why_selected="",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "tags": list(self.tags),
            "time_mins": self.time_mins,
            "servings": self.servings,
            "est_cost": self.est_cost,
            "est_cost_per_serving": self.est_cost_per_serving,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "steps": list(self.steps),
            "nutrition": self.nutrition.to_dict(),
            "why_selected": self.why_selected,
        }


@dataclass(frozen=True)
class PlannedMeal:
    recipe_id: str


@dataclass(frozen=True)
class DayPlan:
    day_name: str
    meals: List[PlannedMeal] = field(default_factory=list)


@dataclass(frozen=True)
class WeeklyPlan:
    days: List[DayPlan]
    est_total_cost: float
    overlap_score: float = 0

    def to_dict(self) -> dict:
        return {
            "days": [
                {
                    "day_name": day.day_name,
                    "meals": [{"recipe_id": meal.recipe_id} for meal in day.meals],
                }
                for day in self.days
            ],
            "overlap_score": self.overlap_score,
            "est_total_cost": self.est_total_cost,
        }


@dataclass(frozen=True)
class IngredientAggregateItem:
    name: str
    total_qty: float
    unit: str
    est_price: float


@dataclass(frozen=True)
class IngredientAggregate:
    """A named grocery category and the items bought under it."""

    category: str
    items: List[IngredientAggregateItem]

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "items": [
                {
                    "name": item.name,
                    "total_qty": item.total_qty,
                    "unit": item.unit,
                    "est_price": item.est_price,
                }
                for item in self.items
            ],
        }


@dataclass(frozen=True)
class PlanData:
    """Everything one successful plan request produces."""

    recipes: List[Recipe]
    weekly_plan: WeeklyPlan
    ingredients: List[IngredientAggregate]
    reasoning: str = ""
    overlapping_ingredients: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "recipes": [recipe.to_dict() for recipe in self.recipes],
            "weekly_plan": self.weekly_plan.to_dict(),
            "ingredients": [aggregate.to_dict() for aggregate in self.ingredients],
            "reasoning": self.reasoning,
            "overlapping_ingredients": list(self.overlapping_ingredients),
        }


@dataclass(frozen=True)
class Availability:
    have_count: int = 0
    total_count: int = 0


@dataclass(frozen=True)
class Store:
    """A grocery store near the household."""

    id: str
    name: str
    address: str
    distance_miles: float
    supports_snap: bool
    availability: Availability = field(default_factory=Availability)
    matched_ingredients: List[str] = field(default_factory=list)
    missing_ingredients: List[str] = field(default_factory=list)
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "distance_miles": self.distance_miles,
            "supports_snap": self.supports_snap,
            "availability": {
                "have_count": self.availability.have_count,
                "total_count": self.availability.total_count,
            },
            "matched_ingredients": list(self.matched_ingredients),
            "missing_ingredients": list(self.missing_ingredients),
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
