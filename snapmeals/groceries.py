"""Aggregate the backend grocery list into ingredient categories."""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Optional

from .models import (
    DEFAULT_WEEKLY_BUDGET,
    IngredientAggregate,
    IngredientAggregateItem,
    Preferences,
    is_number,
)
from .quantities import parse_quantity

GROCERY_CATEGORY = "Grocery"
DEFAULT_UNIT = "unit"


def map_grocery_item(data) -> IngredientAggregateItem:
    if not isinstance(data, dict):
        data = {}
    quantity, unit = parse_quantity(data.get("quantity"))
    name = data.get("ingredient")
    price = data.get("totalPrice")
    return IngredientAggregateItem(
        name=name if isinstance(name, str) else "",
        total_qty=quantity,
        unit=unit or DEFAULT_UNIT,
        est_price=price if is_number(price) else 0,
    )


def map_grocery_list(items: Optional[Iterable]) -> List[IngredientAggregate]:
    """Place every grocery item under the single grocery category.

    An empty or missing list yields no categories at all rather than an empty
    category.
    """

    if not isinstance(items, list) or not items:
        return []
    return [
        IngredientAggregate(
            category=GROCERY_CATEGORY,
            items=[map_grocery_item(item) for item in items],
        )
    ]


def total_grocery_cost(aggregates: Iterable[IngredientAggregate]) -> float:
    return sum(item.est_price for aggregate in aggregates for item in aggregate.items)


class BudgetUsage(NamedTuple):
    total: float
    budget: float
    percent: float

    def to_dict(self) -> dict:
        return {"total": self.total, "budget": self.budget, "percent": self.percent}


def budget_usage(preferences: Preferences, aggregates: Iterable[IngredientAggregate]) -> BudgetUsage:
    """Grocery total against the weekly budget, as a percentage capped at 100.

    A zero budget falls back to the default budget.
    """

    budget = preferences.weekly_budget or DEFAULT_WEEKLY_BUDGET
    total = total_grocery_cost(aggregates)
    return BudgetUsage(total=total, budget=budget, percent=min(total / budget * 100, 100))
