"""Render household preferences as the free-text query the service expects."""

from __future__ import annotations

from typing import List

from .models import Preferences


def _format_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_user_context(preferences: Preferences) -> str:
    """Join the non-empty clauses with ``". "`` in a fixed order.

    Household size and budget are always present; the other clauses are left
    out entirely when their field is empty.
    """

    parts: List[str] = [
        f"I have a family of {preferences.family_size} people",
        f"and we have a weekly budget of ${_format_number(preferences.weekly_budget)}",
    ]
    if preferences.zip_code:
        parts.append(f"(ZIP: {preferences.zip_code})")
    if preferences.dietary_restrictions:
        parts.append(f"Dietary restrictions: {', '.join(preferences.dietary_restrictions)}")
    if preferences.health_complications:
        parts.append(f"Health complications: {', '.join(preferences.health_complications)}")
    notes = preferences.notes.strip()
    if notes:
        parts.append(f"Notes: {notes}")
    return ". ".join(parts)
