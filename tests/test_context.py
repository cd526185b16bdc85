from __future__ import annotations

from snapmeals.context import build_user_context
from snapmeals.models import Preferences


def test_build_user_context_omits_empty_clauses():
    preferences = Preferences(
        zip_code="30058",
        family_size=4,
        weekly_budget=50,
        dietary_restrictions=["Vegan"],
        health_complications=[],
        notes="",
    )

    assert build_user_context(preferences) == (
        "I have a family of 4 people. and we have a weekly budget of $50. "
        "(ZIP: 30058). Dietary restrictions: Vegan"
    )


def test_build_user_context_with_every_clause():
    preferences = Preferences(
        zip_code="30332",
        family_size=2,
        weekly_budget=75.5,
        dietary_restrictions=["Halal", "Nut allergy"],
        health_complications=["Diabetes-friendly"],
        notes="  Kids love pasta.  ",
    )

    assert build_user_context(preferences) == (
        "I have a family of 2 people. and we have a weekly budget of $75.5. (ZIP: 30332). "
        "Dietary restrictions: Halal, Nut allergy. Health complications: Diabetes-friendly. "
        "Notes: Kids love pasta."
    )


def test_build_user_context_minimal_preferences():
    preferences = Preferences(zip_code="", family_size=1, weekly_budget=40.0, notes="   ")

    assert build_user_context(preferences) == (
        "I have a family of 1 people. and we have a weekly budget of $40"
    )
