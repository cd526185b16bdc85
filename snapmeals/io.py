"""Utility functions for reading preferences and writing results to disk."""

from __future__ import annotations

import json
from pathlib import Path

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .models import NOTES_MAX_LENGTH, Preferences

PREFERENCES_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Household preferences",
    "type": "object",
    "properties": {
        "zip_code": {"type": "string", "pattern": "^([0-9]{5})?$"},
        "family_size": {"type": "integer", "minimum": 1},
        "weekly_budget": {"type": "number", "minimum": 0},
        "dietary_restrictions": {
            "type": "array",
            "items": {"type": "string"},
            "uniqueItems": True,
        },
        "health_complications": {
            "type": "array",
            "items": {"type": "string"},
            "uniqueItems": True,
        },
        "notes": {"type": "string", "maxLength": NOTES_MAX_LENGTH},
    },
    "additionalProperties": False,
}

_validator = Draft202012Validator(PREFERENCES_SCHEMA)


def _read_json(path: Path):
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def parse_preferences(data, source: str = "preferences") -> Preferences:
    try:
        _validator.validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid preferences in {source}: {exc.message}") from exc
    return Preferences.from_dict(data)


def load_preferences(path: Path) -> Preferences:
    try:
        data = _read_json(path)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse JSON in {path}: {exc}") from exc
    return parse_preferences(data, str(path))


def write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
