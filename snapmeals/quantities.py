"""Lenient parsing of the loosely-typed grocery quantity field."""

from __future__ import annotations

import re
from typing import NamedTuple

_LEADING_RUN = re.compile(r"^([\d./]+)\s*(.*)$", re.DOTALL)
_DECIMAL_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")


class ParsedQuantity(NamedTuple):
    quantity: float
    unit: str


def parse_quantity(value) -> ParsedQuantity:
    """Split ``"2 cups"`` style values into a magnitude and a unit.

    Never raises: anything that cannot be read degrades to a zero quantity.
    Fraction-looking tokens such as ``"1/2"`` are not evaluated; only their
    leading decimal number counts.
    """

    if value is None or isinstance(value, bool):
        return ParsedQuantity(0.0, "")
    if isinstance(value, (int, float)):
        return ParsedQuantity(float(value), "")
    if not isinstance(value, str):
        return ParsedQuantity(0.0, "")

    trimmed = value.strip()
    match = _LEADING_RUN.match(trimmed)
    if not match:
        return ParsedQuantity(0.0, trimmed)

    number = _DECIMAL_PREFIX.match(match.group(1))
    if not number:
        return ParsedQuantity(0.0, trimmed)
    return ParsedQuantity(float(number.group(0)), match.group(2).strip())
