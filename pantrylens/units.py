"""Grocery unit vocabulary and quantity/unit extraction."""

from __future__ import annotations

import re

WEIGHT_UNITS: frozenset[str] = frozenset({"kg", "g", "mg", "lb", "oz"})
VOLUME_UNITS: frozenset[str] = frozenset(
    {"l", "ml", "gal", "qt", "pt", "cup", "cups", "tbsp", "tsp"}
)
COUNT_UNITS: frozenset[str] = frozenset({
    "piece", "pieces", "pc", "pcs",
    "dozen", "doz", "unit", "units",
    "bunch", "bag", "box", "can", "bottle",
})

UNITS: frozenset[str] = WEIGHT_UNITS | VOLUME_UNITS | COUNT_UNITS

# Unrecognized tokens up to this length are still accepted as abbreviations.
# This lets short name fragments through ("eggs 12" → unit "eggs").
MAX_UNKNOWN_UNIT_LENGTH = 4

# Tried in order; the first accepted (quantity, unit) pair wins.
_QUANTITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "1kg", "500g", "2.5l"
    re.compile(r"(\d+(?:\.\d+)?)\s*([a-zA-Z]+)"),
    # "1 kg", "500 g"
    re.compile(r"(\d+(?:\.\d+)?)\s+([a-zA-Z]+)"),
    # "kg 1", "g 500"
    re.compile(r"([a-zA-Z]+)\s+(\d+(?:\.\d+)?)"),
)


_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def _is_number(text: str) -> bool:
    return _NUMBER.fullmatch(text) is not None


def is_accepted_unit(token: str) -> bool:
    """Return True if *token* is a known unit or short enough to pass as one."""
    token = token.lower()
    return token in UNITS or len(token) <= MAX_UNKNOWN_UNIT_LENGTH


def extract_quantity_and_unit(text: str) -> tuple[str, str] | None:
    """Pull a quantity and unit out of a text fragment.

    Args:
        text: e.g. "2kg", "3 cups", "kg 5", "Rice 1kg"

    Returns:
        (quantity, unit) with the unit lower-cased, or None when no
        pattern yields an accepted unit.
    """
    text = text.strip()
    for pattern in _QUANTITY_PATTERNS:
        m = pattern.search(text)
        if m is None:
            continue
        first, second = m.group(1), m.group(2)
        if _is_number(first):
            quantity, unit = first, second.lower()
        else:
            quantity, unit = second, first.lower()
        if is_accepted_unit(unit):
            return quantity, unit
    return None
