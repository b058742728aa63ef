"""Shared helpers for response-shape normalization."""

from __future__ import annotations

import math
from datetime import date, datetime
from enum import Enum
from typing import Any


class Envelope(Enum):
    """Outer JSON shapes FMP wraps record lists in."""

    BARE_LIST = "bare_list"
    FIRST_LIST_PROPERTY = "first_list_property"
    KEYED_DATA = "data"
    KEYED_RESULTS = "results"
    EMPTY = "empty"


def classify_envelope(value: Any) -> tuple[Envelope, list]:
    """Identify the envelope of a decoded response and return its records."""
    match value:
        case list():
            return Envelope.BARE_LIST, value
        case dict():
            first = next((v for v in value.values() if isinstance(v, list)), None)
            if first is not None:
                return Envelope.FIRST_LIST_PROPERTY, first
            if isinstance(value.get("data"), list):
                return Envelope.KEYED_DATA, value["data"]
            if isinstance(value.get("results"), list):
                return Envelope.KEYED_RESULTS, value["results"]
    return Envelope.EMPTY, []


def unwrap(value: Any) -> list:
    """Extract the record list from any known envelope shape."""
    return classify_envelope(value)[1]


def extract_historical(value: Any) -> list:
    """Extract price records from a historical-price response.

    Accepts a bare list, ``{"historical": [...]}``, a symbol-keyed
    ``{"AAPL": {"historical": [...]}}``, or any object holding a list.
    """
    if isinstance(value, list):
        return value
    if not isinstance(value, dict):
        return []
    if isinstance(value.get("historical"), list):
        return value["historical"]
    for nested in value.values():
        if isinstance(nested, dict) and isinstance(nested.get("historical"), list):
            return nested["historical"]
    return unwrap(value)


def as_profile(value: Any) -> dict:
    """Normalize a profile response (list or object) into a dict."""
    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        return value[0] if value and isinstance(value[0], dict) else {}
    return {}


def _to_date(value: Any) -> date | None:
    """Coerce date-like values (date/datetime/ISO string) to date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value_str = str(value)
    if "T" in value_str:
        value_str = value_str.split("T", 1)[0]
    else:
        value_str = value_str.split(" ", 1)[0]
    try:
        return date.fromisoformat(value_str)
    except ValueError:
        return None


def coerce_non_negative_number(value: Any) -> int | float | None:
    """Coerce a JSON scalar to a non-negative number.

    Returns None (not zero) when the value is missing, not numeric,
    non-finite or negative.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
    else:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    if number < 0:
        return None
    return number


def _first_present(record: dict, *keys: str) -> Any:
    """Return the first value among aliased keys that is neither None nor ""."""
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None
