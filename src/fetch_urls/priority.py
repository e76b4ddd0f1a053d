"""Priority hint extraction from product custom fields."""

from __future__ import annotations

import math
import re
from typing import Any, Optional

PRIORITY_FIELD_NAME = "priority"

# Leading decimal of a value; trailing text such as "0.8 (high)" is ignored
LEADING_DECIMAL = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def round_priority(value: float) -> float:
    """Round to one decimal place, halves rounding up (0.75 -> 0.8)."""
    return math.floor(value * 10 + 0.5) / 10


def parse_priority(value: Any) -> Optional[float]:
    """Parse the leading decimal of a raw priority value.

    Returns None unless the value starts with a number in [0, 1].
    """
    if value is None:
        return None
    match = LEADING_DECIMAL.match(str(value))
    if not match:
        return None
    number = float(match.group(1))
    if not 0.0 <= number <= 1.0:
        return None
    return round_priority(number)


def get_priority(record: dict[str, Any]) -> Optional[float]:
    """Return the priority hint of a product record, if it has a valid one."""
    for custom_field in record.get("custom_fields") or []:
        name = custom_field.get("name") or ""
        if name.strip().lower() == PRIORITY_FIELD_NAME:
            return parse_priority(custom_field.get("value"))
    return None
