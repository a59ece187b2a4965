#!/usr/bin/env python3
from __future__ import annotations

import math
import re

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")
_LEADING_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def int_value(value: object, *, default: int) -> int:
    """Coerce a value to int with fallback to default.

    Strings are read up to the first non-digit ("12px" -> 12, "7.9" -> 7),
    the way HTML form values usually arrive.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return default
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value.strip())
        if match is None:
            return default
        return int(match.group(0))
    return default


def float_value(value: object, *, default: float) -> float:
    """Coerce a value to float with fallback to default."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
        return number if not math.isnan(number) else default
    if isinstance(value, str):
        match = _LEADING_FLOAT_RE.match(value.strip())
        if match is None:
            return default
        return float(match.group(0))
    return default


def bool_value(value: object, *, default: bool = False) -> bool:
    """Coerce a flag; only an explicit true value enables it."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False
