"""Numeric parsing and rounding helpers shared by the normalizer and classifier."""

from __future__ import annotations

import math
from typing import Any, Optional


def parse_float_or_none(value: Any) -> Optional[float]:
    """
    Parse a raw field into a finite float.

    Empty strings, text, NaN and infinities all become None so that a missing
    reading never turns into 0. The whole field must be a number: trailing text
    such as "45.2m" is rejected rather than read as 45.2, and digit-group
    underscores ("1_000") are rejected although Python's float() accepts them.
    """
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def round_half_up(value: float, ndigits: int = 2) -> float:
    """Round to `ndigits` decimals with halves rounded toward +inf."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor
