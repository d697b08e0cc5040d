from __future__ import annotations

import math
import re

"""Lenient number parsing shared by the row validator and the entry validator.

Values are read the way a browser form reads them: leading whitespace is
skipped and the longest numeric prefix is used, so "12.5kg" reads as 12.5
and "7 units" as 7. A value without a numeric prefix does not parse.
"""

__all__ = [
    "parse_float",
    "parse_int",
]

_FLOAT_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_INT_PREFIX = re.compile(r"[+-]?[0-9]+")


def parse_float(value: str) -> float | None:
    """Parse the leading decimal number of ``value``; None if there is none."""
    m = _FLOAT_PREFIX.match(value.lstrip())
    if m is None:
        return None
    text = m.group(0)
    if text.lstrip("+-") == "Infinity":
        return -math.inf if text.startswith("-") else math.inf
    return float(text)


def parse_int(value: str) -> int | None:
    """Parse the leading base-10 integer of ``value``; None if there is none."""
    m = _INT_PREFIX.match(value.lstrip())
    if m is None:
        return None
    return int(m.group(0))
