"""
app/normalization/numeric.py

Locale-tolerant numeric parsing for ad platform exports.

Exports from different tools and locales write the same figure in
different ways::

    "1,234.56"    US thousands + decimal point
    "1.234,56"    EU thousands + decimal comma
    "1 234,56"    space as thousands separator
    "€ 45,2"      currency symbol prefix
    "45,2%"       unit suffix

:func:`parse_number` maps all of them to a plain float and never raises.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]")
_WHITESPACE = re.compile(r"\s+")
_LEADING_FLOAT = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_number(value: Any) -> float:
    """
    Convert a numeric-like cell value into a float.

    Rules
    -----
    * ``int`` / ``float`` / ``Decimal`` are returned unchanged (as float).
      NaN and infinities become ``0.0``.
    * Strings are trimmed; an empty string is ``0.0``.
    * When the last comma appears after the last dot, the comma is the
      decimal separator and every dot is a thousands separator.
      Otherwise the dot is the decimal separator and commas are dropped.
    * Whitespace and any character other than digits, ``.`` and ``-``
      are removed before parsing.
    * The longest leading float is parsed; no match yields ``0.0``.
    * Booleans, ``None`` and any other type yield ``0.0``.
    """

    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    if not isinstance(value, str):
        return 0.0

    raw = value.strip()
    if not raw:
        return 0.0

    if raw.rfind(",") > raw.rfind("."):
        raw = raw.replace(".", "").replace(",", ".")
    else:
        raw = raw.replace(",", "")

    cleaned = _NON_NUMERIC_CHARS.sub("", _WHITESPACE.sub("", raw))
    match = _LEADING_FLOAT.match(cleaned)
    if match is None:
        return 0.0

    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0
