"""Parsing of locale-ambiguous numeric strings."""

from __future__ import annotations

import math
import re

_PLACEHOLDER_RE = re.compile(r"^(null|nd|n/d|na|n/a|-)$", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_CLUTTER_RE = re.compile(r"[^\d,.\-]")
_LEADING_NUMBER_RE = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)")


def _to_decimal_notation(value: str) -> str:
    has_comma = "," in value
    has_dot = "." in value

    if has_comma and has_dot:
        # The separator that appears last is the decimal point.
        if value.rfind(",") > value.rfind("."):
            return value.replace(".", "").replace(",", ".")
        return value.replace(",", "")
    if has_comma:
        return value.replace(",", ".")
    return value


def parse_numeric(raw: str | int | float | None) -> float | None:
    """Parse a capacity or coordinate value.

    Accepts both decimal conventions ("1.234,56" and "1,234.56"), strips unit
    and currency clutter, and maps placeholders such as "N/D" to ``None``.
    Returns ``None`` when no finite number can be recovered.
    """
    if raw is None:
        return None
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
        return value if math.isfinite(value) else None

    cleaned = str(raw).strip()
    if not cleaned or _PLACEHOLDER_RE.match(cleaned):
        return None

    cleaned = _WHITESPACE_RE.sub("", cleaned)
    cleaned = _CLUTTER_RE.sub("", cleaned)
    if not cleaned:
        return None

    match = _LEADING_NUMBER_RE.match(_to_decimal_notation(cleaned))
    if match is None:
        return None

    value = float(match.group(0))
    return value if math.isfinite(value) else None
