"""
Econ Data Explorer — Value Formatting
Display strings for observed values and the reverse parse used by the chart math.
"""
import math
import re

CURRENCY = "currency"
PERCENT = "percent"
SIZE = "size"
COUNT = "count"

_STRIP_CHARS = re.compile(r"[$,%\s]")


def value_kind(name: str, source_id: str | None = None) -> str:
    """
    Pick a display kind from the variable name.

    HUD tables check rates before money because several of their
    percentage variables mention income.
    """
    lowered = (name or "").lower()
    is_percent = "rate" in lowered or "pct" in lowered or "%" in lowered

    if source_id == "hud":
        if is_percent:
            return PERCENT
        if "size" in lowered:
            return SIZE
        if "fmr" in lowered or "income" in lowered:
            return CURRENCY
        return COUNT

    if "income" in lowered or "value" in lowered:
        return CURRENCY
    if is_percent:
        return PERCENT
    if "size" in lowered:
        return SIZE
    return COUNT


def format_value(value, name: str = "", source_id: str | None = None,
                 kind: str | None = None) -> str:
    """Format a numeric value for tables and reports, "N/A" when missing."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "N/A"
    try:
        num = float(value)
    except (ValueError, TypeError):
        return "N/A"
    if math.isnan(num):
        return "N/A"

    kind = kind or value_kind(name, source_id)
    if kind == CURRENCY:
        sign = "-" if num < 0 else ""
        num = abs(num)
        if num.is_integer():
            return f"{sign}${int(num):,}"
        return f"{sign}${num:,.2f}"
    if kind == PERCENT:
        return f"{num:.1f}%"
    if kind == SIZE:
        return f"{num:.2f}"
    return f"{num:,.0f}"


def parse_number(text) -> float | None:
    """Parse a display string back to a number, ignoring $ , and % characters."""
    if text is None:
        return None
    if isinstance(text, (int, float)):
        return None if isinstance(text, float) and math.isnan(text) else float(text)
    cleaned = _STRIP_CHARS.sub("", str(text))
    if not cleaned:
        return None
    try:
        num = float(cleaned)
    except ValueError:
        return None
    return None if math.isnan(num) else num


def parse_upstream_value(raw, sentinels=frozenset()) -> float | None:
    """
    Convert an upstream cell to a float.

    Returns None for missing cells, non-numeric text and sentinel codes.
    """
    if raw is None or raw == "":
        return None
    try:
        num = float(raw)
    except (ValueError, TypeError):
        return None
    if math.isnan(num) or math.isinf(num):
        return None
    if num in sentinels:
        return None
    return num
