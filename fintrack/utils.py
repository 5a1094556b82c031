"""Utility functions shared by the calculators.

This module provides helpers for turning user input into ``Decimal`` values,
for rounding results the way the calculators display them and for handling
calendar dates (parsing ISO strings and counting days to a deadline).
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from typing import Union

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

Number = Union[Decimal, int, float, str]

# Monthly rates below this are treated as zero by the annuity formulas.
EFFECTIVELY_ZERO_RATE = Decimal("1e-12")


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips whitespace and any grouping commas and handles both
    integer and float-like strings. It raises ``ValueError`` if conversion
    fails, the value is not finite (``NaN`` or ``Infinity``) or it has more
    integer digits than the context precision can hold exactly.
    """
    try:
        cleaned = value.strip().replace(",", "")
        result = Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite() or result.adjusted() >= getcontext().prec:
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def to_decimal(value: Number) -> Decimal:
    """Coerce an int, float, string or ``Decimal`` into a ``Decimal``.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value!r}")
    if isinstance(value, (int, float)):
        return decimal_from_str(str(value))
    return decimal_from_str(value)


def round_half_up(value: Decimal) -> int:
    """Round to the nearest whole number, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part`` as a percentage of ``whole`` (0 when ``whole`` is 0)."""
    if whole == 0:
        return Decimal("0")
    return part / whole * Decimal(100)


def parse_date(value: Union[str, date]) -> date:
    """Parse a ``YYYY-MM-DD`` string into a ``date`` object.

    ``date`` instances are returned unchanged; a ``datetime`` is reduced to
    its date part.

    Raises
    ------
    ValueError
        If the string is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (ValueError, AttributeError) as exc:
        raise ValueError(f"Invalid date string: {value}") from exc


def days_until(deadline: date, today: date) -> int:
    """Number of calendar days from ``today`` to ``deadline``.

    Negative once the deadline has passed.
    """
    return (deadline - today).days
