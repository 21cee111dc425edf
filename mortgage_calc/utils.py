"""Utility functions for the mortgage calculator.

This module provides helpers for parsing user-entered amounts (``300k``,
``1.2m``, ``250,000``) and for rounding and formatting currency values for
display.
"""

from __future__ import annotations

import math
from typing import Optional

TERM_YEARS_TO_CODE = {"30": 0, "15": 1}


def parse_amount(value: Optional[str]) -> str:
    """Expand shorthand amounts into plain numeric strings.

    Accepts plain numbers ("500000"), thousands separators ("500,000") and
    ``k``/``m`` suffixes ("500k" meaning 500_000). Anything else is returned
    stripped but otherwise untouched so validation can reject it with the
    right message.
    """
    if value is None:
        return ""
    cleaned = value.strip().lower().replace(",", "")
    factor = 1.0
    if cleaned.endswith("k"):
        factor = 1_000.0
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = 1_000_000.0
        cleaned = cleaned[:-1]
    try:
        return repr(float(cleaned) * factor)
    except ValueError:
        return value.strip()


def annuity_payment(principal: float, rate_per_month: float, term: int) -> float:
    """Return the equal monthly installment that repays ``principal`` in ``term`` months.

    When the rate is zero the payment simplifies to ``principal / term``.
    Raises ``OverflowError`` when ``(1 + i)^n`` does not fit in a float.
    """
    if rate_per_month == 0:
        return principal / term
    factor = (1 + rate_per_month) ** term
    return principal * rate_per_month * factor / (factor - 1)


def round_currency(value: float) -> int:
    """Round to the nearest whole currency unit, halves away from zero.

    ``round()`` would round halves to even, which is not how amounts are
    shown to users.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def format_currency(value: float, symbol: str = "$") -> str:
    """Format a value as whole currency units, e.g. ``$1,996``."""
    rounded = round_currency(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,}"
