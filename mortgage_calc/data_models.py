"""Data models for the mortgage calculator.

This module defines the dataclasses passed between the validation layer, the
amortization engine and the presentation code: the validated loan input, the
month-level entries produced by the simulation, the yearly roll-up and the
final result. All of them are frozen so a computed result can be shared
without anyone mutating it in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class TermCode(IntEnum):
    """Fixed-rate loan terms offered by the calculator.

    The integer values are the codes used by the form and the JSON request
    (``0`` for a 30 year loan, ``1`` for a 15 year loan).
    """

    THIRTY_YEAR = 0
    FIFTEEN_YEAR = 1

    @property
    def years(self) -> int:
        return 30 if self is TermCode.THIRTY_YEAR else 15

    @property
    def months(self) -> int:
        return self.years * 12


@dataclass(frozen=True)
class LoanInput:
    """A validated loan request.

    Attributes
    ----------
    principal: float
        The amount borrowed, in currency units.
    annual_rate: float
        Annual nominal interest rate as a fraction (``0.07`` for 7 %).
    term: TermCode
        The loan term.
    extra_monthly_payment: float
        Amount added to every scheduled payment and applied entirely to
        principal.
    """

    principal: float
    annual_rate: float
    term: TermCode
    extra_monthly_payment: float = 0.0

    @property
    def term_months(self) -> int:
        return self.term.months


@dataclass(frozen=True)
class MonthlyEntry:
    """One simulated month of the schedule."""

    interest_payment: float
    principal_payment: float
    remaining_principal: float
    total_paid: float  # cumulative, including this month


@dataclass(frozen=True)
class YearlyEntry:
    """A year chunk of up to twelve months rolled up for display.

    ``interest`` and ``principal`` are the totals paid during the chunk; the
    averages divide them by ``months`` so a final partial year is comparable
    with full ones.
    """

    year_index: int
    months: int
    interest: float
    principal: float
    ending_balance: float

    @property
    def average_monthly_interest(self) -> float:
        return self.interest / self.months

    @property
    def average_monthly_principal(self) -> float:
        return self.principal / self.months


@dataclass(frozen=True)
class AmortizationResult:
    """Output of the amortization engine.

    ``monthly_payment`` is the required payment from the annuity formula
    (without any extra payment) and is not rounded here; rounding to whole
    currency units happens at the request boundary.
    """

    principal: float
    monthly_payment: float
    total_paid: float
    schedule: Tuple[YearlyEntry, ...]

    @property
    def total_years(self) -> int:
        return len(self.schedule)

    @property
    def total_interest(self) -> float:
        return self.total_paid - self.principal
