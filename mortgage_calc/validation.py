"""Input validation for the mortgage calculator.

Raw values coming from the form, the CLI or a JSON request are checked here
before the engine runs. The checks short-circuit in a fixed order (principal,
rate, extra payment, then term) so a request with several bad fields always
reports the same single error.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from .data_models import LoanInput, TermCode
from .utils import annuity_payment


# About 64 ulps of the principal.
MIN_PAYDOWN_FRACTION = 2.0 ** -46


class LoanInputError(ValueError):
    """Base class for rejected loan input.

    ``kind`` names the failing check and ``message`` is the text shown to the
    user.
    """

    kind = "InvalidInput"
    message = "Loan input is invalid"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidPrincipal(LoanInputError):
    kind = "InvalidPrincipal"
    message = "Loan amount is invalid"


class InvalidRate(LoanInputError):
    kind = "InvalidRate"
    message = "Interest is invalid"


class InvalidExtraPayment(LoanInputError):
    kind = "InvalidExtraPayment"
    message = "Extra monthly payment is invalid"


class InvalidTerm(LoanInputError):
    kind = "InvalidTerm"
    message = "Loan term is invalid"


def to_number(value: Any) -> float:
    """Coerce a raw input value to a float.

    Strings are stripped of whitespace and thousands separators. Anything
    that cannot be read as a number (``None``, booleans, empty or garbage
    strings) becomes NaN so the caller can classify it.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return math.nan
        value = cleaned
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def _is_positive(number: float) -> bool:
    return math.isfinite(number) and number > 0


def _pays_down(loan: LoanInput) -> bool:
    """Return whether the scheduled payments visibly pay the loan down.

    At very high rates the required payment is indistinguishable from the
    first month's interest in floating point (or ``(1 + i)^n`` overflows).
    The first principal payment must then be large enough, relative to the
    balance, that the shrinking interest compounds instead of getting lost in
    rounding.
    """
    rate_per_month = loan.annual_rate / 12
    try:
        payment = annuity_payment(loan.principal, rate_per_month, loan.term_months)
    except OverflowError:
        return False
    first = payment + loan.extra_monthly_payment - loan.principal * rate_per_month
    return first > loan.principal * MIN_PAYDOWN_FRACTION


def to_term_code(value: Any) -> TermCode:
    """Return the :class:`TermCode` for a raw term code (``0``/``1``)."""
    if isinstance(value, TermCode):
        return value
    number = to_number(value)
    if not math.isfinite(number) or number != int(number):
        raise InvalidTerm()
    try:
        return TermCode(int(number))
    except ValueError as exc:
        raise InvalidTerm() from exc


def validate_loan_input(
    principal: Any,
    annual_rate: Any,
    term_code: Any,
    extra_monthly_payment: Any = 0,
) -> LoanInput:
    """Validate raw values and build a :class:`LoanInput`.

    ``annual_rate`` is a fraction here; callers holding a whole percentage
    divide it by 100 first (see :func:`mortgage_calc.engine.calculate`).

    Raises
    ------
    InvalidPrincipal, InvalidRate, InvalidExtraPayment, InvalidTerm
        The first failing check, in that order. A rate so high that the
        loan cannot be amortized is reported as ``InvalidRate`` once the
        other fields are known to be valid.
    """
    principal_value = to_number(principal)
    if not _is_positive(principal_value):
        raise InvalidPrincipal()

    rate_value = to_number(annual_rate)
    if not _is_positive(rate_value):
        raise InvalidRate()

    extra_value = to_number(extra_monthly_payment)
    if not math.isfinite(extra_value) or extra_value < 0:
        raise InvalidExtraPayment()

    loan = LoanInput(
        principal=principal_value,
        annual_rate=rate_value,
        term=to_term_code(term_code),
        extra_monthly_payment=extra_value,
    )
    if not _pays_down(loan):
        raise InvalidRate()
    return loan
