"""Core calculation engine for the mortgage calculator.

This module implements the fixed-rate amortization logic: the required
monthly payment from the annuity formula, a month-by-month simulation that
applies an optional extra payment to principal, and the roll-up of months into
yearly entries. Every function here is pure; ``calculate`` is the request /
response boundary used by the CLI and the web app.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple

from .data_models import AmortizationResult, LoanInput, MonthlyEntry, YearlyEntry
from .utils import annuity_payment, round_currency
from .validation import to_number, validate_loan_input

logger = logging.getLogger(__name__)

# Balances at or below this are floating point residue and count as paid off.
EPSILON = 0.01
MONTHS_PER_YEAR = 12


def monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """Return the payment that fully amortizes ``principal`` over ``term_months``.

    The formula is:

        payment = P * i * (1 + i)^n / ((1 + i)^n - 1)

    where ``i`` is the monthly rate. When the rate is zero the payment
    simplifies to ``P / n``.
    """
    if term_months <= 0:
        raise ValueError("Term must be positive")
    return annuity_payment(principal, annual_rate / MONTHS_PER_YEAR, term_months)


def simulate(
    principal: float,
    annual_rate: float,
    term_months: int,
    extra_payment: float = 0.0,
) -> Iterator[Tuple[MonthlyEntry, ...]]:
    """Yield the schedule as year chunks of up to twelve monthly entries.

    The required payment is computed once and kept constant; ``extra_payment``
    is added on top every month. The last month of the loan pays only what is
    left, so the balance never goes negative. Raises ``ValueError`` if a
    payment would not reduce the balance; validated input never does.
    """
    payment = monthly_payment(principal, annual_rate, term_months)
    remaining = principal
    total_paid = 0.0

    while remaining > EPSILON:
        months: List[MonthlyEntry] = []
        for _ in range(MONTHS_PER_YEAR):
            interest_payment = remaining * annual_rate / MONTHS_PER_YEAR
            principal_payment = payment + extra_payment - interest_payment
            if remaining <= principal_payment:
                principal_payment = remaining

            if not remaining - principal_payment < remaining:
                raise ValueError("Payment does not reduce the balance")
            remaining -= principal_payment
            total_paid += interest_payment + principal_payment

            paid_off = remaining <= EPSILON
            if paid_off:
                remaining = 0.0

            months.append(
                MonthlyEntry(
                    interest_payment=interest_payment,
                    principal_payment=principal_payment,
                    remaining_principal=remaining,
                    total_paid=total_paid,
                )
            )
            if paid_off:
                break
        if months:
            yield tuple(months)


def summarize_year(year_index: int, months: Sequence[MonthlyEntry]) -> YearlyEntry:
    """Roll a chunk of monthly entries up into a :class:`YearlyEntry`."""
    if not months:
        raise ValueError("A year needs at least one month")
    return YearlyEntry(
        year_index=year_index,
        months=len(months),
        interest=sum(m.interest_payment for m in months),
        principal=sum(m.principal_payment for m in months),
        ending_balance=months[-1].remaining_principal,
    )


def compute(
    principal: float,
    annual_rate: float,
    term_months: int,
    extra_payment: float = 0.0,
) -> AmortizationResult:
    """Compute the amortization result for already validated input.

    Parameters
    ----------
    principal: float
        Amount borrowed, positive.
    annual_rate: float
        Annual rate as a fraction, positive.
    term_months: int
        Nominal term in months (360 or 180).
    extra_payment: float
        Extra amount applied to principal each month, non-negative.
    """
    schedule: List[YearlyEntry] = []
    total_paid = 0.0
    for year_index, months in enumerate(
        simulate(principal, annual_rate, term_months, extra_payment), start=1
    ):
        schedule.append(summarize_year(year_index, months))
        total_paid = months[-1].total_paid

    result = AmortizationResult(
        principal=principal,
        monthly_payment=monthly_payment(principal, annual_rate, term_months),
        total_paid=total_paid,
        schedule=tuple(schedule),
    )
    logger.debug(
        "Amortized %.2f at %.4f over %d months (extra %.2f): paid off in %d years",
        principal,
        annual_rate,
        term_months,
        extra_payment,
        result.total_years,
    )
    return result


def compute_loan(loan: LoanInput) -> AmortizationResult:
    """Compute the result for a :class:`LoanInput`."""
    return compute(
        loan.principal,
        loan.annual_rate,
        loan.term_months,
        loan.extra_monthly_payment,
    )


def result_to_dict(result: AmortizationResult) -> Dict[str, Any]:
    """Serialize a result to the response mapping.

    Only the summary figures are rounded to whole currency units; the yearly
    figures are the raw average monthly amounts.
    """
    return {
        "monthly_payment": round_currency(result.monthly_payment),
        "total_paid": round_currency(result.total_paid),
        "total_years": result.total_years,
        "schedule": [
            {
                "year_index": year.year_index,
                "interest": year.average_monthly_interest,
                "principal": year.average_monthly_principal,
                "ending_balance": year.ending_balance,
            }
            for year in result.schedule
        ],
    }


def chart_data(result: AmortizationResult) -> Dict[str, Any]:
    """Return the stacked bar chart payload of average monthly interest and principal."""
    return {
        "labels": [year.year_index for year in result.schedule],
        "datasets": [
            {
                "label": "Interest",
                "data": [year.average_monthly_interest for year in result.schedule],
            },
            {
                "label": "Principal",
                "data": [year.average_monthly_principal for year in result.schedule],
            },
        ],
    }


def calculate(request: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate a raw request and return the serialized result.

    ``request`` holds ``principal``, ``annual_rate_percent`` (whole percent),
    ``term_code`` (0 or 1) and optionally ``extra_monthly_payment``.

    Raises
    ------
    LoanInputError
        When validation rejects the request; no partial result is produced.
    """
    loan = loan_from_request(request)
    return result_to_dict(compute_loan(loan))


def loan_from_request(request: Mapping[str, Any]) -> LoanInput:
    """Validate a raw request mapping into a :class:`LoanInput`."""
    # NaN stays NaN, so a non-numeric rate is still reported by validation.
    annual_rate = to_number(request.get("annual_rate_percent")) / 100
    return validate_loan_input(
        request.get("principal"),
        annual_rate,
        request.get("term_code", 0),
        request.get("extra_monthly_payment", 0),
    )

