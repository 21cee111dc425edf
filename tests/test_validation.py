import math

import pytest

from mortgage_calc.data_models import TermCode
from mortgage_calc.engine import calculate
from mortgage_calc.validation import (
    InvalidExtraPayment,
    InvalidPrincipal,
    InvalidRate,
    InvalidTerm,
    LoanInputError,
    to_number,
    validate_loan_input,
)


def test_valid_input_builds_loan():
    loan = validate_loan_input("300,000", "0.07", 1, "250")
    assert loan.principal == 300_000
    assert loan.annual_rate == 0.07
    assert loan.term is TermCode.FIFTEEN_YEAR
    assert loan.term_months == 180
    assert loan.extra_monthly_payment == 250


@pytest.mark.parametrize("principal", [-1, 0, "", "abc", None, math.nan, True])
def test_bad_principal(principal):
    with pytest.raises(InvalidPrincipal) as excinfo:
        validate_loan_input(principal, 0.07, 0, 0)
    assert excinfo.value.message == "Loan amount is invalid"
    assert excinfo.value.kind == "InvalidPrincipal"


@pytest.mark.parametrize("rate", [0, -0.01, "seven", None])
def test_bad_rate(rate):
    with pytest.raises(InvalidRate, match="Interest is invalid"):
        validate_loan_input(300_000, rate, 0, 0)


@pytest.mark.parametrize("extra", [-1, "x", None])
def test_bad_extra_payment(extra):
    with pytest.raises(InvalidExtraPayment, match="Extra monthly payment is invalid"):
        validate_loan_input(300_000, 0.07, 0, extra)


def test_zero_extra_payment_is_valid():
    assert validate_loan_input(300_000, 0.07, 0, 0).extra_monthly_payment == 0


@pytest.mark.parametrize("term", [2, -1, "thirty", 0.5])
def test_bad_term(term):
    with pytest.raises(InvalidTerm):
        validate_loan_input(300_000, 0.07, term, 0)


def test_first_failure_wins():
    with pytest.raises(InvalidPrincipal):
        validate_loan_input(-1, 0, 9, -5)
    with pytest.raises(InvalidRate):
        validate_loan_input(1000, 0, 9, -5)
    with pytest.raises(InvalidExtraPayment):
        validate_loan_input(1000, 0.05, 9, -5)


def test_errors_are_value_errors():
    assert issubclass(LoanInputError, ValueError)
    assert str(InvalidRate()) == "Interest is invalid"


def test_calculate_rejects_negative_principal_before_anything_else():
    with pytest.raises(InvalidPrincipal):
        calculate({"principal": -1, "annual_rate_percent": "bad", "extra_monthly_payment": -3})


def test_calculate_rejects_zero_rate():
    with pytest.raises(InvalidRate):
        calculate({"principal": 1000, "annual_rate_percent": 0, "term_code": 0})


def test_to_number():
    assert to_number(" 1,500.5 ") == 1500.5
    assert to_number(3) == 3.0
    assert math.isnan(to_number(""))
    assert math.isnan(to_number(False))
    assert math.isnan(to_number([1]))


@pytest.mark.parametrize("rate", [1.5, 2.0, 3.0, 80.0])
def test_rate_too_high_to_amortize(rate):
    with pytest.raises(InvalidRate):
        validate_loan_input(300_000, rate, 0, 0)


@pytest.mark.parametrize("rate_percent", [150, 300, 8000])
def test_calculate_rejects_rates_that_never_pay_down(rate_percent):
    with pytest.raises(InvalidRate):
        calculate({"principal": 300_000, "annual_rate_percent": rate_percent, "term_code": 0})


def test_high_but_amortizing_rate_still_computes():
    data = calculate({"principal": 300_000, "annual_rate_percent": 100, "term_code": 0})
    assert data["total_years"] <= 30
    assert data["schedule"][-1]["ending_balance"] == 0


def test_huge_extra_payment_allows_high_rate():
    loan = validate_loan_input(100, 3.0, 0, 1_000_000)
    assert loan.extra_monthly_payment == 1_000_000


def test_oversized_integer_is_not_a_number():
    assert math.isnan(to_number(10**400))
    with pytest.raises(InvalidPrincipal):
        calculate({"principal": 10**400, "annual_rate_percent": 7, "term_code": 0})
