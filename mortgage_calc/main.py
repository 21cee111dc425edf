"""Command-line interface for the mortgage calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute a yearly amortization schedule, view the summary
only, or compare two scenarios (for example with and without an extra monthly
payment). Results can be printed to the terminal or exported to JSON/CSV
files.
"""

from __future__ import annotations

import csv
import json
import shlex
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .data_models import AmortizationResult, LoanInput
from .engine import chart_data, compute_loan, loan_from_request, result_to_dict
from .formatter import print_comparison, print_schedule, print_summary
from .utils import TERM_YEARS_TO_CODE, parse_amount
from .validation import LoanInputError


def build_loan_from_options(
    principal: str,
    rate: str,
    term: str,
    extra: Optional[str] = None,
) -> LoanInput:
    """Turn raw option values into a validated :class:`LoanInput`.

    ``rate`` is a whole percentage and ``term`` is the number of years
    ("30" or "15"). Validation failures are reported as usage errors.
    """
    request = {
        "principal": parse_amount(principal),
        "annual_rate_percent": rate.strip().rstrip("%") if rate else rate,
        "term_code": TERM_YEARS_TO_CODE.get(str(term).strip(), term),
        "extra_monthly_payment": parse_amount(extra) if extra else "0",
    }
    try:
        return loan_from_request(request)
    except LoanInputError as exc:
        raise click.UsageError(exc.message) from exc


def export_to_json(path: Path, result: AmortizationResult) -> None:
    """Export the result and its chart data to a JSON file."""
    data = result_to_dict(result)
    data["chart"] = chart_data(result)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, result: AmortizationResult) -> None:
    """Export the yearly schedule to a CSV file."""
    header = [
        "Year",
        "Months",
        "Interest",
        "Principal",
        "Avg_Monthly_Interest",
        "Avg_Monthly_Principal",
        "Ending_Balance",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for year in result.schedule:
            writer.writerow(
                [
                    year.year_index,
                    year.months,
                    year.interest,
                    year.principal,
                    year.average_monthly_interest,
                    year.average_monthly_principal,
                    year.ending_balance,
                ]
            )


def loan_options(func):
    """Attach the shared loan options to a command."""
    options = [
        click.option("--principal", "-p", "principal", required=True, help="Loan amount (e.g. 300000, 300k)"),
        click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)"),
        click.option(
            "--term",
            "-t",
            "term",
            type=click.Choice(sorted(TERM_YEARS_TO_CODE)),
            default="30",
            show_default=True,
            help="Loan term in years",
        ),
        click.option("--extra", "-e", "extra", default="0", help="Extra monthly payment applied to principal"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
def cli() -> None:
    """A command-line fixed-rate mortgage calculator."""
    pass


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(principal: str, rate: str, term: str, extra: str, output: Optional[str]) -> None:
    """Compute and print the yearly amortization schedule."""
    loan = build_loan_from_options(principal, rate, term, extra)
    result = compute_loan(loan)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
    else:
        print_summary(result)
        print_schedule(result.schedule)


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(principal: str, rate: str, term: str, extra: str, output: Optional[str]) -> None:
    """Compute and print only the summary figures for a loan."""
    loan = build_loan_from_options(principal, rate, term, extra)
    result = compute_loan(loan)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        data = result_to_dict(result)
        data.pop("schedule")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": data}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result)


def parse_scenario_opts(opts: str) -> Dict[str, Any]:
    """Parse a quoted scenario option string into loan option values."""
    tokens = shlex.split(opts)
    params: Dict[str, Any] = {"principal": None, "rate": None, "term": "30", "extra": "0"}
    names = {
        "-p": "principal",
        "--principal": "principal",
        "-r": "rate",
        "--rate": "rate",
        "-t": "term",
        "--term": "term",
        "-e": "extra",
        "--extra": "extra",
    }
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token not in names:
            raise click.BadParameter(f"Unknown option in scenario: {token}")
        if i + 1 >= len(tokens):
            raise click.BadParameter(f"Option {token} in scenario needs a value")
        params[names[token]] = tokens[i + 1]
        i += 2
    for required in ("principal", "rate"):
        if params[required] is None:
            raise click.BadParameter(f"Scenario missing required option {required}")
    return params


@cli.command()
@click.option("--scenario1", "scenario1", required=True, help="First scenario options quoted string")
@click.option("--scenario2", "scenario2", required=True, help="Second scenario options quoted string")
def compare(scenario1: str, scenario2: str) -> None:
    """Compare two mortgage scenarios.

    Scenarios are provided as quoted option strings, for example:

        mortgage-calc compare --scenario1 "-p 300k -r 7" --scenario2 "-p 300k -r 7 -e 500"
    """
    loan1 = build_loan_from_options(**parse_scenario_opts(scenario1))
    loan2 = build_loan_from_options(**parse_scenario_opts(scenario2))
    print_comparison(compute_loan(loan1), compute_loan(loan2))


if __name__ == "__main__":
    cli()
