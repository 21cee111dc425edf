"""Output helpers for the mortgage calculator.

This module renders amortization results as plain text tables for the
command-line interface. Everything is written through ``click.echo`` so it can
be captured by click's test runner.
"""

from __future__ import annotations

from typing import Iterable

import click

from .data_models import AmortizationResult, YearlyEntry
from .utils import format_currency


def print_summary(result: AmortizationResult) -> None:
    """Print the headline figures of a result."""
    click.echo("Summary")
    click.echo("-" * 56)
    click.echo(f"Monthly payment    : {format_currency(result.monthly_payment)}")
    click.echo(f"Total paid         : {format_currency(result.total_paid)}")
    click.echo(f"Total interest     : {format_currency(result.total_interest)}")
    click.echo(f"Total years        : {result.total_years}")
    click.echo("-" * 56)


def print_schedule(schedule: Iterable[YearlyEntry]) -> None:
    """Print the yearly schedule as a tab separated table.

    Interest and principal are the totals paid during each year; the ending
    balance is the balance after the year's last payment.
    """
    headers = ["Year", "Interest", "Principal", "EndBal"]
    click.echo("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.year_index),
            format_currency(entry.interest),
            format_currency(entry.principal),
            format_currency(entry.ending_balance),
        ]
        click.echo("\t".join(row))


def print_comparison(r1: AmortizationResult, r2: AmortizationResult) -> None:
    """Print two results side by side.

    The difference column is scenario2 - scenario1, so a negative value means
    the second scenario is cheaper or shorter.
    """
    click.echo("Comparison")
    click.echo("=" * 72)
    click.echo(f"{'Metric':20s} {'Scenario1':>15s} {'Scenario2':>15s} {'Difference':>15s}")
    metrics = [
        ("monthly_payment", r1.monthly_payment, r2.monthly_payment),
        ("total_paid", r1.total_paid, r2.total_paid),
        ("total_interest", r1.total_interest, r2.total_interest),
    ]
    for key, v1, v2 in metrics:
        click.echo(f"{key:20s} {v1:15.2f} {v2:15.2f} {v2 - v1:15.2f}")
    y1, y2 = r1.total_years, r2.total_years
    click.echo(f"{'total_years':20s} {y1:15d} {y2:15d} {y2 - y1:15d}")
    click.echo("=" * 72)
