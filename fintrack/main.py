"""Command-line interface for the finance calculators.

This module uses the ``click`` library to implement a multi-command
interface: salary allocation, loan EMI schedules, SIP projections, lump-sum
investment plans and a goal tracker session. Raw option values go through the
validator; a rejection is reported as a bad parameter and no calculation is
run. EMI schedules can be exported to JSON or CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import click

from . import allocation, amortization, investment, sip
from .data_models import GOAL_FILTERS, GOAL_SORT_KEYS, LOAN_CATEGORIES, RISK_PROFILE_NAMES, EMIResult
from .errors import Rejection
from .formatter import (
    print_allocation,
    print_emi_summary,
    print_goals,
    print_investment_plan,
    print_schedule,
    print_sip_results,
    print_yearly_schedule,
)
from .goals import GoalTracker, filter_and_sort
from .utils import decimal_from_str, parse_date
from .validation import (
    Valid,
    goal_fields_from_input,
    loan_terms_from_input,
    sip_input_from_input,
    validate,
)

_SUFFIXES = (
    ("cr", Decimal("10000000")),
    ("k", Decimal("1000")),
    ("l", Decimal("100000")),
    ("m", Decimal("1000000")),
)


def parse_amount(value: str) -> Union[Decimal, str]:
    """Expand shorthand amounts.

    Accepts ``k`` (thousand), ``l`` (lakh), ``m`` (million) and ``cr``
    (crore) suffixes, e.g. "5l" meaning 500_000. Anything else is returned
    as cleaned text for the validator to judge.
    """
    text = value.strip().lower().replace(",", "")
    for suffix, factor in _SUFFIXES:
        if text.endswith(suffix):
            try:
                return decimal_from_str(text[: -len(suffix)]) * factor
            except ValueError:
                raise click.BadParameter(f"Invalid amount: {value}")
    return text


def _require(result: Union[Valid, Rejection, Any], param_hint: str) -> Any:
    if isinstance(result, Rejection):
        raise click.BadParameter(result.reason, param_hint=param_hint)
    if isinstance(result, Valid):
        return result.value
    return result


def parse_goal_strings(values: Tuple[str, ...]) -> List[Dict[str, Any]]:
    """Parse ``PURPOSE:AMOUNT:YYYY-MM-DD:PRIORITY:CATEGORY[:NOTES]`` goal options.

    Returns keyword arguments for ``GoalTracker.create_goal``.
    """
    goals = []
    for item in values:
        parts = item.split(":", 5)
        if len(parts) < 5:
            raise click.BadParameter(
                f"Goal must be in PURPOSE:AMOUNT:YYYY-MM-DD:PRIORITY:CATEGORY[:NOTES] format; got {item}",
                param_hint="--goal",
            )
        purpose, amount, deadline, priority, category = parts[:5]
        fields = _require(
            goal_fields_from_input(parse_amount(amount), purpose, deadline, priority, category), "--goal"
        )
        fields["notes"] = parts[5].strip() if len(parts) == 6 else ""
        goals.append(fields)
    return goals


def parse_contribution_strings(values: Tuple[str, ...], goal_count: int) -> List[Tuple[int, Decimal]]:
    """Parse ``N:AMOUNT`` options, where ``N`` is the 1-based position of a ``--goal``."""
    contributions = []
    for item in values:
        parts = item.split(":")
        if len(parts) != 2:
            raise click.BadParameter(
                f"Contribution must be in N:AMOUNT format; got {item}", param_hint="--contribute"
            )
        index_str, amount = parts
        try:
            index = int(index_str)
        except ValueError:
            raise click.BadParameter(f"Invalid goal number: {index_str}", param_hint="--contribute")
        if not 1 <= index <= goal_count:
            raise click.BadParameter(f"No goal number {index}", param_hint="--contribute")
        value = _require(validate("contribution", parse_amount(amount)), "--contribute")
        contributions.append((index, value))
    return contributions


def export_to_json(path: Path, result: EMIResult) -> None:
    """Export the EMI summary and schedule to a JSON file."""
    sched_list = []
    for row in result.schedule:
        sched_list.append(
            {
                "month": row.month,
                "installment": float(row.installment),
                "principal": float(row.principal_component),
                "interest": float(row.interest_component),
                "balance": float(row.remaining_balance),
            }
        )
    data = {
        "summary": {
            "installment": float(result.installment),
            "total_interest": float(result.total_interest),
            "total_payment": float(result.total_payment),
            "months": result.months,
        },
        "schedule": sched_list,
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, result: EMIResult) -> None:
    """Export the schedule to a CSV file."""
    header = ["Month", "Installment", "Principal", "Interest", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in result.schedule:
            writer.writerow(
                [
                    row.month,
                    float(row.installment),
                    float(row.principal_component),
                    float(row.interest_component),
                    float(row.remaining_balance),
                ]
            )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details")
def cli(verbose: bool) -> None:
    """Personal finance calculators: salary, loans, SIPs, investments and goals."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--salary", "-s", "salary", required=True, help="Monthly income")
def salary(salary: str) -> None:
    """Split a monthly income into needs, wants, savings, investments and EMIs."""
    income = _require(validate("salary", parse_amount(salary)), "--salary")
    print_allocation(income, allocation.split(income))


@cli.command()
@click.option("--amount", "-p", "amount", required=True, help="Loan amount")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--tenure", "-t", "tenure", required=True, help="Loan tenure in years")
@click.option("--category", "category", type=click.Choice(LOAN_CATEGORIES), default="home", help="Loan type")
@click.option("--yearly", is_flag=True, help="Show the schedule aggregated per year")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def emi(amount: str, rate: str, tenure: str, category: str, yearly: bool, output: Optional[str]) -> None:
    """Compute the EMI and print the amortization schedule."""
    terms = loan_terms_from_input(parse_amount(amount), rate, tenure, category)
    if isinstance(terms, Rejection):
        hints = {"loan_amount": "--amount", "interest_rate": "--rate", "tenure": "--tenure"}
        raise click.BadParameter(terms.reason, param_hint=hints.get(terms.kind, "--category"))
    result = amortization.compute_emi(terms)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
        click.echo(f"Schedule exported to {path}")
        return
    print_emi_summary(result)
    if yearly:
        print_yearly_schedule(result)
    else:
        print_schedule(result.schedule)


@cli.command(name="sip")
@click.option("--amount", "-a", "amount", required=True, help="Monthly investment")
@click.option("--years", "-y", "years", required=True, help="Investment duration in years")
@click.option("--profile", type=click.Choice(RISK_PROFILE_NAMES), default="moderate", help="Risk profile")
def sip_command(amount: str, years: str, profile: str) -> None:
    """Project SIP returns for the funds of a risk profile."""
    sip_input = sip_input_from_input(parse_amount(amount), years)
    if isinstance(sip_input, Rejection):
        hint = "--amount" if sip_input.kind == "sip_amount" else "--years"
        raise click.BadParameter(sip_input.reason, param_hint=hint)
    print_sip_results(sip.project(sip_input, profile))


@cli.command()
@click.option("--amount", "-a", "amount", required=True, help="Lump sum to invest")
@click.option("--profile", type=click.Choice(RISK_PROFILE_NAMES), default="moderate", help="Risk profile")
def invest(amount: str, profile: str) -> None:
    """Suggest an instrument split for a lump sum and project its growth."""
    value = _require(validate("investment_amount", parse_amount(amount)), "--amount")
    print_investment_plan(investment.allocate(value, profile))


@cli.command()
@click.option("--goal", "goal", multiple=True, required=True,
              help="Goal in PURPOSE:AMOUNT:YYYY-MM-DD:PRIORITY:CATEGORY[:NOTES] format")
@click.option("--contribute", "contribute", multiple=True, help="Contribution in N:AMOUNT format (N = goal number)")
@click.option("--filter", "filter_by", type=click.Choice(GOAL_FILTERS), default="all", help="Goals to show")
@click.option("--sort", "sort_key", type=click.Choice(GOAL_SORT_KEYS), default="deadline", help="Sort order")
@click.option("--search", "search", default="", help="Match purpose or category (overrides --filter)")
@click.option("--today", "today", help="Evaluate deadlines as of this date (YYYY-MM-DD)")
def goals(
    goal: Tuple[str, ...],
    contribute: Tuple[str, ...],
    filter_by: str,
    sort_key: str,
    search: str,
    today: Optional[str],
) -> None:
    """Track goals for one session: create them, contribute and list progress."""
    try:
        as_of = parse_date(today) if today else date.today()
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--today")
    goal_kwargs = parse_goal_strings(goal)
    contributions = parse_contribution_strings(contribute, len(goal_kwargs))

    tracker = GoalTracker(clock=lambda: as_of)
    tracker.subscribe(lambda event: click.echo(event.message))
    ids = [tracker.create_goal(**kwargs).id for kwargs in goal_kwargs]
    for index, value in contributions:
        tracker.contribute(ids[index - 1], value)

    for alert in tracker.near_deadline():
        click.echo(alert.message)
    shown = filter_and_sort(tracker.goals, filter_by, sort_key, search, today=as_of)
    print_goals(shown, tracker.summary(), as_of)


if __name__ == "__main__":
    cli()
