"""Output helpers for the finance calculators.

This module renders calculator results as simple text tables. Amounts are
shown in rupees with Indian digit grouping (``₹12,34,567``) and no decimal
places, matching how the calculators present money elsewhere.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Sequence

from .data_models import AllocationBucket, AmortizationRow, EMIResult, Goal, GoalSummary, InvestmentPlan, SIPResult
from .goals import classify
from .utils import Number, days_until, round_half_up, to_decimal


def format_inr(value: Number) -> str:
    """Format an amount as rupees with lakh/crore grouping and no decimals."""
    rounded = round_half_up(to_decimal(value))
    sign = "-" if rounded < 0 else ""
    digits = str(abs(rounded))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups: List[str] = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"{sign}₹{digits}"


def print_allocation(income: Number, buckets: Iterable[AllocationBucket]) -> None:
    print("Salary allocation")
    print("-" * 72)
    print(f"Monthly income     : {format_inr(income)}")
    for bucket in buckets:
        share = f"{bucket.weight * 100:.0f}%"
        print(f"{bucket.label:18s} : {format_inr(bucket.amount):>14s}  {share:>4s}  {bucket.description}")
    print("-" * 72)


def print_emi_summary(result: EMIResult) -> None:
    """Print the installment and loan totals."""
    print("Summary")
    print("-" * 72)
    print(f"Monthly EMI        : {format_inr(result.installment)}")
    print(f"Total interest     : {format_inr(result.total_interest)}")
    print(f"Total payment      : {format_inr(result.total_payment)}")
    print(f"Months             : {result.months}")
    print("-" * 72)


def print_schedule(schedule: Iterable[AmortizationRow]) -> None:
    """Print the amortization schedule as a tab-separated table."""
    headers = ["Month", "EMI", "Principal", "Interest", "Balance"]
    print("\t".join(headers))
    for row in schedule:
        print(
            "\t".join(
                [
                    str(row.month),
                    f"{row.installment:.2f}",
                    f"{row.principal_component:.2f}",
                    f"{row.interest_component:.2f}",
                    f"{row.remaining_balance:.2f}",
                ]
            )
        )


def print_yearly_schedule(result: EMIResult) -> None:
    print("\t".join(["Year", "Principal", "Interest", "Balance"]))
    for year, principal, interest, balance in result.yearly_totals():
        print(f"{year}\t{principal:.2f}\t{interest:.2f}\t{balance:.2f}")


def print_sip_results(results: Sequence[SIPResult]) -> None:
    print("SIP projection")
    print("=" * 72)
    for result in results:
        fund = result.fund
        print(f"{fund.name} ({fund.annual_return_percent}% expected, {fund.risk_tier} risk)")
        print(f"  {fund.description}")
        print(f"  Total invested     : {format_inr(result.total_invested)}")
        print(f"  Estimated returns  : {format_inr(result.total_interest)}")
        print(f"  Total value        : {format_inr(result.total_value)}")
        print(f"  Avg. monthly value : {format_inr(result.average_monthly_value)}")
    print("=" * 72)


def print_investment_plan(plan: InvestmentPlan) -> None:
    print(f"Investment plan ({plan.risk_profile.capitalize()} Risk)")
    print("-" * 72)
    for name, result in plan.allocations.items():
        instrument = result.instrument
        print(
            f"{name:20s} {format_inr(result.allocated_amount):>14s}  "
            f"{instrument.expected_return:>7s}  {instrument.risk_level}"
        )
    print("-" * 72)
    for label, projection in (("1 year", plan.one_year), ("5 years", plan.five_year)):
        print(
            f"{label:8s}: {format_inr(projection.minimum)} - {format_inr(projection.maximum)} "
            f"(growth {projection.min_growth_percent:.1f}% - {projection.max_growth_percent:.1f}%)"
        )
    print("Projections are based on historical assumptions. Actual returns may vary.")


def print_goals(goals: Iterable[Goal], summary: GoalSummary, today: date) -> None:
    print(
        f"Total saved: {format_inr(summary.total_saved)}  "
        f"Progress: {summary.overall_progress:.1f}%"
    )
    print("-" * 72)
    for goal in goals:
        days = days_until(goal.deadline, today)
        print(
            f"{goal.purpose} [{goal.category}, {goal.priority} Priority] "
            f"{days} days left - {classify(goal, today)}"
        )
        print(
            f"  Progress: {goal.progress_percent:.1f}%  "
            f"{format_inr(goal.current_amount)} / {format_inr(goal.target_amount)}"
        )
        if goal.notes:
            print(f"  Notes: {goal.notes}")
    print("-" * 72)
