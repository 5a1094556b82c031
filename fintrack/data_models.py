"""Data models for the finance calculators.

This module defines dataclasses representing the entities the calculators
consume and produce: loan terms and their amortization schedule, SIP inputs
and projections, salary allocation buckets, investment allocations and
savings goals. Input structures are frozen; results are plain dataclasses so
renderers can inspect and serialize them easily.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Tuple

from .utils import percent_of

LOAN_CATEGORIES = ("home", "personal", "car", "education")
RISK_PROFILE_NAMES = ("conservative", "moderate", "aggressive")
GOAL_PRIORITIES = ("High", "Medium", "Low")
GOAL_FILTERS = ("all", "urgent", "high", "medium", "low")
GOAL_SORT_KEYS = ("deadline", "progress", "amount")


@dataclass(frozen=True)
class LoanTerms:
    """Validated input for one EMI calculation.

    The principal is the financed amount; the rate is the nominal annual rate
    in percent and the tenure is expressed in whole years.
    """

    principal: Decimal
    annual_rate_percent: Decimal
    tenure_years: int
    category: str = "home"  # one of LOAN_CATEGORIES


@dataclass
class AmortizationRow:
    """One month of the amortization schedule."""

    month: int
    installment: Decimal
    principal_component: Decimal
    interest_component: Decimal
    remaining_balance: Decimal


@dataclass
class EMIResult:
    """The installment, totals and month-by-month schedule for a loan."""

    installment: Decimal
    total_interest: Decimal
    total_payment: Decimal
    schedule: List[AmortizationRow]

    @property
    def months(self) -> int:
        return len(self.schedule)

    def yearly_totals(self) -> List[Tuple[int, Decimal, Decimal, Decimal]]:
        """Aggregate the schedule per loan year.

        Returns ``(year, principal_paid, interest_paid, closing_balance)``
        tuples, one per twelve rows.
        """
        totals: List[Tuple[int, Decimal, Decimal, Decimal]] = []
        for start in range(0, len(self.schedule), 12):
            rows = self.schedule[start:start + 12]
            totals.append(
                (
                    start // 12 + 1,
                    sum((r.principal_component for r in rows), Decimal("0")),
                    sum((r.interest_component for r in rows), Decimal("0")),
                    rows[-1].remaining_balance,
                )
            )
        return totals


@dataclass(frozen=True)
class SIPInput:
    monthly_contribution: Decimal
    years: Decimal


@dataclass(frozen=True)
class FundProfile:
    """A fund recommended for a risk profile.

    ``annual_return_percent`` is the expected (not guaranteed) nominal
    annual return used for projections.
    """

    name: str
    annual_return_percent: Decimal
    risk_tier: str  # Low, Low-Medium, Medium, Medium-High, High or Very High
    description: str


@dataclass
class SIPResult:
    fund: FundProfile
    total_invested: int
    total_interest: int
    total_value: int
    average_monthly_value: int


@dataclass(frozen=True)
class BucketDefinition:
    key: str
    weight: Decimal
    label: str
    description: str


@dataclass
class AllocationBucket:
    key: str
    weight: Decimal
    amount: Decimal
    label: str = ""
    description: str = ""


@dataclass(frozen=True)
class Instrument:
    """An instrument in a risk profile together with its share of the lump sum.

    ``expected_return`` is a display range such as ``"12-15%"``.
    """

    name: str
    weight: Decimal
    expected_return: str
    risk_level: str
    description: str = ""


@dataclass(frozen=True)
class ReturnBand:
    """Blended minimum and maximum annual return (fractions, e.g. 0.06)."""

    min_rate: Decimal
    max_rate: Decimal


@dataclass
class InvestmentResult:
    instrument: Instrument
    allocated_amount: Decimal


@dataclass
class ReturnRange:
    minimum: Decimal
    maximum: Decimal
    min_growth_percent: Decimal
    max_growth_percent: Decimal


@dataclass
class InvestmentPlan:
    """Instrument split of a lump sum and its projected value range."""

    amount: Decimal
    risk_profile: str
    allocations: Dict[str, InvestmentResult]
    one_year: ReturnRange
    five_year: ReturnRange


@dataclass
class Goal:
    """A savings goal.

    ``current_amount`` only grows through contributions and never exceeds
    ``target_amount``; ``progress_percent`` is derived from the two.
    """

    id: str
    target_amount: Decimal
    purpose: str
    deadline: date
    priority: str  # one of GOAL_PRIORITIES
    category: str
    current_amount: Decimal = Decimal("0")
    start_date: date = field(default_factory=date.today)
    notes: str = ""

    @property
    def progress_percent(self) -> Decimal:
        return percent_of(self.current_amount, self.target_amount)

    @property
    def is_completed(self) -> bool:
        return self.current_amount >= self.target_amount


@dataclass(frozen=True)
class GoalEvent:
    kind: str  # "goal_completed" or "goal_halfway"
    goal_id: str
    message: str


@dataclass(frozen=True)
class DeadlineAlert:
    goal: Goal
    days_remaining: int
    message: str


@dataclass(frozen=True)
class GoalSummary:
    total_saved: Decimal
    total_target: Decimal
    overall_progress: Decimal
