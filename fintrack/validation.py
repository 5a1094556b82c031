"""Input validation for the calculators.

Every calculator guards its raw inputs here before an engine is called.
``validate`` never raises for bad user input: it returns either a ``Valid``
wrapper around the typed value or a ``Rejection`` carrying the message the
user should see. Unknown input kinds are programmer errors and raise
``ContractViolation``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple, Union

from .data_models import (
    GOAL_FILTERS,
    GOAL_PRIORITIES,
    GOAL_SORT_KEYS,
    LOAN_CATEGORIES,
    RISK_PROFILE_NAMES,
    LoanTerms,
    SIPInput,
)
from .errors import (
    INVALID_CHOICE,
    INVALID_DATE,
    NOT_A_NUMBER,
    OUT_OF_RANGE,
    REQUIRED,
    ContractViolation,
    Rejection,
)
from .utils import parse_date, to_decimal


@dataclass(frozen=True)
class Valid:
    kind: str
    value: Any


@dataclass(frozen=True)
class _Rule:
    # ``invalid`` is shown for non-numeric input and for values failing the
    # lower bound unless ``low_message`` is set.
    invalid: str
    low: Optional[Decimal] = None
    low_inclusive: bool = False
    high: Optional[Decimal] = None
    high_message: Optional[str] = None
    low_message: Optional[str] = None
    integer: bool = False


_RULES: Dict[str, _Rule] = {
    "salary": _Rule(
        invalid="Please enter a valid salary amount greater than 0",
        low=Decimal("0"),
        high=Decimal("10000000"),
        high_message="Amount seems unusually high. Please verify.",
    ),
    "sip_amount": _Rule(
        invalid="Please enter a valid monthly investment amount",
        low=Decimal("0"),
        high=Decimal("1000000"),
        high_message="Monthly investment seems unusually high. Please verify.",
    ),
    "sip_years": _Rule(
        invalid="Please enter a valid investment duration",
        low=Decimal("0"),
        high=Decimal("30"),
        high_message="Maximum investment duration is 30 years",
    ),
    "loan_amount": _Rule(
        invalid="Please enter a valid loan amount",
        low=Decimal("0"),
    ),
    "interest_rate": _Rule(
        invalid="Please enter a valid interest rate between 0 and 30",
        low=Decimal("0"),
        high=Decimal("30"),
    ),
    "tenure": _Rule(
        invalid="Please enter a valid loan tenure between 0 and 30 years",
        low=Decimal("0"),
        high=Decimal("30"),
        integer=True,
    ),
    "investment_amount": _Rule(
        invalid="Please enter a valid number",
        low=Decimal("1000"),
        low_inclusive=True,
        low_message="Minimum investment amount is ₹1,000",
        high=Decimal("10000000"),
        high_message="For investments above ₹1 Crore, please contact our advisors",
    ),
    "goal_amount": _Rule(
        invalid="Please enter a valid goal amount greater than 0",
        low=Decimal("0"),
    ),
    "contribution": _Rule(
        invalid="Please enter a valid contribution amount",
        low=Decimal("0"),
        low_inclusive=True,
    ),
}

_CHOICES: Dict[str, Tuple[str, ...]] = {
    "loan_category": LOAN_CATEGORIES,
    "risk_profile": RISK_PROFILE_NAMES,
    "goal_priority": GOAL_PRIORITIES,
    "goal_filter": GOAL_FILTERS,
    "goal_sort": GOAL_SORT_KEYS,
}


def validate(kind: str, raw: Any) -> Union[Valid, Rejection]:
    """Bounds-check a raw numeric input for the given calculator field.

    Parameters
    ----------
    kind: str
        One of ``salary``, ``sip_amount``, ``sip_years``, ``loan_amount``,
        ``interest_rate``, ``tenure``, ``investment_amount``,
        ``goal_amount`` or ``contribution``.
    raw: Any
        The value as received from the user: a string, int, float or
        ``Decimal``.

    Returns
    -------
    Valid or Rejection
        ``Valid.value`` is a ``Decimal`` (an ``int`` for ``tenure``).
    """
    rule = _RULES.get(kind)
    if rule is None:
        raise ContractViolation(f"Unknown input kind: {kind}")
    try:
        value = to_decimal(raw)
    except ValueError:
        return Rejection(kind, NOT_A_NUMBER, rule.invalid)

    if rule.low is not None:
        too_low = value < rule.low if rule.low_inclusive else value <= rule.low
        if too_low:
            return Rejection(kind, OUT_OF_RANGE, rule.low_message or rule.invalid)
    if rule.high is not None and value > rule.high:
        return Rejection(kind, OUT_OF_RANGE, rule.high_message or rule.invalid)
    if rule.integer:
        if value != value.to_integral_value():
            return Rejection(kind, OUT_OF_RANGE, rule.invalid)
        return Valid(kind, int(value))
    return Valid(kind, value)


def validate_choice(kind: str, raw: Any) -> Union[Valid, Rejection]:
    """Match an enumerated input case-insensitively against its allowed values.

    The canonical spelling is returned, so ``"high"`` validated as a
    ``goal_priority`` yields ``"High"``.
    """
    choices = _CHOICES.get(kind)
    if choices is None:
        raise ContractViolation(f"Unknown choice kind: {kind}")
    text = str(raw or "").strip().lower()
    for choice in choices:
        if choice.lower() == text:
            return Valid(kind, choice)
    return Rejection(kind, INVALID_CHOICE, f"Please choose one of: {', '.join(choices)}")


def loan_terms_from_input(
    amount: Any, rate: Any, tenure: Any, category: Any = "home"
) -> Union[LoanTerms, Rejection]:
    """Validate the loan form and build ``LoanTerms``, or return the first rejection."""
    checks = (
        validate("loan_amount", amount),
        validate("interest_rate", rate),
        validate("tenure", tenure),
        validate_choice("loan_category", category),
    )
    for check in checks:
        if isinstance(check, Rejection):
            return check
    principal, annual_rate, years, loan_category = (c.value for c in checks)
    return LoanTerms(
        principal=principal,
        annual_rate_percent=annual_rate,
        tenure_years=years,
        category=loan_category,
    )


def sip_input_from_input(amount: Any, years: Any) -> Union[SIPInput, Rejection]:
    """Validate the SIP form and build ``SIPInput``, or return the first rejection."""
    checked_amount = validate("sip_amount", amount)
    if isinstance(checked_amount, Rejection):
        return checked_amount
    checked_years = validate("sip_years", years)
    if isinstance(checked_years, Rejection):
        return checked_years
    return SIPInput(monthly_contribution=checked_amount.value, years=checked_years.value)


def validate_text(kind: str, raw: Any) -> Union[Valid, Rejection]:
    """Require a non-blank string; the stripped text is returned."""
    text = str(raw or "").strip()
    if not text:
        return Rejection(kind, REQUIRED, f"Please enter a {kind.replace('_', ' ')}")
    return Valid(kind, text)


def validate_date(kind: str, raw: Any) -> Union[Valid, Rejection]:
    try:
        return Valid(kind, parse_date(raw))
    except (TypeError, ValueError):
        return Rejection(kind, INVALID_DATE, "Please enter a valid date (YYYY-MM-DD)")


def goal_fields_from_input(
    amount: Any, purpose: Any, deadline: Any, priority: Any, category: Any
) -> Union[Dict[str, Any], Rejection]:
    """Validate the new-goal form.

    Returns keyword arguments for ``GoalTracker.create_goal`` (without
    ``notes``), or the first rejection.
    """
    checks = {
        "target_amount": validate("goal_amount", amount),
        "purpose": validate_text("purpose", purpose),
        "deadline": validate_date("deadline", deadline),
        "priority": validate_choice("goal_priority", priority),
        "category": validate_text("category", category),
    }
    for check in checks.values():
        if isinstance(check, Rejection):
            return check
    return {name: check.value for name, check in checks.items()}
