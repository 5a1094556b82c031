"""Core calculation engine for loan EMIs.

This module computes the equal monthly installment (EMI) for a loan and
builds the month-by-month amortization schedule, splitting every installment
into interest and principal and tracking the remaining balance.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from .data_models import AmortizationRow, EMIResult, LoanTerms
from .errors import ContractViolation
from .utils import EFFECTIVELY_ZERO_RATE, to_decimal

logger = logging.getLogger(__name__)

# Residual balances below half a paisa are treated as fully repaid.
_RESIDUAL = Decimal("0.005")


def _calculate_annuity_payment(principal: Decimal, rate_per_month: Decimal, months: int) -> Decimal:
    """Return the equal monthly installment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the rate is zero, or below
    ``EFFECTIVELY_ZERO_RATE``, the payment simplifies to ``P / n``.
    """
    if rate_per_month < EFFECTIVELY_ZERO_RATE:
        return principal / Decimal(months)
    factor = (1 + rate_per_month) ** months
    return principal * (rate_per_month * factor) / (factor - 1)


def _check_terms(terms: LoanTerms) -> None:
    if to_decimal(terms.principal) <= 0:
        raise ContractViolation("Loan principal must be positive")
    if to_decimal(terms.annual_rate_percent) < 0:
        raise ContractViolation("Interest rate must not be negative")
    if not isinstance(terms.tenure_years, int) or terms.tenure_years <= 0:
        raise ContractViolation("Tenure must be a positive whole number of years")


def compute_emi(terms: LoanTerms) -> EMIResult:
    """Compute the EMI, totals and amortization schedule for a loan.

    Parameters
    ----------
    terms: LoanTerms
        Validated loan terms. The engine does not re-validate user ranges but
        rejects terms that cannot be amortized at all.

    Returns
    -------
    EMIResult
        ``schedule`` holds exactly ``tenure_years * 12`` rows numbered from 1.
        ``total_payment`` is ``installment * months`` and ``total_interest``
        the sum of the interest components.

    Raises
    ------
    ContractViolation
        If the principal or tenure is non-positive or the rate is negative.
    """
    _check_terms(terms)
    principal = to_decimal(terms.principal)
    rate_per_month = to_decimal(terms.annual_rate_percent) / Decimal(1200)
    months = terms.tenure_years * 12

    installment = _calculate_annuity_payment(principal, rate_per_month, months)

    schedule: List[AmortizationRow] = []
    balance = principal
    total_interest = Decimal("0")
    for month in range(1, months + 1):
        interest_payment = balance * rate_per_month
        principal_payment = installment - interest_payment
        balance -= principal_payment
        # Floor at zero to absorb drift; the installment itself is left as
        # computed.
        if balance < 0 or (month == months and balance < _RESIDUAL):
            balance = Decimal("0")
        total_interest += interest_payment
        schedule.append(
            AmortizationRow(
                month=month,
                installment=installment,
                principal_component=principal_payment,
                interest_component=interest_payment,
                remaining_balance=balance,
            )
        )

    logger.debug(
        "EMI for %s loan of %s at %s%% over %d months: %s",
        terms.category,
        principal,
        terms.annual_rate_percent,
        months,
        installment,
    )
    return EMIResult(
        installment=installment,
        total_interest=total_interest,
        total_payment=installment * months,
        schedule=schedule,
    )
