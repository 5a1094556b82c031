"""SIP (systematic investment plan) projection.

Projects the future value of a fixed monthly contribution for every fund the
chosen risk profile recommends. Contributions are made at the start of each
month, so each one compounds for the month it is made in (annuity-due).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Mapping, Sequence

from .catalog import FUND_CATALOG
from .data_models import FundProfile, SIPInput, SIPResult
from .errors import ContractViolation
from .utils import EFFECTIVELY_ZERO_RATE, Number, round_half_up, to_decimal

logger = logging.getLogger(__name__)


def future_value(monthly_contribution: Number, annual_return_percent: Number, months: Number) -> Decimal:
    """Return the annuity-due future value of a recurring monthly contribution.

        FV = C * ((1 + r)^n - 1) / r * (1 + r)

    where ``r`` is the monthly rate. A zero rate, or one below
    ``EFFECTIVELY_ZERO_RATE``, reduces to ``C * n``.
    """
    contribution = to_decimal(monthly_contribution)
    n = to_decimal(months)
    rate = to_decimal(annual_return_percent) / Decimal(1200)
    if abs(rate) < EFFECTIVELY_ZERO_RATE:
        return contribution * n
    growth = (1 + rate) ** n
    return contribution * (growth - 1) / rate * (1 + rate)


def _project_fund(sip_input: SIPInput, fund: FundProfile) -> SIPResult:
    contribution = to_decimal(sip_input.monthly_contribution)
    total_months = to_decimal(sip_input.years) * 12
    invested = contribution * total_months
    value = future_value(contribution, fund.annual_return_percent, total_months)

    total_value = round_half_up(value)
    return SIPResult(
        fund=fund,
        total_invested=round_half_up(invested),
        total_interest=round_half_up(total_value - invested),
        total_value=total_value,
        average_monthly_value=round_half_up(total_value / total_months),
    )


def project(
    sip_input: SIPInput,
    risk_profile: str,
    catalog: Mapping[str, Sequence[FundProfile]] = FUND_CATALOG,
) -> List[SIPResult]:
    """Project a SIP for each fund listed under ``risk_profile`` in ``catalog``.

    Results keep the catalog order.

    Raises
    ------
    ContractViolation
        If the profile is unknown or the input is non-positive.
    """
    funds = catalog.get(risk_profile)
    if funds is None:
        raise ContractViolation(f"Unknown risk profile: {risk_profile}")
    if to_decimal(sip_input.monthly_contribution) <= 0 or to_decimal(sip_input.years) <= 0:
        raise ContractViolation("SIP contribution and duration must be positive")
    results = [_project_fund(sip_input, fund) for fund in funds]
    logger.debug("Projected SIP %s for %d %s funds", sip_input, len(results), risk_profile)
    return results
