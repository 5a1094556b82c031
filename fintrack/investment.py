"""Lump-sum investment allocation.

Splits an amount across the instruments of a risk profile by their fixed
weights and projects the blended one-year and five-year value range.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Mapping, Sequence

from .catalog import RETURN_BANDS, RISK_PROFILES
from .data_models import Instrument, InvestmentPlan, InvestmentResult, ReturnBand, ReturnRange
from .errors import ContractViolation
from .utils import Number, to_decimal

logger = logging.getLogger(__name__)


def _project_range(amount: Decimal, band: ReturnBand, years: int) -> ReturnRange:
    minimum = amount * (1 + band.min_rate) ** years
    maximum = amount * (1 + band.max_rate) ** years
    return ReturnRange(
        minimum=minimum,
        maximum=maximum,
        min_growth_percent=(minimum / amount - 1) * 100,
        max_growth_percent=(maximum / amount - 1) * 100,
    )


def allocate(
    amount: Number,
    risk_profile: str,
    catalog: Mapping[str, Sequence[Instrument]] = RISK_PROFILES,
    bands: Mapping[str, ReturnBand] = RETURN_BANDS,
) -> InvestmentPlan:
    """Allocate ``amount`` across the instruments of ``risk_profile``.

    The catalog weights are assumed to sum to 1 for each profile.

    Raises
    ------
    ContractViolation
        If the profile is unknown or the amount is not positive.
    """
    instruments = catalog.get(risk_profile)
    band = bands.get(risk_profile)
    if instruments is None or band is None:
        raise ContractViolation(f"Unknown risk profile: {risk_profile}")
    total = to_decimal(amount)
    if total <= 0:
        raise ContractViolation("Investment amount must be positive")

    allocations: Dict[str, InvestmentResult] = {}
    for instrument in instruments:
        allocations[instrument.name] = InvestmentResult(
            instrument=instrument, allocated_amount=total * instrument.weight
        )
    logger.debug("Allocated %s across %d %s instruments", total, len(allocations), risk_profile)
    return InvestmentPlan(
        amount=total,
        risk_profile=risk_profile,
        allocations=allocations,
        one_year=_project_range(total, band, 1),
        five_year=_project_range(total, band, 5),
    )
