"""Static catalogs used by the calculators.

These tables are process-wide, read-only configuration. They are exposed as
tuples and ``MappingProxyType`` views so that no caller can mutate them; the
SIP projector and investment allocator take them as injectable arguments with
these values as defaults.
"""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Tuple

from .data_models import BucketDefinition, FundProfile, Instrument, ReturnBand

ALLOCATION_BUCKETS: Tuple[BucketDefinition, ...] = (
    BucketDefinition("needs", Decimal("0.40"), "Needs", "Essential expenses like rent, utilities, and groceries"),
    BucketDefinition("wants", Decimal("0.20"), "Wants", "Non-essential items and entertainment"),
    BucketDefinition("savings", Decimal("0.20"), "Savings", "Emergency fund and future goals"),
    BucketDefinition("investments", Decimal("0.10"), "Investments", "Long-term wealth building"),
    BucketDefinition("credit_emi", Decimal("0.10"), "Credit/EMI", "Loan payments and credit cards"),
)

FUND_CATALOG: Mapping[str, Tuple[FundProfile, ...]] = MappingProxyType(
    {
        "conservative": (
            FundProfile("Debt Fund", Decimal("6.5"), "Low",
                        "Suitable for capital preservation and stable returns"),
            FundProfile("Balanced Advantage Fund", Decimal("8.0"), "Low-Medium",
                        "Dynamic allocation between equity and debt"),
        ),
        "moderate": (
            FundProfile("Hybrid Equity Fund", Decimal("10.0"), "Medium",
                        "Balanced mix of equity and debt investments"),
            FundProfile("Large Cap Fund", Decimal("12.0"), "Medium-High",
                        "Investment in established large companies"),
        ),
        "aggressive": (
            FundProfile("Mid Cap Fund", Decimal("14.0"), "High",
                        "Focus on growing medium-sized companies"),
            FundProfile("Small Cap Fund", Decimal("16.0"), "Very High",
                        "Investment in smaller emerging companies"),
        ),
    }
)

# Weights within each profile sum to 1.
RISK_PROFILES: Mapping[str, Tuple[Instrument, ...]] = MappingProxyType(
    {
        "conservative": (
            Instrument("Fixed Deposits", Decimal("0.4"), "6-7%", "Low", "Low-risk, stable returns"),
            Instrument("Government Bonds", Decimal("0.3"), "7-8%", "Low", "Safe, backed by government"),
            Instrument("Blue Chip Stocks", Decimal("0.2"), "10-12%", "Medium", "Stable, large-cap companies"),
            Instrument("Gold", Decimal("0.1"), "8-10%", "Medium", "Hedge against inflation"),
        ),
        "moderate": (
            Instrument("Mutual Funds", Decimal("0.35"), "12-15%", "Medium",
                       "Diversified portfolio managed by experts"),
            Instrument("Index Funds", Decimal("0.25"), "10-12%", "Medium",
                       "Low-cost way to track market performance"),
            Instrument("Corporate Bonds", Decimal("0.25"), "8-10%", "Medium",
                       "Higher yields than government bonds"),
            Instrument("Stocks", Decimal("0.15"), "15-18%", "High", "Potential for higher returns"),
        ),
        "aggressive": (
            Instrument("Stocks", Decimal("0.45"), "15-20%", "High", "High growth potential"),
            Instrument("International Funds", Decimal("0.25"), "12-15%", "High", "Exposure to global markets"),
            Instrument("Small Cap Funds", Decimal("0.20"), "18-22%", "Very High",
                       "Higher risk, higher reward potential"),
            Instrument("Crypto", Decimal("0.10"), "20-30%", "Very High",
                       "Highly volatile, potential for significant returns"),
        ),
    }
)

RETURN_BANDS: Mapping[str, ReturnBand] = MappingProxyType(
    {
        "conservative": ReturnBand(Decimal("0.06"), Decimal("0.08")),
        "moderate": ReturnBand(Decimal("0.10"), Decimal("0.14")),
        "aggressive": ReturnBand(Decimal("0.14"), Decimal("0.20")),
    }
)

GOAL_CATEGORIES: Tuple[str, ...] = (
    "Savings",
    "Investment",
    "Education",
    "Travel",
    "Home",
    "Emergency Fund",
    "Other",
)
