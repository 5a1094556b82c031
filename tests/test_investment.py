from decimal import Decimal

import pytest

from fintrack.catalog import RISK_PROFILES
from fintrack.errors import ContractViolation
from fintrack.investment import allocate


def test_moderate_allocation():
    plan = allocate(Decimal("100000"), "moderate")
    amounts = {name: r.allocated_amount for name, r in plan.allocations.items()}
    assert amounts == {
        "Mutual Funds": Decimal("35000"),
        "Index Funds": Decimal("25000"),
        "Corporate Bonds": Decimal("25000"),
        "Stocks": Decimal("15000"),
    }
    assert list(amounts) == ["Mutual Funds", "Index Funds", "Corporate Bonds", "Stocks"]
    assert plan.allocations["Stocks"].instrument.risk_level == "High"


def test_projected_ranges():
    plan = allocate(Decimal("100000"), "moderate")
    assert plan.one_year.minimum == Decimal("110000")
    assert plan.one_year.maximum == Decimal("114000")
    assert plan.five_year.minimum == Decimal("161051")
    assert plan.five_year.maximum == Decimal("192541.45824")
    assert plan.one_year.min_growth_percent == 10
    assert plan.one_year.max_growth_percent == 14


def test_aggressive_range_is_wider_than_conservative():
    conservative = allocate(50000, "conservative")
    aggressive = allocate(50000, "aggressive")
    assert aggressive.five_year.maximum > conservative.five_year.maximum
    assert conservative.one_year.minimum == Decimal("53000")


@pytest.mark.parametrize("profile", sorted(RISK_PROFILES))
def test_catalog_weights_sum_to_one(profile):
    assert sum(i.weight for i in RISK_PROFILES[profile]) == 1
    plan = allocate(Decimal("25000"), profile)
    assert sum(r.allocated_amount for r in plan.allocations.values()) == Decimal("25000")


def test_unknown_profile():
    with pytest.raises(ContractViolation):
        allocate(10000, "yolo")
