from decimal import Decimal

import pytest

from fintrack.allocation import split
from fintrack.errors import ContractViolation


def test_example_income():
    buckets = split(100000)
    amounts = {b.key: b.amount for b in buckets}
    assert amounts == {
        "needs": Decimal("40000"),
        "wants": Decimal("20000"),
        "savings": Decimal("20000"),
        "investments": Decimal("10000"),
        "credit_emi": Decimal("10000"),
    }


def test_bucket_order_and_weights():
    buckets = split("55000")
    assert [b.key for b in buckets] == ["needs", "wants", "savings", "investments", "credit_emi"]
    assert [b.weight for b in buckets] == [Decimal("0.4"), Decimal("0.2"), Decimal("0.2"), Decimal("0.1"), Decimal("0.1")]
    assert buckets[-1].label == "Credit/EMI"


@pytest.mark.parametrize("income", ["1", "33333.33", "87654.321", "10000000"])
def test_amounts_sum_to_income(income):
    assert sum(b.amount for b in split(income)) == Decimal(income)


def test_non_positive_income():
    with pytest.raises(ContractViolation):
        split(0)
