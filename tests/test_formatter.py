from decimal import Decimal

import pytest

from fintrack.amortization import compute_emi
from fintrack.data_models import LoanTerms
from fintrack.formatter import format_inr, print_emi_summary


@pytest.mark.parametrize(
    "value,expected",
    [
        (1234567, "₹12,34,567"),
        (100000, "₹1,00,000"),
        (999, "₹999"),
        (0, "₹0"),
        (-1500, "-₹1,500"),
        (Decimal("8678.5"), "₹8,679"),
        ("123456789", "₹12,34,56,789"),
    ],
)
def test_format_inr(value, expected):
    assert format_inr(value) == expected


def test_print_emi_summary(capsys):
    print_emi_summary(compute_emi(LoanTerms(Decimal("1000000"), Decimal("8.5"), 20)))
    out = capsys.readouterr().out
    assert "Monthly EMI        : ₹8,678" in out
    assert "Months             : 240" in out
