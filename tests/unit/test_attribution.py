"""Unit tests for value attribution"""

from datetime import date
from decimal import Decimal

from finance_analytics.domain.attribution import (
    installment_due_months,
    installment_value,
    is_installment_purchase,
    resolve_value,
)
from finance_analytics.domain.models import ReportingPeriod
from tests.conftest import make_card_charge, make_txn

MARCH = ReportingPeriod(date(2025, 3, 1), date(2025, 3, 31))
APRIL = ReportingPeriod(date(2025, 4, 1), date(2025, 4, 30))


def test_cash_transaction_face_value_without_period():
    """Test no period means face value"""
    txn = make_txn(value="250.75", day=date(2024, 1, 10))
    assert resolve_value(txn) == Decimal("250.75")


def test_cash_transaction_period_is_day_level_and_inclusive():
    """Test boundary days count, others contribute zero"""
    first_day = make_txn(value="10", day=date(2025, 3, 1))
    last_day = make_txn(value="20", day=date(2025, 3, 31))
    outside = make_txn(value="30", day=date(2025, 4, 1))

    assert resolve_value(first_day, MARCH) == Decimal("10")
    assert resolve_value(last_day, MARCH) == Decimal("20")
    assert resolve_value(outside, MARCH) == Decimal("0")


def test_installment_due_months_start_after_purchase_month():
    """Test installment i is due in purchase month + i"""
    txn = make_txn(installment=make_card_charge(count=3, purchase=date(2024, 11, 20)))

    assert installment_due_months(txn) == [date(2024, 12, 1), date(2025, 1, 1), date(2025, 2, 1)]


def test_installment_amortized_into_single_month():
    """Test 1200 in 3 installments bought in March shows 400 in April only"""
    txn = make_txn(value="1200", installment=make_card_charge(count=3, total="1200", purchase=date(2025, 3, 1)))

    assert resolve_value(txn, APRIL) == Decimal("400")
    assert resolve_value(txn, MARCH) == Decimal("0")  # First installment is due next month
    assert resolve_value(txn, ReportingPeriod(date(2025, 4, 1), date(2025, 6, 30))) == Decimal("1200")
    assert resolve_value(txn, ReportingPeriod(date(2025, 7, 1), date(2025, 12, 31))) == Decimal("0")


def test_installment_without_period_returns_raw_value():
    """Test whole-lifetime view keeps the face value"""
    txn = make_txn(value="1200", installment=make_card_charge(count=3, total="1200"))
    assert resolve_value(txn) == Decimal("1200")


def test_installment_period_inside_a_month_still_overlaps():
    """Test a mid-month window picks up that month's installment"""
    txn = make_txn(installment=make_card_charge(count=3, total="1200", purchase=date(2025, 3, 1)))
    mid_april = ReportingPeriod(date(2025, 4, 10), date(2025, 4, 20))

    assert resolve_value(txn, mid_april) == Decimal("400")


def test_installment_uses_purchase_date_not_transaction_date():
    """Test due months are counted from the charge's purchase date"""
    txn = make_txn(
        day=date(2025, 5, 10),
        installment=make_card_charge(count=3, total="1200", purchase=date(2025, 3, 1)),
    )
    assert resolve_value(txn, APRIL) == Decimal("400")


def test_installment_amortization_conserves_total():
    """Test summing disjoint monthly windows gives back the total"""
    txn = make_txn(value="1000", installment=make_card_charge(count=3, total="1000", purchase=date(2025, 1, 15)))
    months = [
        ReportingPeriod(date(2025, 2, 1), date(2025, 2, 28)),
        ReportingPeriod(date(2025, 3, 1), date(2025, 3, 31)),
        ReportingPeriod(date(2025, 4, 1), date(2025, 4, 30)),
    ]

    total = sum((resolve_value(txn, period) for period in months), Decimal("0"))

    assert abs(total - Decimal("1000")) < Decimal("0.000001")


def test_missing_total_amount_falls_back_to_face_value():
    """Test per-installment amount is value / N when total_amount is absent"""
    txn = make_txn(value="900", installment=make_card_charge(count=3, total=None))

    assert installment_value(txn) == Decimal("300")
    assert resolve_value(txn, APRIL) == Decimal("300")


def test_single_installment_is_treated_as_cash():
    """Test installment modality with N = 1 is not amortized"""
    txn = make_txn(value="80", day=date(2025, 3, 20), installment=make_card_charge(count=1, total="80"))

    assert is_installment_purchase(txn) is False
    assert resolve_value(txn, MARCH) == Decimal("80")
    assert resolve_value(txn, APRIL) == Decimal("0")


def test_projected_invoice_window_only_when_requested():
    """Test card purchase may land on the next two months' invoices"""
    txn = make_txn(
        value="100",
        day=date(2025, 1, 20),
        payment_method="credit_card",
        installment=make_card_charge(modality="cash", count=1, total="100", purchase=date(2025, 1, 20)),
    )
    february = ReportingPeriod(date(2025, 2, 1), date(2025, 2, 28))

    assert resolve_value(txn, february) == Decimal("0")
    assert resolve_value(txn, february, include_projected_invoice_window=True) == Decimal("100")
    assert resolve_value(txn, MARCH, include_projected_invoice_window=True) == Decimal("100")
    assert resolve_value(txn, APRIL, include_projected_invoice_window=True) == Decimal("0")


def test_projected_invoice_window_ignores_non_card_transactions():
    """Test the relaxed window never applies to Pix/cash spend"""
    txn = make_txn(value="100", day=date(2025, 1, 20))
    february = ReportingPeriod(date(2025, 2, 1), date(2025, 2, 28))

    assert resolve_value(txn, february, include_projected_invoice_window=True) == Decimal("0")
