"""Value attribution - how much of a transaction lands in a reporting period"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from finance_analytics.domain.models import INSTALLMENT, ReportingPeriod, Transaction
from finance_analytics.utils.date_utils import add_months, month_end, month_start

ZERO = Decimal("0")


def is_installment_purchase(transaction: Transaction) -> bool:
    """Card purchase split into more than one monthly charge"""
    info = transaction.installment
    return info is not None and info.modality == INSTALLMENT and info.installments_count > 1


def is_credit_card(transaction: Transaction) -> bool:
    return transaction.installment is not None and transaction.installment.is_credit_card


def purchase_day(transaction: Transaction) -> date:
    """Purchase date of the charge, or the transaction date when the charge has none"""
    info = transaction.installment
    if info is not None and info.purchase_date is not None:
        return info.purchase_date.date()
    return transaction.day


def installment_value(transaction: Transaction) -> Decimal:
    """
    Amount of a single installment: total_amount / N.

    Falls back to the face value when total_amount is missing; for non-installment
    transactions this is simply the face value.
    """
    if not is_installment_purchase(transaction):
        return transaction.value
    info = transaction.installment
    total = info.total_amount if info.total_amount is not None else transaction.value
    return total / info.installments_count


def installment_due_months(transaction: Transaction) -> List[date]:
    """Month starts when installments 1..N are due (purchase month + i)"""
    base = month_start(purchase_day(transaction))
    count = transaction.installment.installments_count
    return [add_months(base, i) for i in range(1, count + 1)]


def _in_projected_invoice_window(transaction: Transaction, period: ReportingPeriod) -> bool:
    """Card purchase that may settle on the invoice one or two months later"""
    base = month_start(purchase_day(transaction))
    return any(period.contains_month(add_months(base, offset)) for offset in (1, 2))


def resolve_value(
    transaction: Transaction,
    period: Optional[ReportingPeriod] = None,
    include_projected_invoice_window: bool = False,
) -> Decimal:
    """
    Value a transaction contributes to `period`.

    - Cash-like transactions contribute their face value when their calendar day is
      inside the period (or always, with no period).
    - Installment purchases contribute total/N for every due month overlapping the
      period. With no period the raw face value is returned.

    include_projected_invoice_window additionally accepts card purchases whose
    purchase month +1 or +2 is inside the period's months. Only the category
    breakdown passes it; summary and monthly totals must not.
    """
    if not is_installment_purchase(transaction):
        if period is None or period.contains(transaction.day):
            return transaction.value
        if include_projected_invoice_window and is_credit_card(transaction):
            if _in_projected_invoice_window(transaction, period):
                return transaction.value
        return ZERO

    if period is None:
        return transaction.value

    per_installment = installment_value(transaction)
    total = ZERO
    for due in installment_due_months(transaction):
        if period.overlaps(due, month_end(due)):
            total += per_installment
    return total
