"""Dashboard aggregators - summary, monthly series, category breakdown, recent activity"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from finance_analytics.config import settings
from finance_analytics.domain.attribution import (
    ZERO,
    installment_due_months,
    installment_value,
    is_credit_card,
    is_installment_purchase,
    resolve_value,
)
from finance_analytics.domain.colors import assign_colors
from finance_analytics.domain.models import (
    EXPENSE,
    INCOME,
    CategoryTotal,
    ExternalCategoryTotal,
    FinancialSummary,
    InvoiceMonthTotal,
    MonthlyBucket,
    RecentTransaction,
    ReportingPeriod,
    Transaction,
)
from finance_analytics.utils.date_utils import month_key, month_label, trailing_month_starts

CATEGORY_TAG_TYPE = "categoria"


def category_key(transaction: Transaction) -> str:
    """Legacy category field, then the first "categoria" tag, then the default bucket"""
    if transaction.category:
        return transaction.category
    for tag in transaction.tags:
        if tag.type == CATEGORY_TAG_TYPE:
            return tag.name
    return settings.default_category


def summarize(
    transactions: Sequence[Transaction],
    period: Optional[ReportingPeriod] = None,
    external_invoice_total: Optional[Decimal] = None,
) -> FinancialSummary:
    """
    Income, expenses and balance for the period.

    Income is counted on its own day. Expenses are amortization-aware; an external
    invoice total is added on top, never recomputed from card transactions.
    """
    income = ZERO
    expenses = ZERO

    for txn in transactions:
        if txn.type == INCOME:
            if period is None or period.contains(txn.day):
                income += txn.value
        elif txn.type == EXPENSE:
            expenses += resolve_value(txn, period)

    if external_invoice_total is not None and external_invoice_total > 0:
        expenses += external_invoice_total

    return FinancialSummary(balance=income - expenses, income=income, expenses=expenses)


def monthly_series(
    transactions: Sequence[Transaction],
    external_invoice_by_month: Optional[Sequence[InvoiceMonthTotal]] = None,
    now: Optional[date] = None,
    months: Optional[int] = None,
) -> List[MonthlyBucket]:
    """
    Income/expenses for the trailing window of calendar months ending at `now`.

    The window ignores any reporting period. Installment purchases spread total/N
    over their due months; installments falling outside the window are dropped.
    """
    now = now or date.today()
    months = months or settings.trailing_months

    buckets: Dict[str, MonthlyBucket] = {}
    for start in trailing_month_starts(now, months):
        key = month_key(start)
        buckets[key] = MonthlyBucket(month_key=key, label=month_label(start), income=ZERO, expenses=ZERO)

    for txn in transactions:
        if txn.type == INCOME:
            bucket = buckets.get(month_key(txn.day))
            if bucket is not None:
                bucket.income += txn.value
        elif txn.type == EXPENSE:
            if is_installment_purchase(txn):
                per_installment = installment_value(txn)
                for due in installment_due_months(txn):
                    bucket = buckets.get(month_key(due))
                    if bucket is not None:
                        bucket.expenses += per_installment
            else:
                bucket = buckets.get(month_key(txn.day))
                if bucket is not None:
                    bucket.expenses += txn.value

    for invoice in external_invoice_by_month or []:
        bucket = buckets.get(f"{invoice.year:04d}-{invoice.month:02d}")
        if bucket is not None:
            bucket.expenses += invoice.total

    return list(buckets.values())


def by_category(
    transactions: Sequence[Transaction],
    period: Optional[ReportingPeriod] = None,
    external_category_breakdown: Optional[Sequence[ExternalCategoryTotal]] = None,
) -> List[CategoryTotal]:
    """
    Expense totals per category, largest first, with distinct colors.

    When the billing service supplies a per-category breakdown, card transactions
    are skipped entirely and the breakdown is merged in instead.
    """
    external = list(external_category_breakdown or [])
    skip_card_transactions = bool(external)

    totals: Dict[str, Decimal] = {}
    for txn in transactions:
        if txn.type != EXPENSE:
            continue
        if skip_card_transactions and is_credit_card(txn):
            continue
        value = resolve_value(txn, period, include_projected_invoice_window=True)
        key = category_key(txn)
        totals[key] = totals.get(key, ZERO) + value

    for entry in external:
        key = entry.name or settings.uncategorized_label
        totals[key] = totals.get(key, ZERO) + entry.amount

    kept = {name: amount for name, amount in totals.items() if amount > 0}
    colors = assign_colors(kept.keys())

    result = [CategoryTotal(name=name, amount=amount, color=colors[name]) for name, amount in kept.items()]
    result.sort(key=lambda c: (-c.amount, c.name))
    return result


def _utc_instant(moment: datetime) -> datetime:
    """Naive UTC instant for ordering; naive inputs are taken as UTC already"""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def recent_transactions(transactions: Sequence[Transaction], limit: Optional[int] = None) -> List[RecentTransaction]:
    """Newest transactions first, with expenses shown as negative amounts"""
    limit = settings.recent_transactions_limit if limit is None else limit
    newest = sorted(transactions, key=lambda t: _utc_instant(t.date), reverse=True)[:limit]

    return [
        RecentTransaction(
            id=txn.id,
            description=txn.description,
            amount=txn.value if txn.type == INCOME else -txn.value,
            category=category_key(txn),
            date=txn.date,
            type=txn.type,
        )
        for txn in newest
    ]
