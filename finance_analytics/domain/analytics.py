"""Analytics entry point - runs every dashboard aggregator over one transaction set"""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from finance_analytics.domain.aggregation import by_category, monthly_series, recent_transactions, summarize
from finance_analytics.domain.heatmap import build_weekly_heatmap
from finance_analytics.domain.models import (
    AnalyticsResult,
    ExternalCategoryTotal,
    InvoiceMonthTotal,
    ReportingPeriod,
    Transaction,
)
from finance_analytics.domain.money_flow import build_money_flow


def analyze(
    transactions: Sequence[Transaction],
    period: Optional[ReportingPeriod] = None,
    external_invoice_total: Optional[Decimal] = None,
    external_category_breakdown: Optional[Sequence[ExternalCategoryTotal]] = None,
    external_invoice_by_month: Optional[Sequence[InvoiceMonthTotal]] = None,
    now: Optional[date] = None,
) -> AnalyticsResult:
    """
    Main entry point: compute every dashboard aggregate.

    The full transaction list goes to each aggregator unfiltered; each applies the
    period itself, so installments straddling the period boundary are attributed
    correctly.
    """
    return AnalyticsResult(
        summary=summarize(transactions, period, external_invoice_total),
        monthly=monthly_series(transactions, external_invoice_by_month, now=now),
        categories=by_category(transactions, period, external_category_breakdown),
        money_flow=build_money_flow(transactions),
        heatmap=build_weekly_heatmap(transactions, period),
        recent=recent_transactions(transactions),
    )
