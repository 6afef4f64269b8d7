"""Weekly spending heatmap: weekday x category"""

from decimal import Decimal
from typing import List, Optional, Sequence

from finance_analytics.domain.aggregation import category_key
from finance_analytics.domain.attribution import ZERO, installment_value
from finance_analytics.domain.models import EXPENSE, ReportingPeriod, Transaction, WeeklyHeatmap
from finance_analytics.utils.date_utils import sunday_first_weekday

WEEKDAY_LABELS = ["Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado"]


def build_weekly_heatmap(
    transactions: Sequence[Transaction],
    period: Optional[ReportingPeriod] = None,
) -> WeeklyHeatmap:
    """
    Spend per weekday (row 0 = Sunday) and category (sorted columns).

    Transactions are included strictly by their own day falling in the period;
    installment projection never pulls a purchase in. An installment purchase
    counts with the amount of one installment.
    """
    expenses = [
        txn
        for txn in transactions
        if txn.type == EXPENSE and (period is None or period.contains(txn.day))
    ]

    categories = sorted({category_key(txn) for txn in expenses})
    column = {name: index for index, name in enumerate(categories)}
    data: List[List[Decimal]] = [[ZERO] * len(categories) for _ in WEEKDAY_LABELS]

    for txn in expenses:
        data[sunday_first_weekday(txn.day)][column[category_key(txn)]] += installment_value(txn)

    return WeeklyHeatmap(categories=categories, days=list(WEEKDAY_LABELS), data=data)
