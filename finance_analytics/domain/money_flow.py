"""Money-flow graph: income sources feeding expense categories proportionally"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Sequence

from finance_analytics.config import settings
from finance_analytics.domain.aggregation import category_key
from finance_analytics.domain.attribution import ZERO
from finance_analytics.domain.models import (
    EXPENSE,
    INCOME,
    MoneyFlowGraph,
    MoneyFlowLink,
    MoneyFlowNode,
    Transaction,
)

CENTS = Decimal("0.01")


def node_id(kind: str, name: str) -> str:
    """Stable node id, e.g. ("income", "Conta Corrente") -> "income_conta_corrente" """
    slug = re.sub(r"\s+", "_", name.lower())
    return f"{kind}_{slug}"


def _accumulate(totals: Dict[str, Decimal], nodes: List[MoneyFlowNode], kind: str, name: str, value: Decimal) -> None:
    nid = node_id(kind, name)
    if nid not in totals:
        totals[nid] = ZERO
        nodes.append(MoneyFlowNode(id=nid, name=name, category=kind))
    totals[nid] += value


def build_money_flow(transactions: Sequence[Transaction]) -> MoneyFlowGraph:
    """
    Build the income -> expense flow graph from raw face values.

    Each expense category's total is split across income sources by their share of
    total income. Nodes are deduplicated by id; no links are produced when either
    side totals zero.
    """
    nodes: List[MoneyFlowNode] = []
    income_totals: Dict[str, Decimal] = {}
    expense_totals: Dict[str, Decimal] = {}

    for txn in transactions:
        if txn.type == INCOME:
            source = txn.payment_method or settings.default_income_source
            _accumulate(income_totals, nodes, INCOME, source, txn.value)
        elif txn.type == EXPENSE:
            _accumulate(expense_totals, nodes, EXPENSE, category_key(txn), txn.value)

    total_income = sum(income_totals.values(), ZERO)
    total_expenses = sum(expense_totals.values(), ZERO)

    links: List[MoneyFlowLink] = []
    if total_income > 0 and total_expenses > 0:
        for source_id, income_value in income_totals.items():
            share = income_value / total_income
            for target_id, expense_value in expense_totals.items():
                value = (share * expense_value).quantize(CENTS, rounding=ROUND_HALF_UP)
                if value > 0:
                    links.append(MoneyFlowLink(source=source_id, target=target_id, value=value))

    return MoneyFlowGraph(nodes=nodes, links=links)
