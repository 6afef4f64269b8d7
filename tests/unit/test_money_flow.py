"""Unit tests for the money-flow graph"""

from datetime import date
from decimal import Decimal

from finance_analytics.domain.money_flow import build_money_flow, node_id
from tests.conftest import make_txn


def test_node_id_slug():
    assert node_id("income", "Conta  Corrente") == "income_conta_corrente"


def test_money_flow_distributes_expenses_by_income_share(sample_transactions):
    graph = build_money_flow(sample_transactions)

    assert [n.id for n in graph.nodes] == [
        "income_conta_corrente",
        "income_pix",
        "expense_mercado",
        "expense_aluguel",
        "expense_eletrônicos",
    ]
    links = {(l.source, l.target): l.value for l in graph.links}
    assert len(links) == 6
    assert links[("income_conta_corrente", "expense_mercado")] == Decimal("300.00")
    assert links[("income_conta_corrente", "expense_aluguel")] == Decimal("900.00")
    assert links[("income_pix", "expense_eletrônicos")] == Decimal("300.00")


def test_money_flow_rounds_links_to_cents():
    txns = [
        make_txn(type="income", value="1", payment_method="A"),
        make_txn(type="income", value="2", payment_method="B"),
        make_txn(value="10", category="Mercado"),
    ]
    links = {l.source: l.value for l in build_money_flow(txns).links}

    assert links["income_a"] == Decimal("3.33")
    assert links["income_b"] == Decimal("6.67")


def test_money_flow_without_income_has_nodes_but_no_links():
    graph = build_money_flow([make_txn(value="50", category="Mercado")])

    assert [n.id for n in graph.nodes] == ["expense_mercado"]
    assert graph.links == []


def test_money_flow_deduplicates_nodes_by_id():
    txns = [
        make_txn(type="income", value="100", payment_method="Pix"),
        make_txn(type="income", value="100", payment_method="pix"),
        make_txn(value="50", category="Mercado"),
    ]
    graph = build_money_flow(txns)

    assert [n.id for n in graph.nodes if n.category == "income"] == ["income_pix"]
    assert graph.links[0].value == Decimal("50.00")


def test_money_flow_default_income_source():
    graph = build_money_flow([make_txn(type="income", value="10", payment_method="", day=date(2025, 1, 1))])
    assert graph.nodes[0].name == "Receita"


def test_money_flow_empty():
    graph = build_money_flow([])
    assert graph.nodes == [] and graph.links == []


def test_node_id_collapses_any_whitespace():
    assert node_id("expense", "Casa\te  Jardim") == "expense_casa_e_jardim"
