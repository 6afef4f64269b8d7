"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from fastapi.testclient import TestClient

from finance_analytics.api.main import create_app
from finance_analytics.domain.models import InstallmentInfo, Tag, Transaction


NOW = date(2025, 3, 15)


def make_txn(
    txn_id: str = "1",
    type: str = "expense",
    value: str = "100",
    day: date = NOW,
    category: str | None = "Mercado",
    payment_method: str = "Pix",
    tags: tuple[Tag, ...] = (),
    description: str = "",
    installment: InstallmentInfo | None = None,
) -> Transaction:
    """Canonical transaction with sensible defaults"""
    return Transaction(
        id=txn_id,
        type=type,
        value=Decimal(value),
        date=datetime.combine(day, datetime.min.time()),
        payment_method=payment_method,
        category=category,
        description=description,
        tags=tags,
        installment=installment,
    )


def make_card_charge(
    modality: str = "installment",
    count: int = 3,
    total: str | None = "1200",
    purchase: date | None = date(2025, 3, 1),
) -> InstallmentInfo:
    """Credit-card charge details as the normalization boundary would produce them"""
    return InstallmentInfo(
        modality=modality,
        installments_count=count,
        total_amount=Decimal(total) if total is not None else None,
        purchase_date=datetime.combine(purchase, datetime.min.time()) if purchase else None,
        card_id="7",
        card_last4="4242",
        is_credit_card=True,
    )


@pytest.fixture
def now() -> date:
    return NOW


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """A month of household activity around NOW"""
    return [
        make_txn("salary", type="income", value="3000", day=date(2025, 3, 5), category=None,
                 payment_method="Conta Corrente", description="Salário"),
        make_txn("freelance", type="income", value="1000", day=date(2025, 3, 10), category=None,
                 payment_method="Pix", description="Freela"),
        make_txn("market", value="400", day=date(2025, 3, 3), category="Mercado"),
        make_txn("rent", value="1200", day=date(2025, 3, 12), category=None,
                 tags=(Tag(type="categoria", name="Aluguel"),)),
        make_txn("tv", value="1200", day=date(2025, 2, 1), category="Eletrônicos",
                 payment_method="credit_card",
                 installment=make_card_charge(count=3, total="1200", purchase=date(2025, 2, 1))),
    ]
