"""Input boundary: raw transaction payloads -> canonical Transaction objects

The transactions API has shipped several shapes over time:

- tags as a mapping ``{"categoria": [{"name": "Mercado"}]}`` or as a list
  ``[{"name": "Mercado", "tag_type": {"name": "categoria"}}]``
- card details in ``installment_charge``, in ``credit_card_charge.charge``
  or in legacy top-level ``modality`` / ``installments_count`` fields

All of that is resolved here once, so aggregators never branch on it.
"""

import logging
import math
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from finance_analytics.domain.exceptions import MalformedTransactionError
from finance_analytics.domain.models import (
    CASH,
    EXPENSE,
    INCOME,
    INSTALLMENT,
    InstallmentInfo,
    Tag,
    Transaction,
)

logger = logging.getLogger(__name__)

CARD_PAYMENT_METHODS = frozenset({"credit_card", "cartão de crédito"})


def is_card_payment_method(payment_method: Optional[str]) -> bool:
    return (payment_method or "").strip().lower() in CARD_PAYMENT_METHODS


def parse_decimal(value: Any, transaction_id: object, field_name: str) -> Decimal:
    """Parse a money amount; numbers and numeric strings are accepted"""
    if isinstance(value, bool) or value is None:
        raise MalformedTransactionError(transaction_id, f"{field_name} is not numeric: {value!r}")

    try:
        if isinstance(value, Decimal):
            parsed = value
        elif isinstance(value, int):
            parsed = Decimal(value)
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise InvalidOperation
            parsed = Decimal(str(value))
        elif isinstance(value, str):
            parsed = Decimal(value.strip())
        else:
            raise InvalidOperation
    except InvalidOperation as e:
        raise MalformedTransactionError(transaction_id, f"{field_name} is not numeric: {value!r}") from e

    if not parsed.is_finite():
        raise MalformedTransactionError(transaction_id, f"{field_name} is not finite: {value!r}")
    return parsed


def parse_instant(value: Any, transaction_id: object, field_name: str) -> datetime:
    """Parse an ISO date/datetime; never defaults to now"""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as e:
            raise MalformedTransactionError(transaction_id, f"{field_name} is not a date: {value!r}") from e
    raise MalformedTransactionError(transaction_id, f"{field_name} is not a date: {value!r}")


def _parse_count(value: Any, transaction_id: object) -> int:
    if value is None:
        return 1
    if isinstance(value, bool):
        raise MalformedTransactionError(transaction_id, f"installments_count is not an integer: {value!r}")
    # int() would truncate 2.9 to 2
    if isinstance(value, float) and not value.is_integer():
        raise MalformedTransactionError(transaction_id, f"installments_count is not an integer: {value!r}")
    if isinstance(value, Decimal) and (not value.is_finite() or value != value.to_integral_value()):
        raise MalformedTransactionError(transaction_id, f"installments_count is not an integer: {value!r}")
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedTransactionError(transaction_id, f"installments_count is not an integer: {value!r}") from e
    if count < 1:
        raise MalformedTransactionError(transaction_id, f"installments_count must be >= 1, got {count}")
    return count


def _parse_total_amount(value: Any, transaction_id: object) -> Optional[Decimal]:
    """Missing or unusable totals fall back to the face value later on"""
    if value is None:
        logger.debug("No total_amount on charge, using face value", extra={"transaction_id": transaction_id})
        return None
    try:
        return parse_decimal(value, transaction_id, "total_amount")
    except MalformedTransactionError:
        logger.debug("Unusable total_amount on charge, using face value", extra={"transaction_id": transaction_id})
        return None


def _parse_modality(value: Any, transaction_id: object) -> Optional[str]:
    if value in (None, ""):
        return None
    if value not in (CASH, INSTALLMENT):
        raise MalformedTransactionError(transaction_id, f"unknown modality: {value!r}")
    return value


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def normalize_tags(raw_tags: Any, transaction_id: object) -> Tuple[Tag, ...]:
    """Flatten either tag shape into (type, name) pairs, preserving order"""
    if not raw_tags:
        return ()

    tags: List[Tag] = []
    try:
        if isinstance(raw_tags, Mapping):
            for tag_type, entries in raw_tags.items():
                for entry in entries or []:
                    tags.append(Tag(type=str(tag_type), name=str(entry["name"])))
        elif isinstance(raw_tags, (list, tuple)):
            for entry in raw_tags:
                tag_type = entry.get("tag_type", entry.get("type"))
                if isinstance(tag_type, Mapping):
                    tag_type = tag_type.get("name")
                tags.append(Tag(type=_optional_str(tag_type), name=str(entry["name"])))
        else:
            raise TypeError(f"unsupported tags container {type(raw_tags).__name__}")
    except (KeyError, TypeError, AttributeError) as e:
        raise MalformedTransactionError(transaction_id, f"invalid tags: {e}") from e

    return tuple(tags)


def normalize_installment(raw: Mapping[str, Any], transaction_id: object) -> Optional[InstallmentInfo]:
    """
    Resolve card charge details from the nested charge, or the legacy fields.

    Priority: installment_charge, credit_card_charge.charge, top-level legacy fields.
    Returns None for transactions with no card information at all.
    """
    nested = raw.get("installment_charge")
    card = None
    if isinstance(nested, Mapping):
        card = nested.get("card")
    else:
        wrapper = raw.get("credit_card_charge")
        if isinstance(wrapper, Mapping):
            nested = wrapper.get("charge") or {}
            card = wrapper.get("card")
        else:
            nested = None

    if isinstance(nested, Mapping):
        card = card if isinstance(card, Mapping) else {}
        purchase_date = nested.get("purchase_date")
        return InstallmentInfo(
            modality=_parse_modality(nested.get("modality"), transaction_id),
            installments_count=_parse_count(nested.get("installments_count"), transaction_id),
            total_amount=_parse_total_amount(nested.get("total_amount"), transaction_id),
            purchase_date=(
                parse_instant(purchase_date, transaction_id, "purchase_date")
                if purchase_date is not None
                else None
            ),
            card_id=_optional_str(card.get("id")),
            card_last4=_optional_str(card.get("last4")),
            is_credit_card=True,
        )

    is_card = is_card_payment_method(raw.get("payment_method"))
    modality = raw.get("modality")
    count = raw.get("installments_count")
    if not is_card and modality is None and count is None:
        return None

    return InstallmentInfo(
        modality=_parse_modality(modality, transaction_id),
        installments_count=_parse_count(count, transaction_id),
        total_amount=None,
        purchase_date=None,
        card_last4=_optional_str(raw.get("card_last4")),
        is_credit_card=is_card,
    )


def normalize_transaction(raw: Any) -> Transaction:
    """
    Convert one raw payload into a canonical Transaction.

    Raises:
        MalformedTransactionError: unparseable date, non-numeric value, unknown
            type or malformed tags/charge fields. The offending id is attached.
    """
    if isinstance(raw, Transaction):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedTransactionError(None, f"expected a mapping, got {type(raw).__name__}")

    transaction_id = raw.get("id")
    txn_type = raw.get("type")
    if txn_type not in (INCOME, EXPENSE):
        raise MalformedTransactionError(transaction_id, f"unknown type: {txn_type!r}")

    category = raw.get("category")
    return Transaction(
        id="" if transaction_id is None else str(transaction_id),
        type=txn_type,
        value=parse_decimal(raw.get("value"), transaction_id, "value"),
        date=parse_instant(raw.get("date"), transaction_id, "date"),
        payment_method=raw.get("payment_method") or "",
        category=str(category) if category else None,
        description=raw.get("description") or "",
        tags=normalize_tags(raw.get("tags"), transaction_id),
        installment=normalize_installment(raw, transaction_id),
    )


def normalize_transactions(raws: Iterable[Any]) -> List[Transaction]:
    """Normalize a whole payload; the first malformed entry aborts the batch"""
    return [normalize_transaction(raw) for raw in raws]
