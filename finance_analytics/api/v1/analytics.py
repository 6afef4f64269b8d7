"""POST /v1/analytics - dashboard aggregates for one transaction set"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from finance_analytics.api.v1.schemas import AnalyticsRequest, AnalyticsResponse
from finance_analytics.api.dependencies import get_request_id
from finance_analytics.domain.analytics import analyze
from finance_analytics.domain.exceptions import InvalidPeriodError, MalformedTransactionError
from finance_analytics.domain.models import ExternalCategoryTotal, InvoiceMonthTotal, ReportingPeriod
from finance_analytics.domain.normalization import normalize_transactions
from finance_analytics.infrastructure.observability.metrics import record_analysis, malformed_transactions_counter
from finance_analytics.infrastructure.observability.logging import log_analysis

router = APIRouter()


@router.post("/analytics", response_model=AnalyticsResponse)
def create_analytics(request_body: AnalyticsRequest, request: Request):
    """
    Compute summary, monthly series, categories, money flow and heatmap.

    Flow:
    1. Normalize raw transactions (tags, legacy card fields)
    2. Build the reporting period and billing inputs
    3. Run every aggregator over the full transaction list
    4. Record metrics and logs
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Canonical transactions
        transactions = normalize_transactions(request_body.transactions)

        # 2. Period and billing-service figures
        period = None
        if request_body.period is not None:
            period = ReportingPeriod(start=request_body.period.from_, end=request_body.period.to)

        breakdown = [
            ExternalCategoryTotal(name=entry.name, amount=entry.amount)
            for entry in request_body.external_category_breakdown
        ]
        invoices_by_month = [
            InvoiceMonthTotal(year=entry.year, month=entry.month, total=entry.total)
            for entry in request_body.external_invoice_by_month
        ]

        # 3. Aggregate
        result = analyze(
            transactions,
            period=period,
            external_invoice_total=request_body.external_invoice_total,
            external_category_breakdown=breakdown,
            external_invoice_by_month=invoices_by_month,
            now=request_body.now,
        )

    except MalformedTransactionError as e:
        malformed_transactions_counter.inc()
        logging.warning(
            f"Malformed transaction: {e}",
            extra={"request_id": request_id, "transaction_id": e.transaction_id},
        )
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidPeriodError as e:
        logging.warning(f"Invalid period: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # 4. Record metrics and logs
    duration = time.time() - start_time
    record_analysis(len(transactions), period is not None, duration)
    log_analysis(request_id, len(transactions), len(result.categories), period is not None, duration * 1000)

    return AnalyticsResponse.model_validate(result)
