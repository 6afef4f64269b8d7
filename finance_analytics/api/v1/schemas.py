"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PeriodSchema(BaseModel):
    """Inclusive reporting period"""

    model_config = ConfigDict(populate_by_name=True)

    from_: date = Field(..., alias="from")
    to: date


class InvoiceMonthSchema(BaseModel):
    """Invoice total for one month, computed by the billing service"""

    year: int = Field(..., ge=1)
    month: int = Field(..., ge=1, le=12)
    total: Decimal


class CategoryBreakdownSchema(BaseModel):
    """Card-invoice spend for one category, computed by the billing service"""

    name: Optional[str] = None
    amount: Decimal


class AnalyticsRequest(BaseModel):
    """Request body for POST /v1/analytics"""

    # Raw payloads; both tag shapes and all charge layouts are resolved by the engine
    transactions: List[Dict[str, Any]] = Field(default_factory=list)
    period: Optional[PeriodSchema] = None
    external_invoice_total: Optional[Decimal] = None
    external_category_breakdown: List[CategoryBreakdownSchema] = Field(default_factory=list)
    external_invoice_by_month: List[InvoiceMonthSchema] = Field(default_factory=list)
    now: Optional[date] = Field(None, description="Pin the end of the trailing monthly window")


class SummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    balance: float
    income: float
    expenses: float


class MonthlyBucketSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month_key: str
    label: str
    income: float
    expenses: float


class CategoryTotalSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    amount: float
    color: str


class MoneyFlowNodeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str


class MoneyFlowLinkSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    source: str
    target: str
    value: float


class MoneyFlowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    nodes: List[MoneyFlowNodeSchema]
    links: List[MoneyFlowLinkSchema]


class HeatmapSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    categories: List[str]
    days: List[str]
    data: List[List[float]]


class RecentTransactionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    description: str
    amount: float
    category: str
    date: datetime
    type: str


class AnalyticsResponse(BaseModel):
    """Response for POST /v1/analytics"""

    model_config = ConfigDict(from_attributes=True)

    summary: SummarySchema
    monthly: List[MonthlyBucketSchema]
    categories: List[CategoryTotalSchema]
    money_flow: MoneyFlowSchema
    heatmap: HeatmapSchema
    recent: List[RecentTransactionSchema]
