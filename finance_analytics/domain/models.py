"""Domain models - pure Python dataclasses for transactions and dashboard aggregates"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from finance_analytics.domain.exceptions import InvalidPeriodError
from finance_analytics.utils.date_utils import month_start

INCOME = "income"
EXPENSE = "expense"

CASH = "cash"
INSTALLMENT = "installment"


@dataclass(frozen=True)
class Tag:
    """Tag attached to a transaction, flattened to (type, name)"""

    type: Optional[str]
    name: str


@dataclass(frozen=True)
class InstallmentInfo:
    """Canonical credit-card charge details, whichever raw field they came from"""

    modality: Optional[str]  # "cash" | "installment" | None
    installments_count: int
    total_amount: Optional[Decimal]  # None when the source omitted it
    purchase_date: Optional[datetime]
    card_id: Optional[str] = None
    card_last4: Optional[str] = None
    is_credit_card: bool = False


@dataclass(frozen=True)
class Transaction:
    """Normalized transaction, the only shape aggregators consume"""

    id: str
    type: str  # "income" or "expense"
    value: Decimal
    date: datetime
    payment_method: str = ""
    category: Optional[str] = None
    description: str = ""
    tags: Tuple[Tag, ...] = ()
    installment: Optional[InstallmentInfo] = None

    @property
    def day(self) -> date:
        return self.date.date()


@dataclass(frozen=True)
class ReportingPeriod:
    """Inclusive [start, end] day window chosen by the caller"""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidPeriodError(f"Period starts {self.start} after it ends {self.end}")

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, start: date, end: date) -> bool:
        return start <= self.end and end >= self.start

    def contains_month(self, day: date) -> bool:
        """True when the month of `day` lies within the period's month range"""
        first = month_start(day)
        return month_start(self.start) <= first <= month_start(self.end)


@dataclass(frozen=True)
class InvoiceMonthTotal:
    """Invoice total for one calendar month, supplied by the billing service"""

    year: int
    month: int
    total: Decimal


@dataclass(frozen=True)
class ExternalCategoryTotal:
    """Card-invoice spend for one category, supplied by the billing service"""

    name: Optional[str]
    amount: Decimal


@dataclass
class FinancialSummary:
    """Period totals"""

    balance: Decimal
    income: Decimal
    expenses: Decimal


@dataclass
class MonthlyBucket:
    """Income and expenses attributed to one calendar month"""

    month_key: str  # "YYYY-MM"
    label: str  # pt-BR short month name
    income: Decimal
    expenses: Decimal


@dataclass
class CategoryTotal:
    """Expense total for one category with its chart color"""

    name: str
    amount: Decimal
    color: str


@dataclass(frozen=True)
class MoneyFlowNode:
    id: str
    name: str
    category: str  # "income" | "expense"


@dataclass(frozen=True)
class MoneyFlowLink:
    source: str
    target: str
    value: Decimal


@dataclass
class MoneyFlowGraph:
    """Bipartite income-source -> expense-category graph"""

    nodes: List[MoneyFlowNode] = field(default_factory=list)
    links: List[MoneyFlowLink] = field(default_factory=list)


@dataclass
class WeeklyHeatmap:
    """Spend per weekday (rows, Sunday first) and category (columns)"""

    categories: List[str]
    days: List[str]
    data: List[List[Decimal]]


@dataclass(frozen=True)
class RecentTransaction:
    """Transaction shaped for the recent-activity list"""

    id: str
    description: str
    amount: Decimal  # Positive for income, negative for expense
    category: str
    date: datetime
    type: str


@dataclass
class AnalyticsResult:
    """Everything the dashboard renders from one transaction set"""

    summary: FinancialSummary
    monthly: List[MonthlyBucket]
    categories: List[CategoryTotal]
    money_flow: MoneyFlowGraph
    heatmap: WeeklyHeatmap
    recent: List[RecentTransaction]
