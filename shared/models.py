"""Pydantic contracts shared across the backend and the HTTP layer."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
"""Monetary value kept as Decimal in Python and emitted as a JSON number."""


class _Contract(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class ToolErrorCode(str, Enum):
    """Stable error codes for service contracts across layers."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    BACKEND_ERROR = "BACKEND_ERROR"
    NOT_FOUND = "NOT_FOUND"


class ToolError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: ToolErrorCode
    message: str
    details: dict[str, object] | None = None


class Period(str, Enum):
    """Predefined time window of a spending bucket."""

    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    LAST_YEAR = "1y"


DEFAULT_PERIOD = Period.LAST_30_DAYS


class TransactionSortBy(str, Enum):
    """Sort key and direction for the transactions ledger."""

    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    AMOUNT_DESC = "amount_desc"
    AMOUNT_ASC = "amount_asc"


class Transaction(_Contract):
    model_config = ConfigDict(frozen=True)

    id: str
    date: str
    merchant: str
    category: str
    amount: Amount
    description: str
    payment_method: str
    icon: str
    category_color: str


class TransactionFilters(_Contract):
    limit: int = 20
    offset: int = Field(default=0, ge=0)
    category: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    min_amount: Amount | None = None
    sort_by: TransactionSortBy = TransactionSortBy.DATE_DESC


class Pagination(_Contract):
    total: int
    limit: int
    offset: int
    has_more: bool


class TransactionPage(_Contract):
    transactions: list[Transaction]
    pagination: Pagination


class CustomerProfile(_Contract):
    customer_id: str
    name: str
    email: str
    join_date: str
    account_type: str
    total_spent: Amount
    currency: str


class PeriodComparison(_Contract):
    spent_change: float
    transaction_change: float


class SpendingSummary(_Contract):
    period: Period
    total_spent: Amount
    transaction_count: int
    average_transaction: Amount
    top_category: str
    compared_to_previous: PeriodComparison


class DateRange(_Contract):
    start_date: str
    end_date: str


class CategorySpending(_Contract):
    name: str
    amount: Amount
    percentage: float
    transaction_count: int
    color: str
    icon: str


class SpendingByCategory(_Contract):
    date_range: DateRange
    total_amount: Amount
    categories: list[CategorySpending]


class MonthlyTrend(_Contract):
    month: str
    total_spent: Amount
    transaction_count: int
    average_transaction: Amount


class SpendingTrends(_Contract):
    trends: list[MonthlyTrend]


class GoalStatus(str, Enum):
    ON_TRACK = "on_track"
    WARNING = "warning"
    EXCEEDED = "exceeded"


class SpendingGoal(_Contract):
    id: str
    category: str
    monthly_budget: Amount
    current_spent: Amount
    percentage_used: float
    days_remaining: int
    status: GoalStatus


class SpendingGoalsResponse(_Contract):
    goals: list[SpendingGoal]


class CategoryFilter(_Contract):
    name: str
    color: str
    icon: str


class DateRangePreset(_Contract):
    label: str
    value: Period


class FiltersResponse(_Contract):
    categories: list[CategoryFilter]
    date_range_presets: list[DateRangePreset]
