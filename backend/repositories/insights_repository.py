"""Static spending insights for the dashboard customer.

Period buckets, the monthly trend series and budget goals are tabulated
snapshots. They are not computed from the transactions ledger.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from backend.repositories.category_utils import CATEGORY_CATALOG, category_style
from shared.models import (
    CategorySpending,
    CustomerProfile,
    DateRange,
    DateRangePreset,
    FiltersResponse,
    GoalStatus,
    MonthlyTrend,
    Period,
    PeriodComparison,
    SpendingByCategory,
    SpendingGoal,
    SpendingGoalsResponse,
    SpendingSummary,
    SpendingTrends,
)


class InsightsRepository(Protocol):
    def get_profile(self) -> CustomerProfile:
        """Return the customer profile snapshot."""

    def get_summary(self, period: Period) -> SpendingSummary:
        """Return headline figures for one period bucket."""

    def get_categories(self, period: Period) -> SpendingByCategory:
        """Return the category breakdown for one period bucket."""

    def get_trends(self) -> SpendingTrends:
        """Return the monthly series, oldest month first."""

    def get_goals(self) -> SpendingGoalsResponse:
        """Return the monthly budget goals."""

    def get_filters(self) -> FiltersResponse:
        """Return category metadata and date-range presets."""


# period -> (total, count, average, top category, spent change %, count change %)
_SUMMARY_ROWS: dict[Period, tuple[str, int, str, str, float, float]] = {
    Period.LAST_7_DAYS: ("1120.35", 12, "93.36", "Groceries", 5.2, -1.8),
    Period.LAST_30_DAYS: ("4250.75", 47, "90.44", "Groceries", 12.5, -3.2),
    Period.LAST_90_DAYS: ("11850.20", 132, "89.77", "Groceries", -2.1, 4.5),
    Period.LAST_YEAR: ("15420.50", 487, "31.66", "Groceries", 8.3, 12.0),
}

# period -> (start, end, total, [(category, amount, percentage, count), ...])
_CATEGORY_ROWS: dict[Period, tuple[str, str, str, tuple[tuple[str, str, float, int], ...]]] = {
    Period.LAST_7_DAYS: (
        "2024-09-09",
        "2024-09-16",
        "1120.35",
        (
            ("Groceries", "380.20", 33.9, 4),
            ("Entertainment", "199.00", 17.8, 2),
            ("Transportation", "210.15", 18.8, 3),
            ("Dining", "165.00", 14.7, 2),
            ("Shopping", "89.00", 7.9, 1),
            ("Utilities", "77.00", 6.9, 0),
        ),
    ),
    Period.LAST_30_DAYS: (
        "2024-08-16",
        "2024-09-16",
        "4250.75",
        (
            ("Groceries", "1250.30", 29.4, 15),
            ("Entertainment", "890.20", 20.9, 8),
            ("Transportation", "680.45", 16.0, 12),
            ("Dining", "520.30", 12.2, 9),
            ("Shopping", "450.80", 10.6, 6),
            ("Utilities", "458.70", 10.8, 3),
        ),
    ),
    Period.LAST_90_DAYS: (
        "2024-06-16",
        "2024-09-16",
        "11850.20",
        (
            ("Groceries", "3650.10", 30.8, 42),
            ("Entertainment", "2380.50", 20.1, 22),
            ("Transportation", "1890.30", 16.0, 31),
            ("Dining", "1520.00", 12.8, 25),
            ("Shopping", "1250.60", 10.6, 15),
            ("Utilities", "1158.70", 9.8, 9),
        ),
    ),
    Period.LAST_YEAR: (
        "2023-09-16",
        "2024-09-16",
        "15420.50",
        (
            ("Groceries", "4750.30", 30.8, 156),
            ("Entertainment", "3120.40", 20.2, 87),
            ("Transportation", "2460.20", 16.0, 102),
            ("Dining", "1980.50", 12.8, 78),
            ("Shopping", "1650.80", 10.7, 42),
            ("Utilities", "1458.30", 9.5, 36),
        ),
    ),
}

_TREND_ROWS: tuple[tuple[str, str, int, str], ...] = (
    ("2024-01", "3890.25", 42, "92.62"),
    ("2024-02", "4150.80", 38, "109.23"),
    ("2024-03", "3750.60", 45, "83.35"),
    ("2024-04", "4200.45", 39, "107.70"),
    ("2024-05", "3980.30", 44, "90.46"),
    ("2024-06", "4250.75", 47, "90.44"),
    ("2024-07", "3620.90", 41, "88.31"),
    ("2024-08", "4480.15", 50, "89.60"),
    ("2024-09", "4120.55", 46, "89.58"),
    ("2024-10", "3950.80", 43, "91.88"),
    ("2024-11", "4650.35", 52, "89.43"),
    ("2024-12", "5120.60", 58, "88.29"),
)

_GOAL_ROWS: tuple[tuple[str, str, str, str, float, int, GoalStatus], ...] = (
    ("goal_001", "Entertainment", "1000.00", "650.30", 65.03, 12, GoalStatus.ON_TRACK),
    ("goal_002", "Groceries", "1500.00", "1450.80", 96.72, 12, GoalStatus.WARNING),
    ("goal_003", "Dining", "600.00", "685.30", 114.22, 12, GoalStatus.EXCEEDED),
    ("goal_004", "Transportation", "800.00", "420.50", 52.56, 12, GoalStatus.ON_TRACK),
)

_PERIOD_LABELS: dict[Period, str] = {
    Period.LAST_7_DAYS: "Last 7 days",
    Period.LAST_30_DAYS: "Last 30 days",
    Period.LAST_90_DAYS: "Last 90 days",
    Period.LAST_YEAR: "Last year",
}


def period_label(period: Period) -> str:
    return _PERIOD_LABELS[period]


class InMemoryInsightsRepository:
    """Tabulated dashboard views for the single demo customer."""

    def __init__(self, customer_id: str = "12345") -> None:
        self._profile = CustomerProfile(
            customer_id=customer_id,
            name="John Doe",
            email="john.doe@email.com",
            join_date="2023-01-15",
            account_type="premium",
            total_spent=Decimal("15420.50"),
            currency="ZAR",
        )
        self._summaries = {
            period: SpendingSummary(
                period=period,
                total_spent=Decimal(total),
                transaction_count=count,
                average_transaction=Decimal(average),
                top_category=top_category,
                compared_to_previous=PeriodComparison(
                    spent_change=spent_change,
                    transaction_change=transaction_change,
                ),
            )
            for period, (total, count, average, top_category, spent_change, transaction_change) in _SUMMARY_ROWS.items()
        }
        self._categories = {
            period: SpendingByCategory(
                date_range=DateRange(start_date=start_date, end_date=end_date),
                total_amount=Decimal(total),
                categories=[
                    CategorySpending(
                        name=name,
                        amount=Decimal(amount),
                        percentage=percentage,
                        transaction_count=count,
                        color=category_style(name).color,
                        icon=category_style(name).icon,
                    )
                    for name, amount, percentage, count in rows
                ],
            )
            for period, (start_date, end_date, total, rows) in _CATEGORY_ROWS.items()
        }
        self._trends = SpendingTrends(
            trends=[
                MonthlyTrend(
                    month=month,
                    total_spent=Decimal(total),
                    transaction_count=count,
                    average_transaction=Decimal(average),
                )
                for month, total, count, average in _TREND_ROWS
            ]
        )
        self._goals = SpendingGoalsResponse(
            goals=[
                SpendingGoal(
                    id=goal_id,
                    category=category,
                    monthly_budget=Decimal(budget),
                    current_spent=Decimal(spent),
                    percentage_used=percentage,
                    days_remaining=days_remaining,
                    status=status,
                )
                for goal_id, category, budget, spent, percentage, days_remaining, status in _GOAL_ROWS
            ]
        )
        self._filters = FiltersResponse(
            categories=list(CATEGORY_CATALOG),
            date_range_presets=[
                DateRangePreset(label=period_label(period), value=period) for period in Period
            ],
        )

    def get_profile(self) -> CustomerProfile:
        return self._profile

    def get_summary(self, period: Period) -> SpendingSummary:
        return self._summaries[period]

    def get_categories(self, period: Period) -> SpendingByCategory:
        return self._categories[period]

    def get_trends(self) -> SpendingTrends:
        return self._trends

    def get_goals(self) -> SpendingGoalsResponse:
        return self._goals

    def get_filters(self) -> FiltersResponse:
        return self._filters
