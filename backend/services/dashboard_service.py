"""Dashboard service exposing one operation per HTTP endpoint.

Repository failures are normalized into ``ToolError`` values at this
boundary; callers never see raw repository exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from backend.reporting import (
    SpendingCategoryRow,
    SpendingGoalRow,
    SpendingReportData,
    SpendingTransactionRow,
    SpendingTrendRow,
)
from backend.repositories.insights_repository import InsightsRepository, period_label
from backend.repositories.transactions_repository import TransactionsRepository
from backend.services.transaction_query import query_transactions
from shared.models import (
    CustomerProfile,
    FiltersResponse,
    Period,
    SpendingByCategory,
    SpendingGoalsResponse,
    SpendingSummary,
    SpendingTrends,
    ToolError,
    ToolErrorCode,
    TransactionFilters,
    TransactionPage,
    TransactionSortBy,
)


logger = logging.getLogger(__name__)

_REPORT_TRANSACTIONS_LIMIT = 250


def _backend_error(operation: str, exc: Exception) -> ToolError:
    logger.exception("dashboard_operation_failed operation=%s", operation)
    return ToolError(code=ToolErrorCode.BACKEND_ERROR, message=str(exc))


@dataclass(slots=True)
class DashboardService:
    transactions_repository: TransactionsRepository
    insights_repository: InsightsRepository

    def get_profile(self) -> CustomerProfile | ToolError:
        try:
            return self.insights_repository.get_profile()
        except Exception as exc:
            return _backend_error("profile", exc)

    def get_spending_summary(self, period: Period) -> SpendingSummary | ToolError:
        try:
            return self.insights_repository.get_summary(period)
        except Exception as exc:
            return _backend_error("spending_summary", exc)

    def get_spending_by_category(self, period: Period) -> SpendingByCategory | ToolError:
        try:
            return self.insights_repository.get_categories(period)
        except Exception as exc:
            return _backend_error("spending_categories", exc)

    def get_spending_trends(self, months: int | None = None) -> SpendingTrends | ToolError:
        """Return the monthly series, trimmed to the most recent ``months`` entries."""

        try:
            trends = self.insights_repository.get_trends()
        except Exception as exc:
            return _backend_error("spending_trends", exc)

        if months is None or months >= len(trends.trends):
            return trends
        return SpendingTrends(trends=trends.trends[-months:])

    def search_transactions(self, filters: TransactionFilters) -> TransactionPage | ToolError:
        try:
            transactions = self.transactions_repository.list_transactions()
        except Exception as exc:
            return _backend_error("transactions", exc)
        return query_transactions(transactions, filters)

    def get_goals(self) -> SpendingGoalsResponse | ToolError:
        try:
            return self.insights_repository.get_goals()
        except Exception as exc:
            return _backend_error("goals", exc)

    def get_filters(self) -> FiltersResponse | ToolError:
        try:
            return self.insights_repository.get_filters()
        except Exception as exc:
            return _backend_error("filters", exc)

    def build_spending_report(self, period: Period) -> SpendingReportData | ToolError:
        """Collect every dashboard view needed to render the spending PDF."""

        results = (
            self.get_profile(),
            self.get_spending_summary(period),
            self.get_spending_by_category(period),
            self.get_spending_trends(),
            self.get_goals(),
        )
        for result in results:
            if isinstance(result, ToolError):
                return result
        profile, summary, categories, trends, goals = results

        # The bucket end date is a day; widen it so that day's timestamps match.
        ledger = self.search_transactions(
            TransactionFilters(
                limit=_REPORT_TRANSACTIONS_LIMIT,
                start_date=categories.date_range.start_date,
                end_date=f"{categories.date_range.end_date}T23:59:59Z",
                sort_by=TransactionSortBy.DATE_DESC,
            )
        )
        if isinstance(ledger, ToolError):
            return ledger

        return SpendingReportData(
            customer_name=profile.name,
            period_label=(
                f"{period_label(period)} "
                f"({categories.date_range.start_date} to {categories.date_range.end_date})"
            ),
            currency=profile.currency,
            total=summary.total_spent,
            count=summary.transaction_count,
            average=summary.average_transaction,
            top_category=summary.top_category,
            spent_change=summary.compared_to_previous.spent_change,
            categories=[
                SpendingCategoryRow(name=row.name, amount=row.amount)
                for row in categories.categories
            ],
            trends=[
                SpendingTrendRow(month=row.month, total=row.total_spent, count=row.transaction_count)
                for row in trends.trends
            ],
            goals=[
                SpendingGoalRow(
                    category=row.category,
                    budget=row.monthly_budget,
                    spent=row.current_spent,
                    percentage_used=row.percentage_used,
                    status=row.status.value,
                )
                for row in goals.goals
            ],
            transactions=[
                SpendingTransactionRow(
                    date=row.date[:10],
                    merchant=row.merchant,
                    category=row.category,
                    amount=row.amount,
                )
                for row in ledger.transactions
            ],
            transactions_truncated=ledger.pagination.has_more,
        )
