"""Tests for the dashboard service and its static insights."""

from __future__ import annotations

from decimal import Decimal

from backend.factory import build_dashboard_service
from backend.repositories.insights_repository import InMemoryInsightsRepository
from backend.repositories.transactions_repository import InMemoryTransactionsRepository
from backend.services.dashboard_service import DashboardService
from shared.models import GoalStatus, Period, ToolError, ToolErrorCode, TransactionFilters


class _BrokenTransactionsRepository:
    def list_transactions(self):
        raise RuntimeError("ledger unavailable")


class _BrokenInsightsRepository(InMemoryInsightsRepository):
    def get_goals(self):
        raise RuntimeError("goals unavailable")


def _service() -> DashboardService:
    return build_dashboard_service()


def test_profile_snapshot() -> None:
    profile = _service().get_profile()

    assert profile.name == "John Doe"
    assert profile.currency == "ZAR"
    assert profile.total_spent == Decimal("15420.50")


def test_summary_per_period_bucket() -> None:
    service = _service()

    assert service.get_spending_summary(Period.LAST_7_DAYS).total_spent == Decimal("1120.35")
    assert service.get_spending_summary(Period.LAST_YEAR).transaction_count == 487
    summary = service.get_spending_summary(Period.LAST_30_DAYS)
    assert summary.compared_to_previous.spent_change == 12.5
    assert summary.top_category == "Groceries"


def test_categories_bucket_has_date_range_and_styles() -> None:
    categories = _service().get_spending_by_category(Period.LAST_90_DAYS)

    assert categories.date_range.start_date == "2024-06-16"
    assert categories.date_range.end_date == "2024-09-16"
    assert categories.total_amount == Decimal("11850.20")
    assert [row.name for row in categories.categories][:2] == ["Groceries", "Entertainment"]
    assert categories.categories[0].color == "#FF6B6B"


def test_trends_full_series_and_recent_months() -> None:
    service = _service()

    full = service.get_spending_trends()
    recent = service.get_spending_trends(3)

    assert [row.month for row in full.trends][0] == "2024-01"
    assert len(full.trends) == 12
    assert [row.month for row in recent.trends] == ["2024-10", "2024-11", "2024-12"]
    assert len(service.get_spending_trends(12).trends) == 12


def test_goals_and_filters() -> None:
    service = _service()

    goals = service.get_goals().goals
    filters = service.get_filters()

    assert [goal.status for goal in goals] == [
        GoalStatus.ON_TRACK,
        GoalStatus.WARNING,
        GoalStatus.EXCEEDED,
        GoalStatus.ON_TRACK,
    ]
    assert [preset.value for preset in filters.date_range_presets] == [
        Period.LAST_7_DAYS,
        Period.LAST_30_DAYS,
        Period.LAST_90_DAYS,
        Period.LAST_YEAR,
    ]
    assert filters.date_range_presets[0].label == "Last 7 days"
    assert len(filters.categories) == 6


def test_search_transactions_delegates_to_query_engine() -> None:
    page = _service().search_transactions(TransactionFilters(category="Utilities"))

    assert [row.id for row in page.transactions] == ["txn_006"]
    assert page.pagination.total == 1


def test_repository_failure_becomes_backend_error(caplog) -> None:
    service = DashboardService(
        transactions_repository=_BrokenTransactionsRepository(),
        insights_repository=InMemoryInsightsRepository(),
    )

    result = service.search_transactions(TransactionFilters())

    assert isinstance(result, ToolError)
    assert result.code == ToolErrorCode.BACKEND_ERROR
    assert result.message == "ledger unavailable"
    assert "dashboard_operation_failed operation=transactions" in caplog.text


def test_build_spending_report_collects_bucket_ledger() -> None:
    report = _service().build_spending_report(Period.LAST_7_DAYS)

    assert report.customer_name == "John Doe"
    assert report.period_label == "Last 7 days (2024-09-09 to 2024-09-16)"
    assert report.total == Decimal("1120.35")
    assert [row.date for row in report.transactions][:2] == ["2024-09-16", "2024-09-15"]
    assert len(report.transactions) == 8
    assert report.transactions_truncated is False
    assert len(report.trends) == 12
    assert len(report.goals) == 4


def test_build_spending_report_propagates_tool_error() -> None:
    service = DashboardService(
        transactions_repository=InMemoryTransactionsRepository(),
        insights_repository=_BrokenInsightsRepository(),
    )

    result = service.build_spending_report(Period.LAST_30_DAYS)

    assert isinstance(result, ToolError)
    assert result.message == "goals unavailable"
