"""Reporting utilities for backend-generated documents."""

from backend.reporting.spending_report import (
    SpendingCategoryRow,
    SpendingGoalRow,
    SpendingReportData,
    SpendingTransactionRow,
    SpendingTrendRow,
    format_amount,
    generate_spending_report_pdf,
)

__all__ = [
    "SpendingCategoryRow",
    "SpendingGoalRow",
    "SpendingReportData",
    "SpendingTransactionRow",
    "SpendingTrendRow",
    "format_amount",
    "generate_spending_report_pdf",
]
