"""Composition root for backend services."""

from __future__ import annotations

from backend.repositories.insights_repository import InMemoryInsightsRepository
from backend.repositories.transactions_repository import InMemoryTransactionsRepository
from backend.services.dashboard_service import DashboardService
from shared import config


def build_dashboard_service() -> DashboardService:
    """Build the dashboard service over the in-memory demo snapshot."""

    return DashboardService(
        transactions_repository=InMemoryTransactionsRepository(),
        insights_repository=InMemoryInsightsRepository(customer_id=config.customer_id()),
    )
