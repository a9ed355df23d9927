"""FastAPI entrypoint for dashboard HTTP endpoints."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse, Response

from api.query_params import build_transaction_filters, parse_months, parse_period
from backend.factory import build_dashboard_service
from backend.reporting import generate_spending_report_pdf
from backend.services.dashboard_service import DashboardService
from shared import config as _config
from shared.models import (
    CustomerProfile,
    FiltersResponse,
    SpendingByCategory,
    SpendingGoalsResponse,
    SpendingSummary,
    SpendingTrends,
    ToolError,
    TransactionPage,
)


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_dashboard_service() -> DashboardService:
    """Create and cache the dashboard service once per process."""

    service = build_dashboard_service()
    logger.info("using_dashboard_service=%s.%s", service.__class__.__module__, service.__class__.__name__)
    return service


def _unwrap(result: Any) -> Any:
    if isinstance(result, ToolError):
        raise HTTPException(status_code=400, detail=result.message)
    return result


def _note_customer(customer_id: str) -> None:
    # Single-customer system: the path id is accepted but never used for lookup.
    if customer_id != _config.customer_id():
        logger.debug("customer_id_ignored requested=%s served=%s", customer_id, _config.customer_id())


app = FastAPI(title="Personal Finance Dashboard API")

ALLOW_ORIGINS = _config.cors_allow_origins()


@app.middleware("http")
async def log_http_requests(request: Request, call_next):
    """Log incoming requests, HTTP status codes and unexpected errors."""

    logger.info("http_request_received method=%s path=%s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "http_request_failed method=%s path=%s",
            request.method,
            request.url.path,
        )
        raise

    logger.info(
        "http_response_sent method=%s path=%s status_code=%s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

logger.info("cors_allow_origins=%s", ALLOW_ORIGINS)


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 response for unhandled exceptions."""

    logger.exception(
        "unhandled_exception method=%s path=%s exception_type=%s message=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.get("/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""

    return {"status": "ok"}


@app.get("/customers/{customer_id}/profile", response_model=CustomerProfile)
def get_profile(customer_id: str) -> Any:
    _note_customer(customer_id)
    return _unwrap(get_dashboard_service().get_profile())


@app.get("/customers/{customer_id}/spending/summary", response_model=SpendingSummary)
def get_spending_summary(customer_id: str, period: str | None = None) -> Any:
    _note_customer(customer_id)
    return _unwrap(get_dashboard_service().get_spending_summary(parse_period(period)))


@app.get("/customers/{customer_id}/spending/categories", response_model=SpendingByCategory)
def get_spending_by_category(customer_id: str, period: str | None = None) -> Any:
    _note_customer(customer_id)
    return _unwrap(get_dashboard_service().get_spending_by_category(parse_period(period)))


@app.get("/customers/{customer_id}/spending/trends", response_model=SpendingTrends)
def get_spending_trends(customer_id: str, months: str | None = None) -> Any:
    _note_customer(customer_id)
    return _unwrap(get_dashboard_service().get_spending_trends(parse_months(months)))


@app.get("/customers/{customer_id}/transactions", response_model=TransactionPage)
def get_transactions(
    customer_id: str,
    limit: str | None = None,
    offset: str | None = None,
    category: str | None = None,
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    min_amount: str | None = Query(default=None, alias="minAmount"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
) -> Any:
    """Return one filtered, sorted page of the customer's transactions."""

    _note_customer(customer_id)
    filters = build_transaction_filters(
        limit=limit,
        offset=offset,
        category=category,
        start_date=start_date,
        end_date=end_date,
        min_amount=min_amount,
        sort_by=sort_by,
    )
    return _unwrap(get_dashboard_service().search_transactions(filters))


@app.get("/customers/{customer_id}/goals", response_model=SpendingGoalsResponse)
def get_goals(customer_id: str) -> Any:
    _note_customer(customer_id)
    return _unwrap(get_dashboard_service().get_goals())


@app.get("/customers/{customer_id}/filters", response_model=FiltersResponse)
def get_filters(customer_id: str) -> Any:
    _note_customer(customer_id)
    return _unwrap(get_dashboard_service().get_filters())


@app.get("/customers/{customer_id}/reports/spending.pdf")
def get_spending_report_pdf(customer_id: str, period: str | None = None) -> Response:
    _note_customer(customer_id)
    resolved_period = parse_period(period)
    report_data = _unwrap(get_dashboard_service().build_spending_report(resolved_period))
    logger.info(
        "spending_report_requested customer_id=%s period=%s transactions=%s",
        customer_id,
        resolved_period.value,
        len(report_data.transactions),
    )

    pdf_bytes = generate_spending_report_pdf(report_data)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="spending-report-{resolved_period.value}.pdf"'},
    )
