"""Lenient parsing of dashboard query-string values.

Malformed or missing values never reject a request: each parser falls back
to the documented default instead.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from shared import config
from shared.models import DEFAULT_PERIOD, Period, TransactionFilters, TransactionSortBy


logger = logging.getLogger(__name__)

_TREND_MONTHS_MAX = 12


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_optional_text(raw: str | None) -> str | None:
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def parse_category(raw: str | None) -> str | None:
    # Matched exactly against the ledger, so surrounding whitespace is kept.
    return raw or None


def parse_limit(raw: str | None) -> int:
    """Return the requested page size.

    Blank, non-numeric and zero values use the configured default. Negative
    values pass through and produce an empty page.
    """

    value = _parse_int(raw)
    if value is None or value == 0:
        return config.default_page_limit()
    return value


def parse_offset(raw: str | None) -> int:
    value = _parse_int(raw)
    if value is None or value < 0:
        return 0
    return value


def parse_min_amount(raw: str | None) -> Decimal | None:
    value = parse_optional_text(raw)
    if value is None:
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        logger.debug("min_amount_ignored raw=%s", raw)
        return None
    return amount if amount.is_finite() else None


def parse_sort_by(raw: str | None) -> TransactionSortBy:
    value = parse_optional_text(raw)
    if value is None:
        return TransactionSortBy.DATE_DESC
    try:
        return TransactionSortBy(value)
    except ValueError:
        logger.debug("sort_by_fallback raw=%s", raw)
        return TransactionSortBy.DATE_DESC


def parse_period(raw: str | None) -> Period:
    """Return the requested period bucket; unknown values map to 30 days."""

    value = parse_optional_text(raw)
    if value is None:
        return DEFAULT_PERIOD
    try:
        return Period(value)
    except ValueError:
        logger.debug("period_fallback raw=%s", raw)
        return DEFAULT_PERIOD


def parse_months(raw: str | None) -> int | None:
    value = _parse_int(raw)
    if value is None or not 1 <= value <= _TREND_MONTHS_MAX:
        return None
    return value


def build_transaction_filters(
    *,
    limit: str | None = None,
    offset: str | None = None,
    category: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    min_amount: str | None = None,
    sort_by: str | None = None,
) -> TransactionFilters:
    return TransactionFilters(
        limit=parse_limit(limit),
        offset=parse_offset(offset),
        category=parse_category(category),
        start_date=parse_optional_text(start_date),
        end_date=parse_optional_text(end_date),
        min_amount=parse_min_amount(min_amount),
        sort_by=parse_sort_by(sort_by),
    )
