"""Tests for lenient query-string parsing."""

from __future__ import annotations

from decimal import Decimal

import pytest

from api.query_params import (
    build_transaction_filters,
    parse_category,
    parse_limit,
    parse_min_amount,
    parse_months,
    parse_offset,
    parse_period,
    parse_sort_by,
)
from shared.models import Period, TransactionSortBy


@pytest.mark.parametrize("raw", [None, "", "abc", "0", "2.5"])
def test_invalid_limit_falls_back_to_default(raw, monkeypatch) -> None:
    monkeypatch.delenv("DASHBOARD_DEFAULT_PAGE_LIMIT", raising=False)

    assert parse_limit(raw) == 20


def test_limit_default_follows_config(monkeypatch) -> None:
    monkeypatch.setenv("DASHBOARD_DEFAULT_PAGE_LIMIT", "10")

    assert parse_limit(None) == 10
    assert parse_limit(" 7 ") == 7


def test_negative_limit_is_kept_for_an_empty_page() -> None:
    assert parse_limit("-4") == -4
    assert parse_limit(" -1 ") == -1


@pytest.mark.parametrize(("raw", "expected"), [(None, 0), ("x", 0), ("-1", 0), ("12", 12)])
def test_offset_parsing(raw, expected) -> None:
    assert parse_offset(raw) == expected


@pytest.mark.parametrize(("raw", "expected"), [(None, None), ("", None), ("abc", None), ("NaN", None), ("300", Decimal("300"))])
def test_min_amount_parsing(raw, expected) -> None:
    assert parse_min_amount(raw) == expected


def test_sort_by_unknown_value_defaults_to_newest_first() -> None:
    assert parse_sort_by("price_desc") == TransactionSortBy.DATE_DESC
    assert parse_sort_by(None) == TransactionSortBy.DATE_DESC
    assert parse_sort_by("amount_asc") == TransactionSortBy.AMOUNT_ASC


def test_period_unknown_value_falls_back_to_30_days() -> None:
    assert parse_period("2w") == Period.LAST_30_DAYS
    assert parse_period(None) == Period.LAST_30_DAYS
    assert parse_period("90d") == Period.LAST_90_DAYS


@pytest.mark.parametrize(("raw", "expected"), [(None, None), ("0", None), ("13", None), ("six", None), ("6", 6), ("12", 12)])
def test_months_parsing(raw, expected) -> None:
    assert parse_months(raw) == expected


def test_build_transaction_filters_blanks_become_none(monkeypatch) -> None:
    monkeypatch.delenv("DASHBOARD_DEFAULT_PAGE_LIMIT", raising=False)

    filters = build_transaction_filters(
        limit="5",
        offset="bad",
        category="",
        start_date="2024-09-01",
        end_date="",
        min_amount="99.5",
        sort_by="amount_desc",
    )

    assert filters.limit == 5
    assert filters.offset == 0
    assert filters.category is None
    assert filters.start_date == "2024-09-01"
    assert filters.end_date is None
    assert filters.min_amount == Decimal("99.5")
    assert filters.sort_by == TransactionSortBy.AMOUNT_DESC


@pytest.mark.parametrize(("raw", "expected"), [(None, None), ("", None), ("Groceries", "Groceries"), (" Groceries", " Groceries")])
def test_category_is_passed_through_unstripped(raw, expected) -> None:
    assert parse_category(raw) == expected
