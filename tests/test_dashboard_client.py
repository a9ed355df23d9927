"""Tests for the dashboard HTTP client and its request cache."""

from __future__ import annotations

import io
import json
from urllib.error import HTTPError
from urllib.parse import parse_qs, urlsplit

import pytest

import api.dashboard_client as dashboard_client
from api.dashboard_client import DashboardClient, DashboardClientError, RequestCache, canonical_params
from shared.models import TransactionFilters, TransactionSortBy


class _Response:
    def __init__(self, payload: object) -> None:
        self._body = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "_Response":
        return self

    def __exit__(self, *_exc) -> None:
        return None


def _install_urlopen(monkeypatch, payload: object) -> list[str]:
    calls: list[str] = []

    def _fake_urlopen(request):
        calls.append(request.full_url)
        return _Response(payload)

    monkeypatch.setattr(dashboard_client, "urlopen", _fake_urlopen)
    return calls


_PAGE_PAYLOAD = {
    "transactions": [
        {
            "id": "txn_020",
            "date": "2024-08-28T13:15:00Z",
            "merchant": "Pick n Pay",
            "category": "Groceries",
            "amount": 410.2,
            "description": "Monthly groceries",
            "paymentMethod": "Credit Card",
            "icon": "shopping-cart",
            "categoryColor": "#FF6B6B",
        }
    ],
    "pagination": {"total": 7, "limit": 1, "offset": 0, "hasMore": True},
}


def test_canonical_params_ignores_order_and_none_values() -> None:
    assert canonical_params({"b": 2, "a": 1, "c": None}) == canonical_params({"a": 1, "b": 2})
    assert canonical_params(None) == "{}"
    assert canonical_params({"a": 1}) != canonical_params({"a": 2})


def test_request_cache_memoizes_per_path_and_params() -> None:
    cache = RequestCache()
    fetches: list[str] = []

    def _fetch(tag: str):
        def _inner():
            fetches.append(tag)
            return tag

        return _inner

    assert cache.get_or_fetch("/summary", {"period": "7d"}, _fetch("first")) == "first"
    assert cache.get_or_fetch("/summary", {"period": "7d"}, _fetch("second")) == "first"
    assert cache.get_or_fetch("/summary", {"period": "30d"}, _fetch("third")) == "third"
    assert cache.get_or_fetch("/goals", None, _fetch("fourth")) == "fourth"

    assert fetches == ["first", "third", "fourth"]
    assert len(cache) == 3


def test_request_cache_invalidate_by_path_and_all() -> None:
    cache = RequestCache()
    cache.get_or_fetch("/summary", {"period": "7d"}, lambda: 1)
    cache.get_or_fetch("/summary", {"period": "1y"}, lambda: 2)
    cache.get_or_fetch("/goals", None, lambda: 3)

    assert cache.invalidate("/summary") == 2
    assert len(cache) == 1
    assert cache.invalidate() == 1
    assert len(cache) == 0


def test_request_cache_evicts_oldest_entry_beyond_bound() -> None:
    cache = RequestCache(max_entries=2)
    fetches: list[str] = []

    def _fetch(tag: str):
        def _inner():
            fetches.append(tag)
            return tag

        return _inner

    cache.get_or_fetch("/transactions", {"offset": 0}, _fetch("page-1"))
    cache.get_or_fetch("/transactions", {"offset": 20}, _fetch("page-2"))
    cache.get_or_fetch("/transactions", {"offset": 40}, _fetch("page-3"))

    assert len(cache) == 2
    assert cache.get_or_fetch("/transactions", {"offset": 40}, _fetch("again-3")) == "page-3"
    assert cache.get_or_fetch("/transactions", {"offset": 0}, _fetch("again-1")) == "again-1"
    assert fetches == ["page-1", "page-2", "page-3", "again-1"]
    assert len(cache) == 2


def test_request_cache_rejects_non_positive_bound() -> None:
    with pytest.raises(ValueError):
        RequestCache(max_entries=0)


def test_request_cache_does_not_store_failed_fetches() -> None:
    cache = RequestCache()

    def _boom():
        raise RuntimeError("down")

    with pytest.raises(RuntimeError):
        cache.get_or_fetch("/goals", None, _boom)

    assert len(cache) == 0
    assert cache.get_or_fetch("/goals", None, lambda: "ok") == "ok"


def test_get_transactions_serializes_filters_and_caches(monkeypatch) -> None:
    calls = _install_urlopen(monkeypatch, _PAGE_PAYLOAD)
    client = DashboardClient(base_url="http://api.test/", customer_id="12345")
    filters = TransactionFilters(category="Groceries", sort_by=TransactionSortBy.AMOUNT_DESC, limit=1)

    page = client.get_transactions(filters)
    again = client.get_transactions(filters)

    assert page == again
    assert len(calls) == 1
    url = urlsplit(calls[0])
    assert url.path == "/customers/12345/transactions"
    assert parse_qs(url.query) == {
        "limit": ["1"],
        "offset": ["0"],
        "category": ["Groceries"],
        "sortBy": ["amount_desc"],
    }
    assert page.transactions[0].id == "txn_020"
    assert float(page.transactions[0].amount) == 410.2
    assert page.pagination.has_more is True


def test_changed_params_trigger_a_new_request(monkeypatch) -> None:
    calls = _install_urlopen(monkeypatch, {"trends": []})
    client = DashboardClient(base_url="http://api.test", customer_id="12345")

    client.get_spending_trends()
    client.get_spending_trends(months=6)
    client.get_spending_trends(months=6)

    assert calls == [
        "http://api.test/customers/12345/spending/trends",
        "http://api.test/customers/12345/spending/trends?months=6",
    ]


def test_http_error_raises_client_error(monkeypatch) -> None:
    def _fake_urlopen(request):
        raise HTTPError(request.full_url, 400, "Bad Request", hdrs=None, fp=io.BytesIO(b'{"detail":"goals unavailable"}'))

    monkeypatch.setattr(dashboard_client, "urlopen", _fake_urlopen)
    client = DashboardClient(base_url="http://api.test", customer_id="12345")

    with pytest.raises(DashboardClientError) as exc_info:
        client.get_goals()

    assert exc_info.value.status_code == 400
    assert "goals unavailable" in exc_info.value.body


def test_client_defaults_come_from_config(monkeypatch) -> None:
    monkeypatch.setenv("DASHBOARD_API_URL", "https://dashboard.example.com/")
    monkeypatch.setenv("DASHBOARD_CUSTOMER_ID", "999")

    client = DashboardClient()

    assert client.base_url == "https://dashboard.example.com"
    assert client.customer_id == "999"
