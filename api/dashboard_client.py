"""HTTP client for the dashboard API with a memoized request cache."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from threading import Lock
from typing import Any
from urllib.error import HTTPError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from shared import config
from shared.models import (
    CustomerProfile,
    FiltersResponse,
    SpendingByCategory,
    SpendingGoalsResponse,
    SpendingSummary,
    SpendingTrends,
    TransactionFilters,
    TransactionPage,
)


logger = logging.getLogger(__name__)

CacheKey = tuple[str, str]

DEFAULT_CACHE_MAX_ENTRIES = 128


def canonical_params(params: Mapping[str, object] | None) -> str:
    """Serialize query params so equal queries always produce the same key.

    ``None`` values are dropped and keys are sorted, so ``{"a": 1, "b": None}``
    and ``{"a": 1}`` share a cache entry.
    """

    cleaned = {key: value for key, value in (params or {}).items() if value is not None}
    return json.dumps(cleaned, sort_keys=True, separators=(",", ":"), default=str)


class RequestCache:
    """Memoize fetch results keyed by ``(path, canonical params)``.

    A changed parameter set is a new key and is always fetched, which is what
    revalidates a view when its filters change. At most ``max_entries`` results
    are kept; the oldest insertion is evicted first.
    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: dict[CacheKey, Any] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_fetch(
        self,
        path: str,
        params: Mapping[str, object] | None,
        fetch: Callable[[], Any],
    ) -> Any:
        key = (path, canonical_params(params))
        with self._lock:
            if key in self._entries:
                return self._entries[key]

        value = fetch()
        with self._lock:
            if key not in self._entries:
                self._entries[key] = value
                while len(self._entries) > self.max_entries:
                    evicted = next(iter(self._entries))
                    del self._entries[evicted]
                    logger.debug("request_cache_evicted path=%s", evicted[0])
            return self._entries[key]

    def invalidate(self, path: str | None = None) -> int:
        """Drop cached entries for ``path`` (or all) and return how many were removed."""

        with self._lock:
            if path is None:
                removed = len(self._entries)
                self._entries.clear()
            else:
                stale_keys = [key for key in self._entries if key[0] == path]
                for key in stale_keys:
                    del self._entries[key]
                removed = len(stale_keys)
        logger.debug("request_cache_invalidated path=%s removed=%s", path, removed)
        return removed


class DashboardClientError(RuntimeError):
    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Dashboard request failed with status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class DashboardClient:
    """Read-only client for one customer's dashboard endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        customer_id: str | None = None,
        cache: RequestCache | None = None,
    ) -> None:
        self.base_url = (base_url or config.api_url()).rstrip("/")
        self.customer_id = customer_id or config.customer_id()
        self.cache = cache if cache is not None else RequestCache()

    def _get_json(self, path: str, params: Mapping[str, object] | None = None) -> Any:
        def _fetch() -> Any:
            cleaned = {key: value for key, value in (params or {}).items() if value is not None}
            url = f"{self.base_url}{path}"
            if cleaned:
                url = f"{url}?{urlencode(cleaned)}"
            request = Request(url=url, headers={"Accept": "application/json"}, method="GET")
            logger.debug("dashboard_request url=%s", url)
            try:
                with urlopen(request) as response:  # noqa: S310 - URL comes from trusted env config
                    return json.loads(response.read().decode("utf-8"))
            except HTTPError as exc:
                body = exc.read().decode("utf-8", errors="replace")[:500]
                raise DashboardClientError(exc.code, body) from exc

        return self.cache.get_or_fetch(path, params, _fetch)

    def _customer_path(self, suffix: str) -> str:
        return f"/customers/{quote(self.customer_id, safe='')}/{suffix}"

    def get_profile(self) -> CustomerProfile:
        return CustomerProfile.model_validate(self._get_json(self._customer_path("profile")))

    def get_spending_summary(self, period: str | None = None) -> SpendingSummary:
        payload = self._get_json(self._customer_path("spending/summary"), {"period": period})
        return SpendingSummary.model_validate(payload)

    def get_spending_by_category(self, period: str | None = None) -> SpendingByCategory:
        payload = self._get_json(self._customer_path("spending/categories"), {"period": period})
        return SpendingByCategory.model_validate(payload)

    def get_spending_trends(self, months: int | None = None) -> SpendingTrends:
        payload = self._get_json(self._customer_path("spending/trends"), {"months": months})
        return SpendingTrends.model_validate(payload)

    def get_transactions(self, filters: TransactionFilters | None = None) -> TransactionPage:
        query = (filters or TransactionFilters()).model_dump(mode="json", by_alias=True, exclude_none=True)
        payload = self._get_json(self._customer_path("transactions"), query)
        return TransactionPage.model_validate(payload)

    def get_goals(self) -> SpendingGoalsResponse:
        return SpendingGoalsResponse.model_validate(self._get_json(self._customer_path("goals")))

    def get_filters(self) -> FiltersResponse:
        return FiltersResponse.model_validate(self._get_json(self._customer_path("filters")))
