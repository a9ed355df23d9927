"""Configuration helpers for environment variables."""

from __future__ import annotations

import os
import logging

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


_DEFAULT_PAGE_LIMIT = 20
_DEFAULT_CUSTOMER_ID = "12345"
_DEFAULT_API_URL = "http://localhost:8000"


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def cors_allow_origins() -> list[str]:
    """Return CORS allowed origins from env with safe environment defaults."""
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    if parsed_origins:
        return parsed_origins

    if app_env().strip().lower() in {"dev", "local"}:
        return ["http://localhost:3000", "http://127.0.0.1:3000"]

    ui_origin = (get_env("UI_ORIGIN", "") or "").strip()
    if ui_origin:
        return [ui_origin]

    logger.warning(
        "cors_allow_origins_empty_in_prod app_env=%s; define CORS_ALLOW_ORIGINS or UI_ORIGIN",
        app_env(),
    )

    return []


def default_page_limit() -> int:
    """Return the transactions page size used when the request gives none."""
    raw_value = (get_env("DASHBOARD_DEFAULT_PAGE_LIMIT", "") or "").strip()
    if not raw_value:
        return _DEFAULT_PAGE_LIMIT

    try:
        value = int(raw_value)
    except ValueError:
        logger.warning("default_page_limit_invalid value=%s", raw_value)
        return _DEFAULT_PAGE_LIMIT

    return value if value > 0 else _DEFAULT_PAGE_LIMIT


def customer_id() -> str:
    """Return the id of the single customer served by the dashboard."""
    return (get_env("DASHBOARD_CUSTOMER_ID", _DEFAULT_CUSTOMER_ID) or "").strip() or _DEFAULT_CUSTOMER_ID


def api_url() -> str:
    """Return the dashboard API base URL used by HTTP clients."""
    raw_value = (get_env("DASHBOARD_API_URL", _DEFAULT_API_URL) or "").strip() or _DEFAULT_API_URL
    return raw_value.rstrip("/")
