"""Category display metadata shared by repositories."""

from __future__ import annotations

from shared.models import CategoryFilter


CATEGORY_CATALOG: tuple[CategoryFilter, ...] = (
    CategoryFilter(name="Groceries", color="#FF6B6B", icon="shopping-cart"),
    CategoryFilter(name="Entertainment", color="#4ECDC4", icon="film"),
    CategoryFilter(name="Transportation", color="#45B7D1", icon="car"),
    CategoryFilter(name="Dining", color="#F7DC6F", icon="utensils"),
    CategoryFilter(name="Shopping", color="#BB8FCE", icon="shopping-bag"),
    CategoryFilter(name="Utilities", color="#85C1E9", icon="zap"),
)

_CATALOG_BY_NAME = {category.name: category for category in CATEGORY_CATALOG}


def category_style(name: str) -> CategoryFilter:
    """Return color and icon for a known category name."""
    try:
        return _CATALOG_BY_NAME[name]
    except KeyError as exc:
        raise ValueError(f"Unknown category: {name}") from exc
