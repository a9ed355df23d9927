"""Transactions repository adapters.

The dashboard serves a single customer whose ledger is a fixed snapshot
loaded at process start. Records are frozen models and the collection is
exposed as a tuple so concurrent requests can share it without copying.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from backend.repositories.category_utils import category_style
from shared.models import Transaction


class TransactionsRepository(Protocol):
    def list_transactions(self) -> tuple[Transaction, ...]:
        """Return every transaction in original insertion order."""


_SEED_ROWS: tuple[tuple[str, str, str, str, str, str, str], ...] = (
    ("txn_001", "2024-09-16T14:30:00Z", "Pick n Pay", "Groceries", "245.80", "Weekly groceries", "Credit Card"),
    ("txn_002", "2024-09-15T10:15:00Z", "Netflix", "Entertainment", "199.00", "Monthly subscription", "Debit Order"),
    ("txn_003", "2024-09-14T08:45:00Z", "Uber", "Transportation", "85.50", "Ride to office", "Credit Card"),
    ("txn_004", "2024-09-13T19:20:00Z", "Nando's", "Dining", "165.00", "Dinner with friends", "Credit Card"),
    ("txn_005", "2024-09-12T11:00:00Z", "Woolworths", "Groceries", "320.45", "Organic produce", "Debit Card"),
    ("txn_006", "2024-09-11T16:30:00Z", "City Power", "Utilities", "458.70", "Electricity prepaid", "EFT"),
    ("txn_007", "2024-09-10T09:15:00Z", "Engen", "Transportation", "450.00", "Fuel", "Credit Card"),
    ("txn_008", "2024-09-09T13:00:00Z", "Takealot", "Shopping", "289.90", "Bluetooth headphones", "Credit Card"),
    ("txn_009", "2024-09-08T20:00:00Z", "Ster-Kinekor", "Entertainment", "180.00", "Movie tickets x2", "Credit Card"),
    ("txn_010", "2024-09-07T12:30:00Z", "Checkers", "Groceries", "198.35", "Lunch supplies", "Debit Card"),
    ("txn_011", "2024-09-06T07:45:00Z", "Bolt", "Transportation", "62.00", "Morning commute", "Credit Card"),
    ("txn_012", "2024-09-05T18:15:00Z", "Ocean Basket", "Dining", "210.50", "Seafood dinner", "Credit Card"),
    ("txn_013", "2024-09-04T10:00:00Z", "Spotify", "Entertainment", "79.99", "Premium subscription", "Debit Order"),
    ("txn_014", "2024-09-03T14:20:00Z", "Mr Price", "Shopping", "160.90", "New t-shirts", "Credit Card"),
    ("txn_015", "2024-09-02T09:00:00Z", "Uber", "Transportation", "95.00", "Airport transfer", "Credit Card"),
    ("txn_016", "2024-09-01T15:30:00Z", "Spar", "Groceries", "175.60", "Quick shop", "Debit Card"),
    ("txn_017", "2024-08-31T11:45:00Z", "Mugg & Bean", "Dining", "89.00", "Coffee and pastry", "Credit Card"),
    ("txn_018", "2024-08-30T17:00:00Z", "DStv", "Entertainment", "349.00", "Monthly subscription", "Debit Order"),
    ("txn_019", "2024-08-29T08:30:00Z", "Gautrain", "Transportation", "88.00", "Return trip", "Travel Card"),
    ("txn_020", "2024-08-28T13:15:00Z", "Pick n Pay", "Groceries", "410.20", "Monthly groceries", "Credit Card"),
    ("txn_021", "2024-08-27T19:45:00Z", "Vida e Caffè", "Dining", "55.80", "Coffee to go", "Debit Card"),
    ("txn_022", "2024-08-26T10:30:00Z", "Cotton On", "Shopping", "320.00", "Winter jackets", "Credit Card"),
    ("txn_023", "2024-08-25T16:00:00Z", "Showmax", "Entertainment", "99.00", "Streaming subscription", "Debit Order"),
    ("txn_024", "2024-08-24T07:15:00Z", "Shell", "Transportation", "380.00", "Fuel top-up", "Credit Card"),
    ("txn_025", "2024-08-23T12:00:00Z", "Woolworths", "Groceries", "265.90", "Ready meals", "Credit Card"),
    ("txn_026", "2024-08-22T18:30:00Z", "Col'Cacchio", "Dining", "195.00", "Pizza night", "Credit Card"),
    ("txn_027", "2024-08-21T09:45:00Z", "Uber", "Transportation", "72.00", "Short trip", "Credit Card"),
    ("txn_028", "2024-08-20T14:00:00Z", "Game", "Shopping", "599.00", "Desk lamp", "Credit Card"),
    ("txn_029", "2024-08-19T11:30:00Z", "Checkers", "Groceries", "145.80", "Snacks and drinks", "Debit Card"),
    ("txn_030", "2024-08-18T20:15:00Z", "iStore", "Shopping", "1299.00", "AirPods case", "Credit Card"),
)


def _build_transaction(row: tuple[str, str, str, str, str, str, str]) -> Transaction:
    transaction_id, booked_at, merchant, category, amount, description, payment_method = row
    style = category_style(category)
    return Transaction(
        id=transaction_id,
        date=booked_at,
        merchant=merchant,
        category=category,
        amount=Decimal(amount),
        description=description,
        payment_method=payment_method,
        icon=style.icon,
        category_color=style.color,
    )


class InMemoryTransactionsRepository:
    """In-memory ledger seeded with the demo customer's transactions."""

    def __init__(self, transactions: list[Transaction] | tuple[Transaction, ...] | None = None) -> None:
        if transactions is None:
            self._seed: tuple[Transaction, ...] = tuple(_build_transaction(row) for row in _SEED_ROWS)
        else:
            self._seed = tuple(transactions)

    def list_transactions(self) -> tuple[Transaction, ...]:
        return self._seed
