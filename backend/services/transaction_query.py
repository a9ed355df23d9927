"""Filter, sort and paginate the transactions ledger."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from shared.models import Pagination, Transaction, TransactionFilters, TransactionPage, TransactionSortBy


logger = logging.getLogger(__name__)


def _matches(transaction: Transaction, filters: TransactionFilters) -> bool:
    # ISO-8601 strings are zero-padded, so string order is chronological order.
    if filters.category and transaction.category != filters.category:
        return False
    if filters.start_date and transaction.date < filters.start_date:
        return False
    if filters.end_date and transaction.date > filters.end_date:
        return False
    if filters.min_amount is not None and transaction.amount < filters.min_amount:
        return False
    return True


def _sort(transactions: list[Transaction], sort_by: TransactionSortBy) -> list[Transaction]:
    # sorted() is stable for reverse=True as well: ties keep insertion order.
    if sort_by == TransactionSortBy.DATE_ASC:
        return sorted(transactions, key=lambda row: row.date)
    if sort_by == TransactionSortBy.AMOUNT_DESC:
        return sorted(transactions, key=lambda row: row.amount, reverse=True)
    if sort_by == TransactionSortBy.AMOUNT_ASC:
        return sorted(transactions, key=lambda row: row.amount)
    return sorted(transactions, key=lambda row: row.date, reverse=True)


def query_transactions(
    transactions: Iterable[Transaction],
    filters: TransactionFilters,
) -> TransactionPage:
    """Return one page of transactions matching all filters.

    Predicates are combined with AND. ``total`` counts every match before
    pagination. An offset past the end or a limit of zero or less yields
    an empty page rather than an error.
    """

    matched = [row for row in transactions if _matches(row, filters)]
    ordered = _sort(matched, filters.sort_by)
    total = len(ordered)
    # A non-positive limit is an empty page, never a Python negative slice.
    page_size = max(filters.limit, 0)
    page = ordered[filters.offset : filters.offset + page_size] if page_size else []

    logger.debug(
        "transactions_query_executed sort_by=%s total=%s returned=%s offset=%s",
        filters.sort_by.value,
        total,
        len(page),
        filters.offset,
    )
    return TransactionPage(
        transactions=page,
        pagination=Pagination(
            total=total,
            limit=filters.limit,
            offset=filters.offset,
            has_more=filters.offset + page_size < total,
        ),
    )
