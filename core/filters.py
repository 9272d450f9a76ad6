"""
Inclusion and selection filters.

Inclusion decides whether a row is genuine merchant activity (completed,
non-zero, named, and not an authorization, FX or internal transfer entry).
Selection narrows by merchant and by an inclusive day range. Both are
per-row predicates, so the order in which they are applied does not change
the result.
"""
import datetime as dt
from typing import Iterable, List, Optional, Sequence, Union

from core.logger import setup_logger
from core.schema import (
    AllMerchants,
    MerchantSelection,
    RawTransaction,
    Transaction,
    ViewFilters,
)

logger = setup_logger(__name__)

COMPLETED_STATUS = "Completed"

# Case-sensitive phrases; any match in the type field excludes the row
EXCLUDED_TYPE_PHRASES = (
    "Currency Conversion",
    "General Authorization",
    "General Card Deposit",
    "Bank Deposit to PP Account",
)

DateBound = Optional[Union[dt.datetime, dt.date]]


def is_included(txn: Union[Transaction, RawTransaction]) -> bool:
    """Return True if the row counts as real economic activity."""
    if txn.status != COMPLETED_STATUS:
        return False
    if txn.amount == 0:
        return False
    if txn.name == "":
        return False
    return not any(phrase in txn.type for phrase in EXCLUDED_TYPE_PHRASES)


def apply_inclusion(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Keep only included rows, preserving order."""
    return [txn for txn in transactions if is_included(txn)]


def merchant_universe(raws: Iterable[Union[RawTransaction, Transaction]]) -> List[str]:
    """
    Distinct non-empty names across everything uploaded, in first-seen order.

    Computed from raw rows so the list does not shrink when rows are
    excluded by the inclusion filter.
    """
    seen = {}
    for raw in raws:
        if raw.name and raw.name not in seen:
            seen[raw.name] = None
    return list(seen)


def matches_merchant(txn: Transaction, selection: MerchantSelection) -> bool:
    if isinstance(selection, AllMerchants):
        return True
    return txn.name in selection.names


def start_of_day(bound: Union[dt.datetime, dt.date]) -> dt.datetime:
    day = bound.date() if isinstance(bound, dt.datetime) else bound
    return dt.datetime.combine(day, dt.time.min)


def end_of_day(bound: Union[dt.datetime, dt.date]) -> dt.datetime:
    day = bound.date() if isinstance(bound, dt.datetime) else bound
    return dt.datetime.combine(day, dt.time.max)


def matches_date_range(txn: Transaction, start_date: DateBound = None, end_date: DateBound = None) -> bool:
    """
    Check the transaction falls inside [start of start_date, end of end_date].

    A missing bound leaves that side open.
    """
    moment = dt.datetime.combine(txn.date, dt.time.min)
    if start_date is not None and moment < start_of_day(start_date):
        return False
    if end_date is not None and moment > end_of_day(end_date):
        return False
    return True


def matches_selection(txn: Transaction, filters: ViewFilters) -> bool:
    return matches_merchant(txn, filters.merchants) and matches_date_range(
        txn, filters.start_date, filters.end_date
    )


def apply_selection(transactions: Sequence[Transaction], filters: ViewFilters) -> List[Transaction]:
    """
    Keep rows matching the merchant selection and date range, preserving order.

    Args:
        transactions: Dated transactions
        filters: Active merchant selection and date bounds

    Returns:
        Matching transactions
    """
    selected = [txn for txn in transactions if matches_selection(txn, filters)]
    logger.debug(f"Selection kept {len(selected)} of {len(transactions)} transactions")
    return selected
