"""
Field-level normalization.
Cleans amounts, resolves DD/MM/YYYY dates, and turns raw candidates into
dated transactions.
"""
import datetime as dt
from typing import Any, Iterable, List, Optional, Tuple

import pandas as pd

from core.logger import setup_logger
from core.schema import RawTransaction, Transaction

logger = setup_logger(__name__)


def clean_amount(value: Any) -> float:
    """
    Clean and normalize a transaction amount.
    Removes whitespace and thousands separators, and converts to float.

    Args:
        value: Raw amount value (string or number)

    Returns:
        Parsed amount, or 0.0 when empty or unparseable
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return 0.0

    amount_str = "".join(str(value).replace(",", "").split())
    if not amount_str:
        return 0.0

    try:
        result = float(amount_str)
    except ValueError:
        logger.debug(f"Failed to parse amount: '{value}', using 0")
        return 0.0

    # float() accepts "nan" and "inf"; neither is a real amount
    if result != result or result in (float("inf"), float("-inf")):
        logger.debug(f"Non-finite amount: '{value}', using 0")
        return 0.0
    return result


def parse_date(value: Any) -> Optional[dt.date]:
    """
    Parse a day/month/year date string.

    Args:
        value: Date string such as "15/03/2023"

    Returns:
        Naive calendar date, or None when the fields are missing,
        non-numeric, or out of range
    """
    if not isinstance(value, str):
        return None

    parts = [part.strip() for part in value.strip().split("/")]
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return None

    day, month, year = (int(part) for part in parts)
    try:
        return dt.date(year, month, day)
    except ValueError:
        return None


def resolve_transaction(raw: RawTransaction) -> Optional[Transaction]:
    """
    Resolve the textual date of a candidate.

    Args:
        raw: Parsed candidate

    Returns:
        Transaction with cumulative_amount 0, or None if the date is invalid
    """
    resolved = parse_date(raw.date)
    if resolved is None:
        return None
    return Transaction(
        date=resolved,
        name=raw.name,
        type=raw.type,
        status=raw.status,
        currency=raw.currency,
        amount=raw.amount,
    )


def resolve_transactions(raws: Iterable[RawTransaction]) -> Tuple[List[Transaction], int]:
    """
    Resolve dates for a sequence of candidates, keeping input order.

    Rows with an unusable date are dropped so they never reach sorting or
    range comparisons.

    Returns:
        Tuple of (resolved transactions, number of rows skipped)
    """
    resolved: List[Transaction] = []
    skipped = 0
    for raw in raws:
        txn = resolve_transaction(raw)
        if txn is None:
            skipped += 1
            logger.debug(f"Skipping row with invalid date: '{raw.date}' ({raw.name or 'no name'})")
            continue
        resolved.append(txn)

    if skipped:
        logger.warning(f"Skipped {skipped} rows with unparseable dates")

    return resolved, skipped
