"""
View computation: raw candidates and filters in, ordered totals out.
"""
from typing import Optional, Sequence

from core.aggregate import aggregate
from core.filters import apply_inclusion, apply_selection
from core.logger import setup_logger
from core.normalize import resolve_transactions
from core.schema import RawTransaction, TransactionView, ViewFilters

logger = setup_logger(__name__)


def compute_view(
    raw_transactions: Sequence[RawTransaction],
    filters: Optional[ViewFilters] = None,
) -> TransactionView:
    """
    Derive the ordered, filtered view with running totals.

    Pure function: call it again whenever the raw data or filters change.

    Args:
        raw_transactions: Every candidate from the current upload batch
        filters: Merchant selection and date range (defaults to no filtering)

    Returns:
        TransactionView with cumulative amounts and summary statistics
    """
    filters = filters or ViewFilters()

    resolved, skipped = resolve_transactions(raw_transactions)
    included = apply_inclusion(resolved)
    selected = apply_selection(included, filters)
    ordered, stats = aggregate(selected)

    logger.debug(
        f"View: {len(raw_transactions)} raw -> {len(resolved)} dated -> "
        f"{len(included)} included -> {len(selected)} selected"
    )

    return TransactionView(transactions=ordered, stats=stats, skipped_invalid_dates=skipped)
