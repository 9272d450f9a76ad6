"""
Chronological ordering, running totals and summary statistics.
"""
from typing import Iterable, List, Sequence, Tuple

from core.schema import SummaryStats, Transaction


def sort_chronologically(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Ascending by date; rows on the same day keep their input order."""
    return sorted(transactions, key=lambda txn: txn.date)


def with_running_totals(ordered: Iterable[Transaction]) -> List[Transaction]:
    """
    Copy each transaction with cumulative_amount set to the running sum
    including its own amount. Input objects are left untouched.
    """
    running = 0.0
    result = []
    for txn in ordered:
        running += txn.amount
        result.append(txn.model_copy(update={"cumulative_amount": running}))
    return result


def summarize(ordered: Sequence[Transaction]) -> SummaryStats:
    """
    Compute incoming, outgoing and net totals for an ordered view.

    Args:
        ordered: Output of with_running_totals

    Returns:
        SummaryStats; all zero for an empty view
    """
    total_incoming = sum(txn.amount for txn in ordered if txn.amount > 0)
    total_outgoing = abs(sum(txn.amount for txn in ordered if txn.amount < 0))
    net_amount = ordered[-1].cumulative_amount if ordered else 0.0

    return SummaryStats(
        total_incoming=total_incoming,
        total_outgoing=total_outgoing,
        net_amount=net_amount,
    )


def aggregate(transactions: Iterable[Transaction]) -> Tuple[List[Transaction], SummaryStats]:
    """
    Sort, accumulate and summarize a filtered set.

    Returns:
        Tuple of (ordered transactions with running totals, SummaryStats)
    """
    ordered = with_running_totals(sort_chronologically(transactions))
    return ordered, summarize(ordered)
