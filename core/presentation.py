"""
Chart and summary data for the dashboard front end.
Produces plain dicts and strings; rendering is left to the caller.
"""
import datetime as dt
from typing import Any, Dict, List, Literal, Optional, Sequence

from core.config import get_settings
from core.merchants import is_all_selected
from core.schema import AllMerchants, MerchantSelection, Transaction, TransactionView

ChartMode = Literal["category", "time"]

CHART_LABEL = "Cumulative Value"
BASE_TITLE = "Cumulative Transaction Value"

# Symbols as rendered for an en-CA audience; other codes fall back to "XXX "
CURRENCY_SYMBOLS = {
    "CAD": "$",
    "USD": "US$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AUD": "A$",
    "INR": "₹",
}


def format_date(value: dt.date) -> str:
    """Human label, e.g. "Mar 15, 2023"."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_currency(amount: float, currency: str) -> str:
    """
    Format an amount with two decimals in its own currency.

    Args:
        amount: Signed amount
        currency: Currency code of the transaction

    Returns:
        String such as "$1,234.56" or "-US$50.00"
    """
    code = (currency or "").strip().upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} " if code else "")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def selected_merchant_name(selection: MerchantSelection, options: Sequence[str]) -> Optional[str]:
    """The single merchant in focus, if exactly one is selected."""
    if isinstance(selection, AllMerchants) or is_all_selected(selection, options):
        return None
    if len(selection.names) == 1:
        return next(iter(selection.names))
    return None


def chart_title(selection: MerchantSelection, options: Sequence[str]) -> str:
    name = selected_merchant_name(selection, options)
    return f"{BASE_TITLE} - {name}" if name else BASE_TITLE


def transaction_caption(view: TransactionView, selection: MerchantSelection, options: Sequence[str]) -> str:
    caption = f"Showing {len(view.transactions)} completed transactions"
    name = selected_merchant_name(selection, options)
    return f"{caption} for {name}" if name else caption


def build_tooltip(txn: Transaction) -> List[str]:
    """Hover detail for one point, in the transaction's own currency."""
    return [
        f"Cumulative: {format_currency(txn.cumulative_amount, txn.currency)}",
        f"Transaction: {format_currency(txn.amount, txn.currency)}",
        f"Name: {txn.name}",
        f"Type: {txn.type}",
    ]


def point_metadata(txn: Transaction) -> Dict[str, Any]:
    return {
        "date": txn.date.isoformat(),
        "name": txn.name,
        "type": txn.type,
        "currency": txn.currency,
        "amount": txn.amount,
        "cumulative_amount": txn.cumulative_amount,
        "tooltip": build_tooltip(txn),
    }


def build_category_series(view: TransactionView) -> Dict[str, Any]:
    """One labeled point per transaction, labels are formatted dates."""
    return {
        "labels": [format_date(txn.date) for txn in view.transactions],
        "datasets": [
            {
                "label": CHART_LABEL,
                "data": [txn.cumulative_amount for txn in view.transactions],
            }
        ],
        "points": [point_metadata(txn) for txn in view.transactions],
    }


def build_time_series(view: TransactionView) -> Dict[str, Any]:
    """One {x, y} point per transaction for a real time axis."""
    return {
        "datasets": [
            {
                "label": CHART_LABEL,
                "data": [
                    {"x": txn.date.isoformat(), "y": txn.cumulative_amount}
                    for txn in view.transactions
                ],
            }
        ],
        "points": [point_metadata(txn) for txn in view.transactions],
    }


def build_summary(view: TransactionView, currency: Optional[str] = None) -> Dict[str, Any]:
    """
    Summary cards in the fixed display currency.

    Totals are not converted; the currency only labels them.
    """
    currency = currency or get_settings().display_currency
    stats = view.stats
    return {
        "currency": currency,
        "total_incoming": format_currency(stats.total_incoming, currency),
        "total_outgoing": format_currency(stats.total_outgoing, currency),
        "net_amount": format_currency(stats.net_amount, currency),
        "net_is_positive": stats.net_amount >= 0,
    }


def build_chart_payload(
    view: TransactionView,
    selection: MerchantSelection,
    options: Sequence[str],
    mode: ChartMode = "category",
    currency: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Everything the front end needs for one render.

    Args:
        view: Output of compute_view
        selection: Active merchant selection
        options: Merchant universe
        mode: "category" for evenly spaced points, "time" for a real time axis
        currency: Display currency override

    Returns:
        Dict with title, caption, axis titles, series and summary
    """
    if mode not in ("category", "time"):
        raise ValueError(f"Unknown chart mode: {mode}")

    currency = currency or get_settings().display_currency
    series = build_category_series(view) if mode == "category" else build_time_series(view)
    return {
        "mode": mode,
        "title": chart_title(selection, options),
        "caption": transaction_caption(view, selection, options),
        "y_axis_title": f"{CHART_LABEL} ({currency})",
        "x_axis_title": "Date",
        "series": series,
        "summary": build_summary(view, currency),
        "is_empty": view.is_empty,
    }
