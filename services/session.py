"""
Per-session dashboard state.

Holds the raw rows of the current upload batch and the active filters.
Both are replaced wholesale; every view is derived on demand through
compute_view.
"""
import datetime as dt
from typing import List, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError
from core.filters import merchant_universe
from core.logger import setup_logger
from core.merchants import display_text, normalize_selection, toggle_all, toggle_merchant
from core.pipeline import compute_view
from core.schema import ALL_MERCHANTS, MerchantSelection, RawTransaction, TransactionView, ViewFilters

logger = setup_logger(__name__)

DateBound = Optional[Union[dt.datetime, dt.date]]


class DashboardSession:
    """Caller-owned state for one dashboard user."""

    def __init__(self):
        self.raw_transactions: List[RawTransaction] = []
        self.filters = ViewFilters()

    @property
    def has_data(self) -> bool:
        return bool(self.raw_transactions)

    @property
    def merchants(self) -> List[str]:
        """Merchant universe of the current batch, before inclusion filtering."""
        return merchant_universe(self.raw_transactions)

    @property
    def merchant_selection(self) -> MerchantSelection:
        return self.filters.merchants

    def replace_transactions(self, raw_transactions: Sequence[RawTransaction]) -> None:
        """Swap in a new upload batch and reset all filters."""
        self.raw_transactions = list(raw_transactions)
        self.filters = ViewFilters()
        logger.info(f"Session now holds {len(self.raw_transactions)} raw transactions")

    def clear(self) -> None:
        self.replace_transactions([])

    def _update_filters(self, **changes) -> None:
        values = {
            "merchants": self.filters.merchants,
            "start_date": self.filters.start_date,
            "end_date": self.filters.end_date,
        }
        values.update(changes)
        try:
            self.filters = ViewFilters(**values)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid filter parameters",
                details={"changes": {k: str(v) for k, v in changes.items()}, "error": str(e)}
            )

    def select_merchants(self, names: Optional[Sequence[str]]) -> None:
        """Select explicit merchants, or all of them when names is None."""
        if names is None:
            selection = ALL_MERCHANTS
        else:
            selection = normalize_selection(names, self.merchants)
        self._update_filters(merchants=selection)

    def toggle_merchant(self, name: str) -> None:
        self._update_filters(merchants=toggle_merchant(self.filters.merchants, name, self.merchants))

    def toggle_all_merchants(self) -> None:
        self._update_filters(merchants=toggle_all(self.filters.merchants, self.merchants))

    def set_date_range(self, start_date: DateBound = None, end_date: DateBound = None) -> None:
        """
        Set both bounds at once; None leaves that side open.

        Raises:
            ValidationError: If start_date falls after end_date
        """
        self._update_filters(start_date=start_date, end_date=end_date)

    def merchant_label(self) -> str:
        return display_text(self.filters.merchants, self.merchants)

    def view(self) -> TransactionView:
        return compute_view(self.raw_transactions, self.filters)
