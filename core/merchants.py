"""
Merchant multi-select state transitions.

Selections are either the all-merchants sentinel or an explicit set of
names. Selecting every individual option collapses back to the sentinel,
so both spellings of "everything" behave and display the same way.
"""
from typing import Iterable, List, Sequence

from core.schema import ALL_MERCHANTS, AllMerchants, MerchantSelection, SpecificMerchants

ALL_LABEL = "All Merchants"
EMPTY_LABEL = "Select Merchants..."


def normalize_selection(names: Iterable[str], options: Sequence[str]) -> MerchantSelection:
    """Build a selection from explicit names, collapsing to all when complete."""
    chosen = frozenset(names)
    if options and set(options) <= chosen:
        return ALL_MERCHANTS
    return SpecificMerchants(names=chosen)


def is_all_selected(selection: MerchantSelection, options: Sequence[str]) -> bool:
    if isinstance(selection, AllMerchants):
        return True
    return bool(options) and set(options) <= selection.names


def is_indeterminate(selection: MerchantSelection, options: Sequence[str]) -> bool:
    """Some but not all options are selected."""
    if isinstance(selection, AllMerchants):
        return False
    return bool(selection.names) and not is_all_selected(selection, options)


def is_option_selected(selection: MerchantSelection, option: str) -> bool:
    if isinstance(selection, AllMerchants):
        return True
    return option in selection.names


def toggle_merchant(selection: MerchantSelection, option: str, options: Sequence[str]) -> MerchantSelection:
    """
    Flip one option on or off.

    Args:
        selection: Current selection
        option: Merchant name that was clicked
        options: Full merchant universe

    Returns:
        New selection (the input is not modified)
    """
    current = set(options) if isinstance(selection, AllMerchants) else set(selection.names)
    if option in current:
        current.discard(option)
    else:
        current.add(option)
    return normalize_selection(current, options)


def toggle_all(selection: MerchantSelection, options: Sequence[str]) -> MerchantSelection:
    """Select everything, or clear the selection if everything is already selected."""
    if is_all_selected(selection, options):
        return SpecificMerchants()
    return ALL_MERCHANTS


def display_text(selection: MerchantSelection, options: Sequence[str]) -> str:
    """Short summary shown on the closed dropdown."""
    if is_all_selected(selection, options):
        return ALL_LABEL
    if not selection.names:
        return EMPTY_LABEL
    if len(selection.names) == 1:
        return next(iter(selection.names))
    return f"{len(selection.names)} Merchants Selected"


def filter_options(options: Sequence[str], search_term: str) -> List[str]:
    """Case-insensitive substring search over the merchant list."""
    needle = search_term.lower()
    return [option for option in options if needle in option.lower()]
