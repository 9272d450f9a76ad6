"""
Tests for compute_view over parsed exports.
"""
import datetime as dt

import pytest

from core.filters import merchant_universe
from core.merchants import toggle_merchant
from core.parsing import parse_csv_text
from core.pipeline import compute_view
from core.schema import AllMerchants, SpecificMerchants, ViewFilters
from tests.helpers import csv_text, export_row

EIGHT_COLUMN_HEADER = ["Date", "Time", "TimeZone", "Name", "Type", "Status", "Currency", "Gross"]


def test_completed_row_only_scenario():
    """Test a pending row is dropped and totals come from the completed one."""
    text = csv_text(
        [
            ["01/01/2023", "", "", "Alice", "Payment", "Completed", "CAD", "100.00"],
            ["02/01/2023", "", "", "Alice", "Payment", "Pending", "CAD", "40.00"],
        ],
        header=EIGHT_COLUMN_HEADER,
    )

    view = compute_view(parse_csv_text(text))

    assert len(view.transactions) == 1
    assert view.stats.total_incoming == 100.0
    assert view.stats.net_amount == 100.0
    assert view.stats.total_outgoing == 0.0


def test_default_view(sample_rows):
    """Test the unfiltered view orders included rows and accumulates them."""
    view = compute_view(parse_csv_text(csv_text(sample_rows)))

    assert [txn.name for txn in view.transactions] == ["Coffee Shop", "Book Store", "Coffee Shop"]
    assert [txn.cumulative_amount for txn in view.transactions] == pytest.approx([-50.0, -1284.56, -1084.56])
    assert view.stats.total_incoming == pytest.approx(200.0)
    assert view.stats.total_outgoing == pytest.approx(1284.56)
    assert view.stats.net_amount == pytest.approx(-1084.56)
    assert view.skipped_invalid_dates == 0


def test_invalid_dates_are_skipped_and_counted(sample_rows):
    """Test rows with bad dates never enter the view."""
    rows = sample_rows + [export_row("99/99/2023", "Coffee Shop", "Payment", "Completed", "CAD", "5.00")]

    view = compute_view(parse_csv_text(csv_text(rows)))

    assert view.skipped_invalid_dates == 1
    assert len(view.transactions) == 3


def test_merchant_and_date_filters(sample_rows):
    """Test merchant and date range compose with the inclusion rules."""
    raws = parse_csv_text(csv_text(sample_rows))
    filters = ViewFilters(
        merchants=SpecificMerchants(names=frozenset({"Coffee Shop"})),
        start_date=dt.date(2023, 3, 16),
    )

    view = compute_view(raws, filters)

    assert [txn.amount for txn in view.transactions] == [200.0]
    assert view.transactions[0].cumulative_amount == 200.0
    assert view.stats.net_amount == 200.0


def test_empty_result_is_valid(sample_rows):
    """Test filtering everything away yields zero totals."""
    raws = parse_csv_text(csv_text(sample_rows))

    view = compute_view(raws, ViewFilters(start_date=dt.date(2030, 1, 1)))

    assert view.is_empty
    assert view.stats.net_amount == 0.0
    assert view.stats.total_incoming == 0.0
    assert view.stats.total_outgoing == 0.0


def test_refilter_then_revert_is_stable(sample_rows):
    """Test reverting filters reproduces the original view exactly."""
    raws = parse_csv_text(csv_text(sample_rows))
    original = compute_view(raws)

    compute_view(raws, ViewFilters(merchants=SpecificMerchants(names=frozenset({"Book Store"}))))
    compute_view(raws, ViewFilters(end_date=dt.date(2023, 3, 16)))
    reverted = compute_view(raws, ViewFilters())

    assert reverted == original


def test_selecting_every_merchant_equals_all(sample_rows):
    """Test an explicit full selection behaves like the all sentinel."""
    raws = parse_csv_text(csv_text(sample_rows))
    options = merchant_universe(raws)

    selection = SpecificMerchants()
    for option in options:
        selection = toggle_merchant(selection, option, options)

    assert isinstance(selection, AllMerchants)
    explicit = compute_view(raws, ViewFilters(merchants=SpecificMerchants(names=frozenset(options))))
    assert explicit == compute_view(raws, ViewFilters(merchants=selection))


def test_duplicates_across_batches_are_kept(sample_rows):
    """Test identical rows from two files are both counted."""
    raws = parse_csv_text(csv_text(sample_rows[:1])) + parse_csv_text(csv_text(sample_rows[:1]))

    view = compute_view(raws)

    assert [txn.cumulative_amount for txn in view.transactions] == [-50.0, -100.0]
