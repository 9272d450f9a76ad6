"""
Shared fixtures for the test suite.
"""
import pytest

from core.config import reset_settings
from tests.helpers import export_row

SETTINGS_ENV_VARS = ("LOG_LEVEL", "DISPLAY_CURRENCY", "CSV_ENCODING", "MAX_CONCURRENT_PARSES")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from ambient settings environment variables."""
    for var in SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sample_rows():
    """A small export mixing included and excluded rows."""
    return [
        export_row("15/03/2023", "Coffee Shop", "Express Checkout Payment", "Completed", "CAD", "-50.00"),
        export_row("20/03/2023", "Coffee Shop", "Mobile Payment", "Completed", "CAD", "200.00"),
        export_row("18/03/2023", "Book Store", "Express Checkout Payment", "Completed", "CAD", "-1,234.56"),
        export_row("18/03/2023", "Book Store", "General Authorization", "Completed", "CAD", "-1,234.56"),
        export_row("19/03/2023", "Pending Co", "Express Checkout Payment", "Pending", "CAD", "-10.00"),
        export_row("19/03/2023", "", "General Currency Conversion", "Completed", "USD", "12.00"),
        export_row("21/03/2023", "Bank", "Bank Deposit to PP Account ", "Completed", "CAD", "500.00"),
    ]
