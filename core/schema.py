"""
Pydantic schemas for transactions, filters and computed views.
"""
import datetime as dt
from pathlib import Path
from typing import Annotated, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, Field, model_validator

from core.exceptions import DataNotFoundError


def normalize_text(v):
    """Missing CSV cells arrive as None or NaN; treat them as empty strings."""
    if v is None or (isinstance(v, float) and v != v):
        return ""
    return str(v)


Text = Annotated[str, BeforeValidator(normalize_text)]


class RawTransaction(BaseModel):
    """A parsed CSV row before any filtering. Date is still textual."""
    date: Text = Field(..., description="DD/MM/YYYY as exported")
    name: Text = ""
    type: Text = ""
    status: Text = ""
    currency: Text = ""
    amount: float = 0.0


class Transaction(BaseModel):
    """A candidate with its date resolved, as seen inside one computed view."""
    date: dt.date
    name: str
    type: str
    status: str
    currency: str
    amount: float
    cumulative_amount: float = Field(
        default=0.0,
        description="Inclusive running total; only valid within the view that produced it"
    )


class SummaryStats(BaseModel):
    """Totals derived from the filtered set."""
    total_incoming: float = 0.0
    total_outgoing: float = 0.0
    net_amount: float = 0.0


class AllMerchants(BaseModel):
    """Selection sentinel: every merchant passes."""
    kind: Literal["all"] = "all"


class SpecificMerchants(BaseModel):
    """Explicit merchant set. An empty set matches nothing."""
    kind: Literal["specific"] = "specific"
    names: FrozenSet[str] = Field(default_factory=frozenset)


MerchantSelection = Annotated[
    Union[AllMerchants, SpecificMerchants],
    Field(discriminator="kind"),
]

ALL_MERCHANTS = AllMerchants()


class ViewFilters(BaseModel):
    """Active user filters. Dates are inclusive calendar days."""
    merchants: MerchantSelection = Field(default_factory=AllMerchants)
    start_date: Optional[Union[dt.datetime, dt.date]] = None
    end_date: Optional[Union[dt.datetime, dt.date]] = None

    @model_validator(mode="after")
    def check_range(self):
        """Reject a range whose start falls after its end."""
        if self.start_date is not None and self.end_date is not None:
            start = self.start_date.date() if isinstance(self.start_date, dt.datetime) else self.start_date
            end = self.end_date.date() if isinstance(self.end_date, dt.datetime) else self.end_date
            if start > end:
                raise ValueError(f"start_date {start} is after end_date {end}")
        return self


class TransactionView(BaseModel):
    """Ordered transactions with running totals, plus summary statistics."""
    transactions: List[Transaction] = Field(default_factory=list)
    stats: SummaryStats = Field(default_factory=SummaryStats)
    skipped_invalid_dates: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.transactions


class UploadedFile(BaseModel):
    """One file of an upload batch."""
    filename: str
    content: bytes

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> "UploadedFile":
        """
        Read a file from disk into an upload.

        Raises:
            DataNotFoundError: If file doesn't exist
        """
        path = Path(file_path)
        if not path.is_file():
            raise DataNotFoundError(
                f"File not found: {file_path}",
                details={"file_path": str(file_path)}
            )
        return cls(filename=path.name, content=path.read_bytes())
