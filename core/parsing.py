"""
CSV parsing for payment-processor transaction history exports.
The export layout is fixed: fields are read by position, not by header name.
"""
import csv
import io
from typing import List, Optional, Union

import pandas as pd

from core.config import get_settings
from core.exceptions import ParsingError
from core.logger import setup_logger
from core.normalize import clean_amount
from core.schema import RawTransaction, UploadedFile

logger = setup_logger(__name__)

# Positional layout of the export (0-based column indices)
DATE_COLUMN = 0
NAME_COLUMN = 3
TYPE_COLUMN = 4
STATUS_COLUMN = 5
CURRENCY_COLUMN = 6
AMOUNT_COLUMN = 7

MIN_COLUMNS = AMOUNT_COLUMN + 1


def read_rows(text: str, source: str = "<text>") -> pd.DataFrame:
    """
    Split CSV text into a frame of string cells, header row removed.

    Rows may differ in width: short rows are padded with empty strings and
    extra trailing fields are kept but never read.

    Args:
        text: Full file content
        source: Name used in log and error messages

    Returns:
        DataFrame with integer column labels and one row per record

    Raises:
        ParsingError: If the text is empty, malformed, or no data row is wide enough
    """
    try:
        records = [record for record in csv.reader(io.StringIO(text)) if record]
    except csv.Error as e:
        logger.error(f"Failed to split {source} into rows: {e}")
        raise ParsingError(
            f"Invalid CSV format in {source}",
            details={"source": source, "error": str(e)}
        )

    if not records:
        raise ParsingError(
            f"{source} is empty",
            details={"source": source}
        )

    # Header row is discarded
    data = records[1:]
    if not data:
        return pd.DataFrame(columns=range(MIN_COLUMNS))

    widest = max(len(record) for record in data)
    if widest < MIN_COLUMNS:
        raise ParsingError(
            f"{source} has {widest} columns, expected at least {MIN_COLUMNS}",
            details={"source": source, "columns_found": widest, "columns_expected": MIN_COLUMNS}
        )

    padded = [record + [""] * (widest - len(record)) for record in data]
    return pd.DataFrame(padded, columns=range(widest))


def rows_to_transactions(df: pd.DataFrame) -> List[RawTransaction]:
    """
    Map positional columns to candidate transactions, keeping row order.

    Args:
        df: Output of read_rows

    Returns:
        List of RawTransaction
    """
    return [
        RawTransaction(
            date=row[DATE_COLUMN].strip(),
            name=row[NAME_COLUMN],
            type=row[TYPE_COLUMN],
            status=row[STATUS_COLUMN],
            currency=row[CURRENCY_COLUMN].strip(),
            amount=clean_amount(row[AMOUNT_COLUMN]),
        )
        for row in df.itertuples(index=False, name=None)
    ]


def parse_csv_text(text: str, source: str = "<text>") -> List[RawTransaction]:
    """
    Parse the text of one export into candidate transactions.

    Args:
        text: Full file content
        source: Name used in log and error messages

    Returns:
        Candidates in file order (may be empty if the file only has a header)

    Raises:
        ParsingError: If the file cannot be split into rows
    """
    df = read_rows(text, source)
    transactions = rows_to_transactions(df)

    if not transactions:
        logger.warning(f"{source} contains a header but no transaction rows")
    else:
        logger.info(f"Parsed {len(transactions)} rows from {source}")

    return transactions


def decode_content(content: Union[bytes, str], source: str, encoding: Optional[str] = None) -> str:
    """
    Decode uploaded bytes with the configured encoding.

    Raises:
        ParsingError: If the bytes are not valid in that encoding
    """
    if isinstance(content, str):
        return content

    encoding = encoding or get_settings().csv_encoding
    try:
        return content.decode(encoding)
    except UnicodeDecodeError as e:
        raise ParsingError(
            f"{source} is not valid {encoding} text",
            details={"source": source, "encoding": encoding, "error": str(e)}
        )


def parse_uploaded_file(upload: UploadedFile, encoding: Optional[str] = None) -> List[RawTransaction]:
    """
    Parse one uploaded file.

    Args:
        upload: File name and raw bytes
        encoding: Override for the configured CSV encoding

    Returns:
        Candidates in file order

    Raises:
        ParsingError: If the file cannot be decoded or split into rows
    """
    text = decode_content(upload.content, upload.filename, encoding)
    return parse_csv_text(text, upload.filename)
