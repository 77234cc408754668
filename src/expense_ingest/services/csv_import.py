"""
CSV import for bank/card exports.

Columns are located by header substring rather than fixed layouts, so
most exports work as long as they have something like "Amount" and
"Date" columns.
"""

import csv
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timezone
from decimal import Decimal, InvalidOperation

from dateutil import parser as date_parser

from expense_ingest.core.exceptions import CsvFormatError
from expense_ingest.core.logging import log_parse_error
from expense_ingest.parsers.dates import to_iso_instant
from expense_ingest.schemas.internal import CsvImportResult, TransactionRecord

DEFAULT_VENDOR_COLUMNS = ("description", "vendor", "merchant", "narration")


@dataclass
class CsvColumns:
    """Positions of the recognized columns (None when absent)."""

    amount: int
    date: int
    currency: int | None = None
    vendor: int | None = None


def _find_column(header: list[str], keys: tuple[str, ...]) -> int | None:
    for index, name in enumerate(header):
        if any(key in name for key in keys):
            return index
    return None


def detect_columns(header: list[str], vendor_keys=DEFAULT_VENDOR_COLUMNS) -> CsvColumns:
    """Locate amount/date/currency/vendor columns in a header row.

    Raises:
        CsvFormatError: If the amount or date column is missing (CSV_002)
    """
    normalized = [name.strip().lower() for name in header]
    amount_idx = _find_column(normalized, ("amount",))
    date_idx = _find_column(normalized, ("date",))
    if amount_idx is None or date_idx is None:
        raise CsvFormatError("CSV_002", details={"header": normalized})

    return CsvColumns(
        amount=amount_idx,
        date=date_idx,
        currency=_find_column(normalized, ("currency",)),
        vendor=_find_column(normalized, tuple(vendor_keys)),
    )


def parse_csv_amount(raw: str) -> Decimal | None:
    """Amount cell with thousands commas removed; None if not a finite number."""
    try:
        value = Decimal(raw.replace(",", "").strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_csv_date(raw: str) -> str | None:
    """Date cell as an ISO-8601 UTC instant; None if unreadable."""
    if not raw.strip():
        return None
    try:
        parsed = date_parser.parse(raw)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return to_iso_instant(parsed)


def _split_row(line: str) -> list[str]:
    return next(csv.reader([line]), [])


def _cell(cols: list[str], index: int | None) -> str:
    if index is None or index >= len(cols):
        return ""
    return cols[index].strip()


def import_csv(
    text: str,
    categorize: Callable[[str | None, str], str | None],
    user_id: str | None = None,
    default_currency: str = "USD",
    vendor_keys=DEFAULT_VENDOR_COLUMNS,
) -> CsvImportResult:
    """Turn CSV text into transaction records.

    Args:
        text: Whole CSV file content
        categorize: (vendor, raw_row) -> category, usually the user's rules
        user_id: Owner of the imported rows
        default_currency: Currency when the row has none
        vendor_keys: Header substrings that mark the vendor column

    Returns:
        CsvImportResult with the valid rows and the number skipped

    Raises:
        CsvFormatError: CSV_001 (no data rows), CSV_002 (missing columns),
            CSV_003 (no valid rows)
    """
    lines = [line for line in (text or "").splitlines() if line.strip()]
    if len(lines) < 2:
        raise CsvFormatError("CSV_001", details={"lines": len(lines)})

    columns = detect_columns(_split_row(lines[0]), vendor_keys)

    result = CsvImportResult()
    for row_index, line in enumerate(lines[1:], start=1):
        cols = _split_row(line)
        if len(cols) <= max(columns.amount, columns.date):
            result.skipped += 1
            continue

        amount = parse_csv_amount(_cell(cols, columns.amount))
        date = parse_csv_date(_cell(cols, columns.date))
        if amount is None or date is None:
            log_parse_error("csv", "Skipping invalid CSV row", row_index=row_index)
            result.skipped += 1
            continue

        vendor = _cell(cols, columns.vendor) or None
        result.transactions.append(
            TransactionRecord(
                user_id=user_id,
                source="manual",
                amount=amount,
                currency=_cell(cols, columns.currency) or default_currency,
                vendor=vendor,
                date=date,
                category=categorize(vendor, line),
                confidence_score=1.0,
                raw_text=line,
            )
        )

    if not result.transactions:
        raise CsvFormatError("CSV_003", details={"skipped": result.skipped})

    return result
