"""Tests for CSV export import."""

from decimal import Decimal

import pytest

from expense_ingest.core.exceptions import CsvFormatError
from expense_ingest.services.csv_import import (
    detect_columns,
    import_csv,
    parse_csv_amount,
    parse_csv_date,
)

SAMPLE_CSV = """Date,Description,Amount,Currency
2024-01-10,UBER TRIP,"1,234.50",EUR
2024-01-11,Coffee,3.20,

pending,Thing,5.00,USD
2024-01-12,Broken,abc,USD
2024-01-13
"""


def _uber_rule(vendor, row):
    return "Transport" if "uber" in row.lower() else None


class TestImportCsv:
    """Test suite for import_csv."""

    def test_valid_rows_imported_invalid_skipped(self):
        result = import_csv(SAMPLE_CSV, categorize=_uber_rule, user_id="user-1")

        assert result.imported == 2
        assert result.skipped == 3

        uber, coffee = result.transactions
        assert uber.amount == Decimal("1234.50")
        assert uber.currency == "EUR"
        assert uber.vendor == "UBER TRIP"
        assert uber.date == "2024-01-10T00:00:00.000Z"
        assert uber.category == "Transport"
        assert uber.source == "manual"
        assert uber.confidence_score == 1.0
        assert uber.user_id == "user-1"
        assert uber.raw_text == '2024-01-10,UBER TRIP,"1,234.50",EUR'

        assert coffee.currency == "USD"
        assert coffee.category is None

    def test_default_currency(self):
        text = "date,amount\n2024-01-10,5.00\n"
        result = import_csv(text, categorize=_uber_rule, default_currency="GBP")
        assert result.transactions[0].currency == "GBP"
        assert result.transactions[0].vendor is None

    @pytest.mark.parametrize("text", ["", "\n\n", "Date,Amount\n"])
    def test_no_data_rows(self, text):
        with pytest.raises(CsvFormatError) as exc_info:
            import_csv(text, categorize=_uber_rule)
        assert exc_info.value.error_code == "CSV_001"
        assert exc_info.value.http_status == 400

    def test_missing_columns(self):
        with pytest.raises(CsvFormatError) as exc_info:
            import_csv("Description,Amount\nCoffee,3.20\n", categorize=_uber_rule)
        assert exc_info.value.error_code == "CSV_002"

    def test_no_valid_rows(self):
        with pytest.raises(CsvFormatError) as exc_info:
            import_csv("Date,Amount\nsoon,lots\n", categorize=_uber_rule)
        assert exc_info.value.error_code == "CSV_003"


def test_detect_columns_by_substring() -> None:
    columns = detect_columns(["Transaction Date", "Narration", "Debit Amount", "Currency Code"])
    assert (columns.date, columns.vendor, columns.amount, columns.currency) == (0, 1, 2, 3)


def test_parse_csv_amount() -> None:
    assert parse_csv_amount("1,234.50") == Decimal("1234.50")
    assert parse_csv_amount("-12.00") == Decimal("-12.00")
    assert parse_csv_amount("") is None
    assert parse_csv_amount("NaN") is None
    assert parse_csv_amount("Infinity") is None


def test_parse_csv_date() -> None:
    assert parse_csv_date("2024-01-10T08:00:00+02:00") == "2024-01-10T06:00:00.000Z"
    assert parse_csv_date("Jan 10 2024") == "2024-01-10T00:00:00.000Z"
    assert parse_csv_date("") is None
    assert parse_csv_date("pending") is None
