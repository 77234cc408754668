"""Tests for amount and currency extraction."""

from decimal import Decimal

import pytest

from expense_ingest.parsers.amounts import find_amount, find_currency, normalize_amount


class TestNormalizeAmount:
    """Separator resolution for locale-formatted numerals."""

    def test_us_grouping(self):
        assert normalize_amount("1,234.56") == Decimal("1234.56")

    def test_european_grouping(self):
        assert normalize_amount("1.234,56") == Decimal("1234.56")

    def test_comma_only_is_decimal(self):
        # Known ambiguity: a lone comma is read as the decimal separator
        assert normalize_amount("1,234") == Decimal("1.234")
        assert normalize_amount("12,50") == Decimal("12.50")

    def test_space_grouping(self):
        assert normalize_amount("1 234.00") == Decimal("1234.00")

    def test_strips_symbols(self):
        assert normalize_amount("$45.67") == Decimal("45.67")

    @pytest.mark.parametrize("raw", ["", "abc", "1.2.3", None])
    def test_invalid_is_none(self, raw):
        assert normalize_amount(raw) is None


class TestFindAmount:
    def test_first_match_wins(self):
        assert find_amount("Subtotal $10.00, total $20.00") == Decimal("10.00")

    def test_grouped_amount(self):
        assert find_amount("Total: $1,234.56 paid") == Decimal("1234.56")

    def test_european_amount(self):
        assert find_amount("Betrag EUR 1.234,56") == Decimal("1234.56")

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Total 12\u202f345,00 EUR", Decimal("12345.00")),
            ("Montant 1\u00a0234,56 €", Decimal("1234.56")),
        ],
    )
    def test_no_break_space_grouping(self, text, expected):
        assert find_amount(text) == expected

    def test_non_ascii_digits_are_ignored(self):
        assert find_amount("\u0661\u0662.\u0663\u0664 then 5.00") == Decimal("5.00")

    def test_integer_amounts_are_not_matched(self):
        assert find_amount("made a $50 purchase") is None

    def test_long_group_run_without_decimals(self):
        text = "ref " + " ".join(["123"] * 300) + " end"
        assert find_amount(text) is None

    def test_empty_text(self):
        assert find_amount("") is None


class TestFindCurrency:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Paid $45.67", "USD"),
            ("Paid US$45.67", "USD"),
            ("Paid USD$ 45.67", "USD"),
            ("Bezahlt €12,00", "EUR"),
            ("Paid £5.00", "GBP"),
            ("Total 45.00 eur", "EUR"),
            ("INR 500.00 debited", "INR"),
        ],
    )
    def test_codes_and_symbols(self, text, expected):
        assert find_currency(text) == expected

    def test_code_must_be_a_whole_word(self):
        assert find_currency("cadence 12.00") is None

    def test_first_currency_wins(self):
        assert find_currency("12.00 GBP (approx $15.00)") == "GBP"

    def test_absent_currency_is_unset(self):
        assert find_currency("Total 12.00") is None
