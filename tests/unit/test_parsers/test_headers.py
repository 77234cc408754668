"""Tests for email-header vendor and date heuristics."""

import pytest

from expense_ingest.parsers.headers import (
    extract_date_from_headers,
    extract_vendor_from_headers,
    header_value,
)


class TestHeaderValue:
    def test_list_of_dicts(self):
        headers = [{"name": "From", "value": "a@example.com"}]
        assert header_value(headers, "from") == "a@example.com"

    def test_pairs_case_insensitive(self):
        assert header_value([("SUBJECT", "Hi")], "Subject") == "Hi"

    def test_mapping(self):
        assert header_value({"Date": "x"}, "date") == "x"

    def test_missing(self):
        assert header_value(None, "from") is None
        assert header_value([], "from") is None


class TestExtractVendorFromHeaders:
    def test_quoted_display_name(self):
        headers = [{"name": "From", "value": '"Acme Store" <billing@acme.com>'}]
        assert extract_vendor_from_headers(headers) == "Acme Store"

    def test_text_before_angle(self):
        assert extract_vendor_from_headers({"From": "Acme Store <billing@acme.com>"}) == "Acme Store"

    def test_bare_address(self):
        assert extract_vendor_from_headers({"From": "billing@acme.com"}) == "billing@acme.com"

    def test_subject_used_when_from_unusable(self):
        headers = {"From": "<billing@acme.com>", "Subject": "  Your   order  receipt "}
        assert extract_vendor_from_headers(headers) == "Your order receipt"

    def test_long_subject_ignored(self):
        headers = {"Subject": "x" * 81}
        assert extract_vendor_from_headers(headers) is None

    def test_subject_limit_is_configurable(self):
        headers = {"Subject": "Weekly statement"}
        assert extract_vendor_from_headers(headers, subject_max_length=5) is None

    def test_no_headers(self):
        assert extract_vendor_from_headers([]) is None


class TestExtractDateFromHeaders:
    def test_converted_to_utc(self):
        headers = {"Date": "Wed, 10 Jan 2024 15:30:00 +0200"}
        assert extract_date_from_headers(headers) == "2024-01-10T13:30:00.000Z"

    @pytest.mark.parametrize("value", ["garbage", ""])
    def test_unparseable(self, value):
        assert extract_date_from_headers({"Date": value}) is None
