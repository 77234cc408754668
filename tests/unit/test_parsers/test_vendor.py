"""Tests for vendor and reference-id heuristics."""

from expense_ingest.parsers.vendor import extract_reference_id, extract_vendor


def test_vendor_after_at() -> None:
    assert extract_vendor("You spent $12.00 at Starbucks") == "Starbucks"


def test_vendor_after_from() -> None:
    assert extract_vendor("Refund from Amazon: $5.00") == "Amazon"


def test_vendor_after_to() -> None:
    assert extract_vendor("Sent $20.00 to Alice") == "Alice"


def test_at_is_tried_before_from() -> None:
    assert extract_vendor("Alert from Bank: card used at Target") == "Target"


def test_vendor_from_keyword_line() -> None:
    assert extract_vendor("Netflix Payment:\nAmount 15.99") == "Netflix"


def test_too_short_candidate_is_skipped() -> None:
    assert extract_vendor("paid at  x") is None


def test_no_vendor() -> None:
    assert extract_vendor("") is None
    assert extract_vendor("12.00") is None


def test_reference_id_labels() -> None:
    assert extract_reference_id("ref: TXN12345") == "TXN12345"
    assert extract_reference_id("Reference: AB-1234") == "AB-1234"
    assert extract_reference_id("Transaction ID: 98765432") == "98765432"
    assert extract_reference_id("txn 5555") == "5555"


def test_reference_id_needs_four_characters() -> None:
    assert extract_reference_id("ref: 12") is None


def test_refund_is_not_a_reference_label() -> None:
    assert extract_reference_id("refund 1234") is None
