"""Text parsing for transaction ingestion.

This package turns unstructured financial text into structured
transaction candidates:
- transaction: the single-pass parser and confidence ladder
- amounts / dates / vendor: one independent extractor per field
- headers: email-header heuristics that override body-derived vendors
"""

from expense_ingest.parsers.headers import (
    extract_date_from_headers,
    extract_vendor_from_headers,
    header_value,
)
from expense_ingest.parsers.transaction import regex_parse_transaction, score_confidence

__all__ = [
    "extract_date_from_headers",
    "extract_vendor_from_headers",
    "header_value",
    "regex_parse_transaction",
    "score_confidence",
]
