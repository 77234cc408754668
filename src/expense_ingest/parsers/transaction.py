"""Heuristic transaction parser for free-form financial text.

Email bodies, PDF attachment text, SMS messages and CSV rows all go
through the same single-pass extraction. Each field is found by an
independent function, so the order of extraction does not matter.
"""

import logging

from expense_ingest.parsers.amounts import find_amount, find_currency
from expense_ingest.parsers.dates import find_date
from expense_ingest.parsers.vendor import extract_reference_id, extract_vendor
from expense_ingest.schemas.internal import ParsedTransaction, ParseResult

logger = logging.getLogger(__name__)

# Highest qualifying tier wins.
CONFIDENCE_FULL = 0.95
CONFIDENCE_AMOUNT_DATE = 0.9
CONFIDENCE_AMOUNT = 0.7
CONFIDENCE_NONE = 0.3


def score_confidence(parsed: ParsedTransaction) -> float:
    """Discrete confidence from which of amount/date/vendor were found.

    A zero amount counts as not found, as it does for ingestion.
    """
    if parsed.amount and parsed.date and parsed.vendor:
        return CONFIDENCE_FULL
    if parsed.amount and parsed.date:
        return CONFIDENCE_AMOUNT_DATE
    if parsed.amount:
        return CONFIDENCE_AMOUNT
    return CONFIDENCE_NONE


def regex_parse_transaction(text: str) -> ParseResult:
    """Extract amount, currency, date, vendor and reference id from text.

    Never raises: unrecognized input simply leaves fields unset and
    scores 0.3.

    Args:
        text: Plain text (email body plus any PDF text, SMS body, CSV row)

    Returns:
        ParseResult with the parsed fields and confidence

    Example:
        >>> result = regex_parse_transaction("Receipt from Acme: $12.50 on 2024-01-10")
        >>> result.parsed.vendor, result.confidence
        ('Acme', 0.95)
    """
    text = text or ""

    parsed = ParsedTransaction(
        amount=find_amount(text),
        currency=find_currency(text),
        vendor=extract_vendor(text),
        date=find_date(text),
        reference_id=extract_reference_id(text),
    )
    confidence = score_confidence(parsed)

    logger.debug(
        "Parsed transaction text",
        extra={
            "has_amount": parsed.amount is not None,
            "has_date": parsed.date is not None,
            "has_vendor": parsed.vendor is not None,
            "confidence": confidence,
        },
    )
    return ParseResult(parsed=parsed, confidence=confidence)
