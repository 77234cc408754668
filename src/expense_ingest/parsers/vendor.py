"""Vendor and reference-id heuristics over message body text."""

import re

VENDOR_MIN_LENGTH = 2
VENDOR_MAX_LENGTH = 60

_VENDOR_CHARS = r"[A-Za-z0-9&'().\-\s]{2,60}"

# Tried in order: "at X", "from X", "to X".
VENDOR_PATTERNS = [
    re.compile(r"\bat\s+(" + _VENDOR_CHARS + ")", re.IGNORECASE),
    re.compile(r"\bfrom\s+(" + _VENDOR_CHARS + ")", re.IGNORECASE),
    re.compile(r"\bto\s+(" + _VENDOR_CHARS + ")", re.IGNORECASE),
]

KEYWORD_PATTERN = re.compile(r"receipt|transaction|payment|order", re.IGNORECASE)

REFERENCE_PATTERN = re.compile(
    r"\b(?:ref(?:erence)?|txn|transaction id|transaction no\.)[:\s]+([A-Za-z0-9\-]{4,})",
    re.IGNORECASE | re.ASCII,
)


def _qualifies(candidate: str) -> bool:
    return VENDOR_MIN_LENGTH <= len(candidate) <= VENDOR_MAX_LENGTH


def _vendor_from_keyword_line(text: str) -> str | None:
    line = next((ln for ln in text.splitlines() if KEYWORD_PATTERN.search(ln)), None)
    if line is None:
        return None
    candidate = re.sub(r"[:#]", "", KEYWORD_PATTERN.sub("", line)).strip()
    return candidate if _qualifies(candidate) else None


def extract_vendor(text: str) -> str | None:
    """Best-effort merchant name from free text.

    Tries the text after "at ", "from " and "to " in that order, then the
    first line mentioning receipt/transaction/payment/order with those
    words and ':'/'#' removed. The first trimmed candidate of 2-60
    characters wins.

    Args:
        text: Message body

    Returns:
        Vendor name or None
    """
    text = text or ""
    for pattern in VENDOR_PATTERNS:
        match = pattern.search(text)
        if match:
            candidate = match.group(1).strip()
            if _qualifies(candidate):
                return candidate

    return _vendor_from_keyword_line(text)


def extract_reference_id(text: str) -> str | None:
    """Return the id following a ref/reference/txn/transaction id label."""
    match = REFERENCE_PATTERN.search(text or "")
    return match.group(1).strip() if match else None
