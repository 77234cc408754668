"""Amount and currency extraction.

Amounts are recognized only when they carry an explicit two-digit
fractional part ("45.67", "1.234,56", "1 234.00"). Integer amounts such
as "$50" are never matched.

Thousands groups may be separated by any whitespace, including the
no-break spaces (U+00A0, U+202F) common in French-formatted PDF text.
Digits are ASCII only.

The search is first-match and backtracking: a long run of space-separated
three-digit groups with no decimal part costs time quadratic in its length.
"""

import re
from decimal import Decimal, InvalidOperation

# One to three leading digits, optional thousands groups (comma, period or
# whitespace + three digits), then a decimal separator and exactly two digits.
AMOUNT_PATTERN = re.compile(r"([0-9]{1,3}(?:[,.\s][0-9]{3})*(?:[.,][0-9]{2}))")

CURRENCY_CODES = (
    "USD", "EUR", "GBP", "NGN", "KES", "ZAR", "CAD", "AUD", "INR",
    "JPY", "CNY", "CHF", "SEK", "NOK", "DKK", "RUB", "BRL",
)

# Symbol variants come first so "US$" is not read as a bare "$".
CURRENCY_PATTERN = re.compile(
    r"(USD\$|US\$|\b(?:" + "|".join(CURRENCY_CODES) + r")\b|\$|€|£)",
    re.IGNORECASE | re.ASCII,
)

CURRENCY_SYMBOLS = {
    "$": "USD",
    "US$": "USD",
    "USD$": "USD",
    "€": "EUR",
    "£": "GBP",
}


def normalize_amount(raw: str) -> Decimal | None:
    """Normalize a locale-formatted numeral into a plain decimal.

    Separator resolution:
        - both "," and ".": whichever appears last is the decimal separator
        - only ",": comma is decimal (European), so "1,234" -> 1.234
        - otherwise: "." is decimal and commas are thousands grouping

    Args:
        raw: Matched numeral, possibly with currency symbols or spaces

    Returns:
        Decimal value, or None if the result is not a finite number
    """
    cleaned = re.sub(r"[^0-9.,]", "", raw or "")
    if not cleaned:
        return None

    if "," in cleaned and "." in cleaned:
        decimal_sep = "." if cleaned.rfind(".") > cleaned.rfind(",") else ","
        thousands_sep = "," if decimal_sep == "." else "."
        normalized = cleaned.replace(thousands_sep, "")
        if decimal_sep == ",":
            normalized = normalized.replace(",", ".", 1)
    elif "," in cleaned:
        normalized = cleaned.replace(".", "").replace(",", ".", 1)
    else:
        normalized = cleaned.replace(",", "")

    try:
        value = Decimal(normalized)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def find_amount(text: str) -> Decimal | None:
    """Return the first amount in the text (first match wins, not best match)."""
    match = AMOUNT_PATTERN.search(text or "")
    if not match:
        return None
    return normalize_amount(match.group(1))


def find_currency(text: str) -> str | None:
    """Return the ISO code of the first currency code or symbol in the text.

    Absence is left as None; callers apply their own default.
    """
    match = CURRENCY_PATTERN.search(text or "")
    if not match:
        return None
    raw = match.group(1).upper()
    return CURRENCY_SYMBOLS.get(raw, raw)
