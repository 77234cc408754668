"""Date extraction and normalization to ISO-8601 UTC instants."""

import re
from datetime import datetime, timezone

from dateutil.parser import parserinfo

MONTH_NAMES = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)"

# Leftmost token wins; at the same position ISO beats numeric beats month-name.
DATE_PATTERN = re.compile(
    r"(\d{4}-\d{2}-\d{2}"
    r"|(?:\d{1,2}[/\-.]){2}\d{2,4}"
    r"|\b" + MONTH_NAMES + r"[a-z]*\s+\d{1,2},?\s+\d{2,4})",
    re.IGNORECASE | re.ASCII,
)

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
NUMERIC_DATE = re.compile(r"^(?:\d{1,2}[/\-.]){2}\d{2,4}$", re.ASCII)
MONTH_NAME_DATE = re.compile(r"^([A-Za-z]+)\s+(\d{1,2}),?\s+(\d{2,4})$", re.ASCII)


def to_iso_instant(value: datetime) -> str:
    """Render a datetime as "YYYY-MM-DDTHH:MM:SS.mmmZ" in UTC.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}Z"
    )


def _utc_midnight(year: int, month: int, day: int) -> str | None:
    try:
        return to_iso_instant(datetime(year, month, day, tzinfo=timezone.utc))
    except ValueError:
        return None


def _parse_numeric(text: str) -> str | None:
    a, b, c = (int(part) for part in re.split(r"[/\-.]", text))
    if c < 100:
        c += 2000
    # Component above 12 is the day; otherwise month-first (US) by default.
    day = a if a > 12 else b
    month = b if a > 12 else a
    return _utc_midnight(c, month, day)


_MONTH_INFO = parserinfo()


def _month_number(word: str) -> int | None:
    # dateutil month names are English and do not follow LC_TIME.
    return _MONTH_INFO.month(word)


def _parse_month_name(text: str) -> str | None:
    match = MONTH_NAME_DATE.match(text)
    if not match:
        return None
    word, day, year = match.groups()
    month = _month_number(word)
    if month is None:
        return None
    year_value = int(year)
    if year_value < 100:
        year_value += 2000
    return _utc_midnight(year_value, month, int(day))


def parse_date(raw: str) -> str | None:
    """Parse a date token into an ISO-8601 UTC instant string.

    Supported tokens:
        - 2024-03-15 (UTC midnight)
        - 03/15/2024, 15/03/24, 3-4-2024, 15.03.2024
        - Mar 15, 2024 / March 15 2024 / Sept 5, 24

    Day/month ambiguity: a component greater than 12 is the day; when both
    are 12 or less the first component is the month. Two-digit years are
    2000+YY. Tokens that don't form a real calendar date yield None.

    Args:
        raw: Date token

    Returns:
        ISO string such as "2024-03-15T00:00:00.000Z", or None
    """
    text = (raw or "").strip()
    if not text:
        return None

    if ISO_DATE.match(text):
        year, month, day = (int(part) for part in text.split("-"))
        return _utc_midnight(year, month, day)

    if NUMERIC_DATE.match(text):
        return _parse_numeric(text)

    return _parse_month_name(text)


def find_date(text: str) -> str | None:
    """Return the first date token in the text, normalized (or None)."""
    match = DATE_PATTERN.search(text or "")
    if not match:
        return None
    return parse_date(match.group(1))
