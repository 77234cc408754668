"""Vendor and date heuristics over email headers.

Header-derived values are preferred over body-text heuristics when an
email carries them.
"""

import re
from collections.abc import Iterable, Mapping
from email.utils import parsedate_to_datetime
from typing import Any

from expense_ingest.parsers.dates import to_iso_instant

SUBJECT_MAX_LENGTH = 80

QUOTED_NAME = re.compile(r'"([^"]+)"')
BEFORE_ANGLE = re.compile(r"([^<]+)<")


def _iter_headers(headers: Any) -> Iterable[tuple[str, str]]:
    if not headers:
        return
    if isinstance(headers, Mapping):
        yield from headers.items()
        return
    for header in headers:
        if isinstance(header, Mapping):
            yield header.get("name"), header.get("value")
        else:
            name, value = header
            yield name, value


def header_value(headers: Any, name: str) -> str | None:
    """Case-insensitive lookup of the first header with the given name.

    Args:
        headers: Mapping, list of {"name", "value"} dicts, or (name, value) pairs
        name: Header name

    Returns:
        Header value or None
    """
    wanted = name.lower()
    for header_name, value in _iter_headers(headers):
        if isinstance(header_name, str) and header_name.lower() == wanted:
            return value
    return None


def extract_vendor_from_headers(
    headers: Any, subject_max_length: int = SUBJECT_MAX_LENGTH
) -> str | None:
    """Derive a vendor name from From/Subject headers.

    Order: quoted display name in From, text before "<" in From, the
    whole From value before any "<", then the Subject collapsed to single
    spaces (only when it is at most `subject_max_length` characters).

    Args:
        headers: Header collection (see header_value)
        subject_max_length: Longest Subject accepted as a vendor

    Returns:
        Vendor name or None
    """
    sender = header_value(headers, "from")
    subject = header_value(headers, "subject")

    if sender:
        quoted = QUOTED_NAME.search(sender)
        if quoted and quoted.group(1).strip():
            return quoted.group(1).strip()

        angled = BEFORE_ANGLE.search(sender)
        if angled and angled.group(1).strip():
            return angled.group(1).strip()

        before_angle = sender.split("<")[0].strip()
        if before_angle:
            return before_angle

    if subject:
        cleaned = re.sub(r"\s+", " ", subject).strip()
        if 0 < len(cleaned) <= subject_max_length:
            return cleaned

    return None


def extract_date_from_headers(headers: Any) -> str | None:
    """Parse the RFC 2822 Date header into an ISO-8601 UTC instant."""
    raw = header_value(headers, "date")
    if not raw:
        return None
    try:
        parsed = parsedate_to_datetime(raw)
    except (TypeError, ValueError):
        return None
    return to_iso_instant(parsed)
