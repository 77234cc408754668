"""Flattening of Gmail-style MIME payloads into plain text.

The mail collaborator hands over the message payload tree as returned by
the Gmail API (`mimeType`, `body.data` in base64url, nested `parts`).
PDF attachments are converted to text elsewhere; their text is appended
with combine_texts().
"""

import base64
import re
from html import unescape
from typing import Any

SCRIPT_STYLE_PATTERN = re.compile(
    r"<(script|style)[^>]*>.*?</\1>", re.DOTALL | re.IGNORECASE
)
COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
TAG_PATTERN = re.compile(r"<[^>]+>")


def decode_base64url(data: str) -> str:
    """Decode base64url data (padding optional) to UTF-8 text.

    Undecodable data yields "".
    """
    padded = data + "=" * (-len(data) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
    except ValueError:
        return ""
    return raw.decode("utf-8", errors="replace")


def html_to_text(html: str) -> str:
    """
    Reduce an HTML body to its visible text.

    - Remove scripts, styles and comments
    - Replace remaining tags with spaces
    - Decode HTML entities (`&#36;` -> `$`, `&nbsp;` -> U+00A0)
    """
    html = SCRIPT_STYLE_PATTERN.sub(" ", html)
    html = COMMENT_PATTERN.sub(" ", html)
    html = TAG_PATTERN.sub(" ", html)
    return unescape(html)


def _body_data(part: dict[str, Any]) -> str | None:
    body = part.get("body") or {}
    return body.get("data")


def extract_email_text(payload: dict[str, Any] | None) -> str:
    """Collect text/plain and tag-stripped text/html bodies from a payload.

    Parts are visited depth-first in document order. When no text part is
    found the root body (if any) is used.

    Args:
        payload: Gmail message payload

    Returns:
        Bodies joined by blank lines ("" when nothing is readable)
    """
    if not payload:
        return ""

    texts: list[str] = []
    stack: list[dict[str, Any]] = [payload]

    while stack:
        part = stack.pop()
        mime_type = part.get("mimeType")
        data = _body_data(part)

        if mime_type == "text/plain" and data:
            texts.append(decode_base64url(data))
        elif mime_type == "text/html" and data:
            texts.append(html_to_text(decode_base64url(data)))
        elif isinstance(part.get("parts"), list):
            stack.extend(reversed(part["parts"]))

    if not texts and _body_data(payload):
        texts.append(decode_base64url(_body_data(payload)))

    return "\n\n".join(texts)


def combine_texts(body_text: str, pdf_texts: list[str] | None = None) -> str:
    """Append extracted PDF texts to the email body."""
    extra = [text for text in (pdf_texts or []) if text and text.strip()]
    if not extra:
        return body_text
    return "\n\n".join([body_text, *extra])
