"""Category label normalization.

User-entered and rule-derived categories are free text. Two views keep
them consistent:
- lookup_key(): identity used for de-duplication, filtering and totals
- display_label(): what a person sees; every string sharing a lookup key
  renders the same way

display_label() is idempotent: taxonomy matches return the canonical
string, and title-casing an already title-cased string is a no-op.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Any

# Default taxonomy (ordered; canonical casing/punctuation).
DEFAULT_CATEGORIES: list[str] = [
    "Groceries",
    "Transport",
    "Bills & Utilities",
    "Entertainment",
    "Dining Out",
    "Shopping",
    "Rent",
    "Income",
    "Other",
]

UNCATEGORIZED_KEY = "uncategorized"
UNCATEGORIZED_LABEL = "Uncategorized"

_CANONICAL_BY_KEY: dict[str, str] = {cat.lower(): cat for cat in DEFAULT_CATEGORIES}


def lookup_key(value: str | None) -> str:
    """Canonical, case-insensitive identity of a category string."""
    trimmed = (value or "").strip()
    if not trimmed:
        return UNCATEGORIZED_KEY
    return trimmed.lower()


def display_label(value: str | None) -> str:
    """Human-facing rendering of a category string.

    Args:
        value: Raw category text (may be None or blank)

    Returns:
        The default-taxonomy entry when it matches case-insensitively,
        otherwise the text lower-cased and title-cased word by word.
    """
    trimmed = (value or "").strip()
    if not trimmed:
        return UNCATEGORIZED_LABEL

    canonical = _CANONICAL_BY_KEY.get(trimmed.lower())
    if canonical:
        return canonical

    return " ".join(_capitalize(word) for word in trimmed.lower().split())


def _capitalize(word: str) -> str:
    first = word[:1]
    upper = first.upper()
    # Characters like "ß" upper-case to several letters and would not
    # survive a second pass; leave those as they are.
    if len(upper) != 1 or upper.lower() != first:
        return word
    return upper + word[1:]


def same_category(a: str | None, b: str | None) -> bool:
    """True when two category strings normalize to the same lookup key."""
    return lookup_key(a) == lookup_key(b)


def category_options(categories: Iterable[str | None] = ()) -> list[str]:
    """Ordered, de-duplicated labels for a category picker.

    The default taxonomy comes first, then "Uncategorized", then any
    categories seen in data. The first label registered for a lookup key
    is kept.
    """
    labels: dict[str, str] = {}
    for cat in DEFAULT_CATEGORIES:
        labels.setdefault(lookup_key(cat), cat)
    labels.setdefault(UNCATEGORIZED_KEY, UNCATEGORIZED_LABEL)
    for cat in categories:
        labels.setdefault(lookup_key(cat), display_label(cat))
    return list(labels.values())


def summarize_by_category(items: Iterable[Any]) -> list[tuple[str, Decimal]]:
    """Total amounts per category, one display label per lookup key.

    Args:
        items: Objects or dicts with `category` and `amount`

    Returns:
        (label, total) pairs in first-seen order
    """
    totals: dict[str, Decimal] = {}
    labels: dict[str, str] = {}
    for item in items:
        if isinstance(item, dict):
            category, amount = item.get("category"), item.get("amount")
        else:
            category, amount = getattr(item, "category", None), getattr(item, "amount", None)
        key = lookup_key(category)
        labels.setdefault(key, display_label(category))
        totals[key] = totals.get(key, Decimal("0")) + Decimal(str(amount or 0))
    return [(labels[key], total) for key, total in totals.items()]
