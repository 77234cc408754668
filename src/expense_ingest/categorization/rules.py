"""User-rule transaction categorization.

Rules are owned by the storage collaborator and handed in already
filtered to the user's enabled rules, newest first. Matching is a plain
case-insensitive substring test over "<vendor> <raw text>"; the first
matching rule wins, not the most specific one.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from expense_ingest.schemas.internal import Rule


def _rule_fields(rule: Rule | Mapping[str, Any]) -> tuple[str, str | None, bool]:
    if isinstance(rule, Mapping):
        return rule.get("pattern") or "", rule.get("category"), rule.get("enabled", True)
    return rule.pattern or "", rule.category, rule.enabled


def build_haystack(vendor: str | None, raw_text: str | None) -> str:
    """Lower-cased text the rule patterns are searched in."""
    return f"{vendor or ''} {raw_text or ''}".lower()


def infer_category_from_rules(
    vendor: str | None,
    raw_text: str | None,
    rules: Iterable[Rule | Mapping[str, Any]] | None,
) -> str | None:
    """Return the category of the first rule whose pattern appears in the text.

    Args:
        vendor: Vendor name, if known
        raw_text: Raw message/row text
        rules: Ordered rules (Rule models or dicts with pattern/category/enabled)

    Returns:
        Category string, or None when no rule matches
    """
    if not rules:
        return None

    haystack = build_haystack(vendor, raw_text)

    for rule in rules:
        pattern, category, enabled = _rule_fields(rule)
        if not enabled:
            continue
        pattern = pattern.strip().lower()
        if not pattern:
            continue
        if pattern in haystack:
            return category

    return None
