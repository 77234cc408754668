"""Transaction categorization utilities.

Categorization is driven entirely by user-defined rules passed in by the
caller (no datastore access here), plus label normalization so the same
category is never shown under two spellings.
"""

from .labels import DEFAULT_CATEGORIES, display_label, lookup_key
from .rules import infer_category_from_rules

__all__ = [
    "DEFAULT_CATEGORIES",
    "display_label",
    "infer_category_from_rules",
    "lookup_key",
]
