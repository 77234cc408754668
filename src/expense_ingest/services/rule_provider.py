"""Rule lookup seam between ingestion jobs and rule storage.

Rules are persisted and edited by the storage collaborator. Ingestion
asks a RuleProvider for a fresh snapshot on every call; nothing is
cached across calls.
"""

from collections.abc import Iterable
from typing import Protocol

from expense_ingest.schemas.internal import Rule


class RuleProvider(Protocol):
    """Source of a user's enabled rules, newest first."""

    def get_enabled_rules(self, user_id: str | None) -> list[Rule]:
        ...


class InMemoryRuleProvider:
    """Rules held in memory, keyed by user id.

    Rules added later take precedence, matching the storage ordering
    (most recently created first).
    """

    def __init__(self, rules: dict[str | None, Iterable[Rule]] | None = None):
        self._rules: dict[str | None, list[Rule]] = {}
        for user_id, user_rules in (rules or {}).items():
            for rule in user_rules:
                self.add_rule(user_id, rule)

    def add_rule(self, user_id: str | None, rule: Rule) -> None:
        self._rules.setdefault(user_id, []).insert(0, rule)

    def get_enabled_rules(self, user_id: str | None) -> list[Rule]:
        return [rule for rule in self._rules.get(user_id, []) if rule.enabled]
