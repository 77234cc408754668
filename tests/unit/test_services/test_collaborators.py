from expense_ingest.schemas.internal import Rule, TransactionRecord
from expense_ingest.services.rule_provider import InMemoryRuleProvider
from expense_ingest.services.sink import InMemoryTransactionSink, LoggingTransactionSink


def test_newest_rule_first() -> None:
    provider = InMemoryRuleProvider()
    provider.add_rule("u1", Rule(pattern="a", category="Old"))
    provider.add_rule("u1", Rule(pattern="a", category="New"))

    assert [rule.category for rule in provider.get_enabled_rules("u1")] == ["New", "Old"]


def test_only_enabled_rules_for_user() -> None:
    provider = InMemoryRuleProvider(
        {
            "u1": [Rule(pattern="a", category="A", enabled=False), Rule(pattern="b", category="B")],
            "u2": [Rule(pattern="c", category="C")],
        }
    )

    assert [rule.category for rule in provider.get_enabled_rules("u1")] == ["B"]
    assert provider.get_enabled_rules("nobody") == []


def test_sinks(caplog) -> None:
    record = TransactionRecord(
        source="sms",
        amount="1.00",
        currency="USD",
        date="2024-01-10T00:00:00.000Z",
        confidence_score=0.7,
        raw_text="x",
    )
    memory = InMemoryTransactionSink()
    memory.save([record])
    assert memory.records == [record]

    with caplog.at_level("INFO", logger="expense_ingest.services.sink"):
        LoggingTransactionSink().save([record])
    assert "Transaction ready for persistence" in caplog.text
