import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

sys.path.append(str(Path(__file__).parents[1] / "src"))

from expense_ingest.api.deps import get_llm_fallback, get_rule_provider, get_transaction_sink
from expense_ingest.main import app
from expense_ingest.schemas.internal import Rule
from expense_ingest.services.rule_provider import InMemoryRuleProvider
from expense_ingest.services.sink import InMemoryTransactionSink


@pytest.fixture
def rule_provider() -> InMemoryRuleProvider:
    """Rules for "user-1": groceries first, then ride sharing."""
    return InMemoryRuleProvider(
        {
            "user-1": [
                Rule(pattern="uber", category="transport"),
                Rule(pattern="whole foods", category="groceries"),
            ]
        }
    )


@pytest.fixture
def sink() -> InMemoryTransactionSink:
    return InMemoryTransactionSink()


@pytest.fixture
async def client(rule_provider: InMemoryRuleProvider, sink: InMemoryTransactionSink):
    """Provide test client with in-memory rules and sink, no LLM fallback."""
    app.dependency_overrides[get_rule_provider] = lambda: rule_provider
    app.dependency_overrides[get_transaction_sink] = lambda: sink
    app.dependency_overrides[get_llm_fallback] = lambda: None

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
