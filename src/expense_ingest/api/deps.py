"""FastAPI dependency injection for ingestion collaborators."""

from functools import lru_cache

from fastapi import Depends

from expense_ingest.config import Settings, get_settings
from expense_ingest.services.ingestion import IngestionService
from expense_ingest.services.llm_fallback import HttpLLMFallback, LLMFallback
from expense_ingest.services.rule_provider import InMemoryRuleProvider, RuleProvider
from expense_ingest.services.sink import LoggingTransactionSink, TransactionSink


@lru_cache
def get_rule_provider() -> RuleProvider:
    """
    Get the rule provider.

    Rule storage lives outside this service; deployments override this
    dependency with a provider backed by their datastore.
    """
    return InMemoryRuleProvider()


def get_llm_fallback(settings: Settings = Depends(get_settings)) -> LLMFallback | None:
    """
    Get the LLM fallback, if enabled.

    Args:
        settings: Application settings

    Returns:
        HttpLLMFallback pointed at the configured URL, or None
    """
    if not settings.llm_fallback_enabled:
        return None
    return _http_llm_fallback(settings.llm_fallback_url, settings.llm_timeout_seconds)


@lru_cache
def _http_llm_fallback(url: str, timeout: float) -> HttpLLMFallback:
    # One client (and connection pool) per endpoint.
    return HttpLLMFallback(url, timeout=timeout)


@lru_cache
def get_transaction_sink() -> TransactionSink:
    """Get the sink that receives ingested records."""
    return LoggingTransactionSink()


def get_ingestion_service(
    rule_provider: RuleProvider = Depends(get_rule_provider),
    llm_fallback: LLMFallback | None = Depends(get_llm_fallback),
    settings: Settings = Depends(get_settings),
) -> IngestionService:
    """
    Get an ingestion service wired to the current collaborators.

    Args:
        rule_provider: Rule provider
        llm_fallback: Optional LLM fallback
        settings: Application settings

    Returns:
        IngestionService instance
    """
    return IngestionService(rule_provider, llm_fallback=llm_fallback, settings=settings)
