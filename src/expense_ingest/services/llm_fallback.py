"""
LLM-based parsing fallback.

Consulted ONLY when the heuristic parser finds no amount. The model
behind it is out of scope here: a fallback is anything that takes the
same text and returns a ParseResult (or None when it has nothing).
"""

import logging
from typing import Protocol

import httpx
from pydantic import ValidationError

from expense_ingest.parsers.transaction import regex_parse_transaction
from expense_ingest.schemas.internal import ParsedTransaction, ParseResult

logger = logging.getLogger(__name__)

DEFAULT_LLM_CONFIDENCE = 0.7
NO_AMOUNT_CONFIDENCE = 0.4


class LLMFallback(Protocol):
    """Secondary parsing capability with the ParseResult contract."""

    def parse(self, text: str) -> ParseResult | None:
        ...


class MockLLMFallback:
    """Stand-in model: reruns the heuristic parser.

    Mirrors the "mock-llm" endpoint: when no amount is found the
    confidence is reported as 0.4.
    """

    model = "mock-llm"

    def parse(self, text: str) -> ParseResult | None:
        result = regex_parse_transaction(text)
        if result.parsed.amount:
            return result
        return ParseResult(parsed=result.parsed, confidence=NO_AMOUNT_CONFIDENCE)


class HttpLLMFallback:
    """Calls an LLM parsing endpoint over HTTP.

    The endpoint receives {"text": ...} and answers with
    {"parsed": {...}, "confidence": float}. Failures are logged and
    reported as None so ingestion can carry on.

    Example:
        >>> fallback = HttpLLMFallback("http://localhost:8000/api/v1/llm/parse")
        >>> result = fallback.parse("Paid Acme")
    """

    def __init__(
        self,
        url: str,
        timeout: float = 15.0,
        client: httpx.Client | None = None,
    ):
        """
        Initialize the HTTP fallback.

        Args:
            url: Endpoint URL
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client (tests inject a MockTransport)
        """
        self.url = url
        self.timeout = timeout
        self.client = client or httpx.Client(timeout=timeout)

    def parse(self, text: str) -> ParseResult | None:
        try:
            response = self.client.post(self.url, json={"text": text})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"LLM fallback failed: {e}", extra={"url": self.url})
            return None

        if not isinstance(payload, dict) or not isinstance(payload.get("parsed"), dict):
            logger.warning("LLM fallback returned no parsed payload", extra={"url": self.url})
            return None

        try:
            parsed = ParsedTransaction.model_validate(_normalize_keys(payload["parsed"]))
            confidence = payload.get("confidence")
            return ParseResult(
                parsed=parsed,
                confidence=DEFAULT_LLM_CONFIDENCE if confidence is None else confidence,
            )
        except ValidationError as e:
            logger.warning(
                "LLM fallback returned an invalid payload",
                extra={"url": self.url, "errors": e.error_count()},
            )
            return None

    def close(self) -> None:
        self.client.close()


def _normalize_keys(data: dict) -> dict:
    # Upstream services may answer with "referenceId".
    converted = dict(data)
    if "referenceId" in converted and "reference_id" not in converted:
        converted["reference_id"] = converted.pop("referenceId")
    return converted
