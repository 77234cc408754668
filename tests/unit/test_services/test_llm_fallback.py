"""Tests for the LLM parsing fallbacks."""

import json
from decimal import Decimal

import httpx
import pytest

from expense_ingest.services.llm_fallback import HttpLLMFallback, MockLLMFallback

URL = "http://llm.test/api/v1/llm/parse"


def _fallback(handler) -> HttpLLMFallback:
    return HttpLLMFallback(URL, client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestHttpLLMFallback:
    """Test suite for HttpLLMFallback."""

    def test_posts_text_and_reads_result(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "parsed": {"amount": "12.50", "vendor": "Acme", "referenceId": "R-1234"},
                    "confidence": 0.8,
                },
            )

        result = _fallback(handler).parse("Acme invoice")

        assert seen["body"] == {"text": "Acme invoice"}
        assert result.parsed.amount == Decimal("12.50")
        assert result.parsed.vendor == "Acme"
        assert result.parsed.reference_id == "R-1234"
        assert result.confidence == 0.8

    def test_missing_confidence_defaults(self):
        result = _fallback(
            lambda request: httpx.Response(200, json={"parsed": {"amount": 3.5}})
        ).parse("x")
        assert result.confidence == 0.7

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, json={"error": "boom"}),
            httpx.Response(200, text="not json"),
            httpx.Response(200, json=["parsed"]),
            httpx.Response(200, json={"parsed": "12.50"}),
            httpx.Response(200, json={"parsed": {"amount": "lots"}}),
            httpx.Response(200, json={"parsed": {}, "confidence": 5}),
        ],
    )
    def test_failures_return_none(self, response):
        assert _fallback(lambda request: response).parse("x") is None

    def test_transport_error_returns_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        assert _fallback(handler).parse("x") is None


class TestMockLLMFallback:
    def test_amount_found(self):
        result = MockLLMFallback().parse("Paid 12.50 at Acme")
        assert result.parsed.amount == Decimal("12.50")
        assert result.confidence == 0.7

    def test_no_amount_reports_low_confidence(self):
        result = MockLLMFallback().parse("hello")
        assert result.parsed.amount is None
        assert result.confidence == 0.4
