"""API tests for the parse endpoints."""

from decimal import Decimal

import pytest
from httpx import AsyncClient

RECEIPT = "Your receipt from Whole Foods: $45.67 on 2024-01-10, ref: TXN12345"


@pytest.mark.asyncio
async def test_parse_receipt(client: AsyncClient):
    response = await client.post("/api/v1/parse", json={"text": RECEIPT})

    assert response.status_code == 200
    data = response.json()
    assert str(data["parsed"]["amount"]) == "45.67"
    assert data["parsed"]["currency"] == "USD"
    assert data["parsed"]["date"] == "2024-01-10T00:00:00.000Z"
    assert data["parsed"]["vendor"] == "Whole Foods"
    assert data["parsed"]["reference_id"] == "TXN12345"
    assert data["confidence"] == 0.95
    assert data["vendor"] == "Whole Foods"
    assert data["category"] is None


@pytest.mark.asyncio
async def test_parse_with_headers_and_rules(client: AsyncClient):
    response = await client.post(
        "/api/v1/parse",
        json={
            "text": RECEIPT,
            "headers": [{"name": "From", "value": '"WFM Online" <orders@wfm.example>'}],
            "rules": [
                {"pattern": "whole foods", "category": "groceries"},
                {"pattern": "wfm", "category": "Shopping"},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["vendor"] == "WFM Online"
    assert data["parsed"]["vendor"] == "Whole Foods"
    assert data["category"] == "groceries"
    assert data["category_label"] == "Groceries"


@pytest.mark.asyncio
async def test_parse_empty_text(client: AsyncClient):
    response = await client.post("/api/v1/parse", json={})

    assert response.status_code == 200
    data = response.json()
    assert data["confidence"] == 0.3
    assert data["parsed"]["amount"] is None


@pytest.mark.asyncio
async def test_parse_validation_error(client: AsyncClient):
    response = await client.post("/api/v1/parse", json={"text": ["not", "a", "string"]})

    assert response.status_code == 400
    data = response.json()
    assert data["error_code"] == "VAL_001"
    assert data["retry_allowed"] is True


@pytest.mark.asyncio
async def test_llm_parse_requires_text(client: AsyncClient):
    response = await client.post("/api/v1/llm/parse", json={"text": ""})

    assert response.status_code == 400
    data = response.json()
    assert data["error_code"] == "API_001"
    assert data["user_message"] == "'text' is required."


@pytest.mark.asyncio
async def test_llm_parse_mock_model(client: AsyncClient):
    response = await client.post("/api/v1/llm/parse", json={"text": "Paid 12.50 at Acme"})

    assert response.status_code == 200
    data = response.json()
    assert data["model"] == "mock-llm"
    assert Decimal(str(data["parsed"]["amount"])) == Decimal("12.50")
    assert data["confidence"] == 0.7


@pytest.mark.asyncio
async def test_llm_parse_without_amount(client: AsyncClient):
    response = await client.post("/api/v1/llm/parse", json={"text": "hello"})

    assert response.status_code == 200
    assert response.json()["confidence"] == 0.4
