"""Text parsing endpoints."""

from fastapi import APIRouter, Depends

from expense_ingest.categorization.labels import display_label
from expense_ingest.categorization.rules import infer_category_from_rules
from expense_ingest.config import Settings, get_settings
from expense_ingest.core.exceptions import InvalidInputError
from expense_ingest.parsers.headers import extract_vendor_from_headers
from expense_ingest.parsers.transaction import regex_parse_transaction
from expense_ingest.schemas.api import (
    LLMParseRequest,
    LLMParseResponse,
    ParseRequest,
    ParseResponse,
)
from expense_ingest.services.llm_fallback import MockLLMFallback

router = APIRouter(tags=["parse"])


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Parse transaction text",
    description="""
    Run the heuristic parser over plain text.

    - **headers**: optional email headers; a From/Subject-derived vendor
      replaces the body-derived one
    - **rules**: optional ordered rules; the first pattern found in
      "<vendor> <text>" decides the category

    Never fails on odd input: unrecognized text returns empty fields
    with confidence 0.3.
    """,
)
def parse_text(
    request: ParseRequest,
    settings: Settings = Depends(get_settings),
) -> ParseResponse:
    result = regex_parse_transaction(request.text)
    headers = [header.model_dump() for header in request.headers]
    vendor = (
        extract_vendor_from_headers(headers, settings.subject_vendor_max_length)
        or result.parsed.vendor
    )
    category = infer_category_from_rules(vendor, request.text, request.rules)

    return ParseResponse(
        parsed=result.parsed,
        confidence=result.confidence,
        vendor=vendor,
        category=category,
        category_label=display_label(category) if category else None,
    )


@router.post(
    "/llm/parse",
    response_model=LLMParseResponse,
    summary="LLM parsing fallback (mock model)",
)
def llm_parse(request: LLMParseRequest) -> LLMParseResponse:
    if not request.text:
        raise InvalidInputError("API_001")

    fallback = MockLLMFallback()
    result = fallback.parse(request.text)
    return LLMParseResponse(
        parsed=result.parsed,
        confidence=result.confidence,
        model=fallback.model,
    )
