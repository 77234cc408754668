"""Request/response schemas for the HTTP API."""

from decimal import Decimal

from pydantic import BaseModel, Field

from expense_ingest.schemas.internal import ParsedTransaction, Rule, TransactionRecord


class HeaderItem(BaseModel):
    """Single email header."""

    name: str
    value: str


class ParseRequest(BaseModel):
    """Text to parse, with optional email headers and categorization rules."""

    text: str = Field("", description="Plain text (email body + PDF text, SMS body, CSV row)")
    headers: list[HeaderItem] = Field(default_factory=list)
    rules: list[Rule] = Field(default_factory=list, description="Ordered rules, first match wins")


class ParseResponse(BaseModel):
    """Parser output plus the derived vendor and category."""

    parsed: ParsedTransaction
    confidence: float
    vendor: str | None = Field(None, description="Header vendor if available, else parsed vendor")
    category: str | None = None
    category_label: str | None = None


class LLMParseRequest(BaseModel):
    text: str | None = None


class LLMParseResponse(BaseModel):
    parsed: ParsedTransaction
    confidence: float
    model: str


class CsvImportResponse(BaseModel):
    """CSV import outcome."""

    imported: int
    skipped: int
    transactions: list[TransactionRecord]


class EmailIngestResponse(BaseModel):
    """Email batch outcome."""

    inserted: int
    skipped: int
    transactions: list[TransactionRecord]


class CategorySummaryItem(BaseModel):
    label: str
    total: Decimal


class CategoryOptionsResponse(BaseModel):
    categories: list[str]
