"""Internal data schemas for parsed transaction text.

These models are the hand-off structures between the heuristic parser,
the categorization rules and the ingestion jobs that persist results.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ParsedTransaction(BaseModel):
    """Best-effort transaction fields extracted from free-form text.

    Every field is independently optional: a missing field means
    "not found", never an error.
    """

    model_config = ConfigDict(frozen=True)

    amount: Decimal | None = Field(None, description="Monetary magnitude as a plain decimal")
    currency: str | None = Field(None, description="ISO currency code (e.g. USD)")
    vendor: str | None = Field(None, description="Merchant or sender name")
    date: str | None = Field(None, description="ISO-8601 instant, e.g. 2024-01-10T00:00:00.000Z")
    reference_id: str | None = Field(None, description="Transaction/reference number")


class ParseResult(BaseModel):
    """Parsed fields plus the discrete confidence score."""

    model_config = ConfigDict(frozen=True)

    parsed: ParsedTransaction = Field(default_factory=ParsedTransaction)
    confidence: float = Field(0.3, ge=0.0, le=1.0)


class Rule(BaseModel):
    """User-defined categorization rule (pattern -> category).

    `pattern` is matched as a case-insensitive substring.
    """

    pattern: str
    category: str
    enabled: bool = True


class TransactionRecord(BaseModel):
    """A transaction row ready for the storage collaborator."""

    user_id: str | None = None
    source: str = Field(..., description="'gmail', 'sms' or 'manual'")
    amount: Decimal
    currency: str
    vendor: str | None = None
    date: str
    category: str | None = None
    confidence_score: float
    raw_text: str
    reference_id: str | None = None
    invoice_pdf_url: str | None = None


class ManualTransaction(BaseModel):
    """A transaction entered by hand (or by another client) rather than parsed.

    A category supplied here wins; the user's rules only fill it in when
    it is missing.
    """

    amount: Decimal
    date: str = Field(..., min_length=1)
    currency: str | None = None
    vendor: str | None = None
    category: str | None = None
    source: str = "manual"
    raw_text: str | None = None
    confidence_score: float | None = Field(None, ge=0.0, le=1.0)


class EmailMessage(BaseModel):
    """An email already fetched by the mail collaborator.

    `payload` is the Gmail-style MIME tree; `pdf_texts` holds text that an
    external extractor pulled from PDF attachments.
    """

    id: str
    user_id: str | None = None
    headers: list[dict[str, str]] = Field(default_factory=list)
    payload: dict = Field(default_factory=dict)
    pdf_texts: list[str] = Field(default_factory=list)
    pdf_urls: list[str] = Field(default_factory=list)


class CsvImportResult(BaseModel):
    """Outcome of importing a CSV export."""

    transactions: list[TransactionRecord] = Field(default_factory=list)
    skipped: int = 0

    @property
    def imported(self) -> int:
        return len(self.transactions)
