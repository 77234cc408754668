"""Transaction ingestion service.

This module holds the caller-level policy around the parser:
1. Flatten the incoming message to plain text
2. Run the heuristic parser
3. Consult the LLM fallback only when no amount was found
4. Skip messages that still have no amount
5. Prefer header-derived vendors (email only)
6. Categorize with the user's rules unless the caller supplied a category
7. Apply persistence defaults (currency, date, reference id)
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from expense_ingest.categorization.rules import infer_category_from_rules
from expense_ingest.config import Settings, get_settings
from expense_ingest.core.logging import log_parse_error
from expense_ingest.parsers.dates import to_iso_instant
from expense_ingest.parsers.headers import extract_date_from_headers, extract_vendor_from_headers
from expense_ingest.parsers.transaction import regex_parse_transaction
from expense_ingest.schemas.internal import (
    CsvImportResult,
    EmailMessage,
    ManualTransaction,
    ParseResult,
    TransactionRecord,
)
from expense_ingest.services.csv_import import import_csv
from expense_ingest.services.email import combine_texts, extract_email_text
from expense_ingest.services.llm_fallback import LLMFallback
from expense_ingest.services.rule_provider import RuleProvider

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IngestionService:
    """Turns raw email/SMS/CSV input into TransactionRecords.

    The service never talks to storage: it reads rules through a
    RuleProvider and returns records for the caller to persist.

    Example:
        >>> service = IngestionService(InMemoryRuleProvider())
        >>> record = service.ingest_sms("Paid $12.50 at Cafe Luna", sender="+15550100")
        >>> record.vendor
        'Cafe Luna'
    """

    def __init__(
        self,
        rule_provider: RuleProvider,
        llm_fallback: LLMFallback | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the service.

        Args:
            rule_provider: Source of the user's enabled rules
            llm_fallback: Optional secondary parser used when no amount is found
            settings: Application settings (default: cached settings)
            clock: Current time, used for the date default
        """
        self.rule_provider = rule_provider
        self.llm_fallback = llm_fallback
        self.settings = settings or get_settings()
        self.clock = clock

    def categorize(self, user_id: str | None, vendor: str | None, raw_text: str) -> str | None:
        """Category from a fresh snapshot of the user's rules."""
        rules = self.rule_provider.get_enabled_rules(user_id)
        return infer_category_from_rules(vendor, raw_text, rules)

    def parse_with_fallback(self, text: str, source: str) -> ParseResult:
        """Heuristic parse, then the LLM fallback if no amount was found.

        The fallback result is only accepted when it has an amount.
        """
        result = regex_parse_transaction(text)
        if result.parsed.amount or self.llm_fallback is None:
            return result

        try:
            fallback = self.llm_fallback.parse(text)
        except Exception as e:
            log_parse_error(source, "LLM fallback failed", error=str(e))
            return result

        if fallback is not None and fallback.parsed.amount:
            logger.info("LLM fallback supplied the amount", extra={"source": source})
            return fallback
        return result

    def ingest_email(self, message: EmailMessage) -> TransactionRecord | None:
        """Build a record from an email plus any extracted PDF text.

        Args:
            message: Fetched email

        Returns:
            TransactionRecord, or None when no amount could be found
        """
        body_text = extract_email_text(message.payload)
        combined_text = combine_texts(body_text, message.pdf_texts)

        result = self.parse_with_fallback(combined_text, source="gmail")
        parsed = result.parsed
        if not parsed.amount:
            log_parse_error("gmail", "Skipping email without parsed amount", id=message.id)
            return None

        header_vendor = extract_vendor_from_headers(
            message.headers, self.settings.subject_vendor_max_length
        )
        vendor = header_vendor or parsed.vendor

        return TransactionRecord(
            user_id=message.user_id,
            source="gmail",
            amount=parsed.amount,
            currency=parsed.currency or self.settings.default_currency,
            vendor=vendor,
            date=(
                parsed.date
                or extract_date_from_headers(message.headers)
                or to_iso_instant(self.clock())
            ),
            category=self.categorize(message.user_id, vendor, combined_text),
            confidence_score=result.confidence,
            raw_text=combined_text,
            reference_id=parsed.reference_id or message.id,
            invoice_pdf_url=message.pdf_urls[0] if message.pdf_urls else None,
        )

    def ingest_emails(self, messages: Iterable[EmailMessage]) -> list[TransactionRecord]:
        """Ingest a batch of emails, dropping those without an amount."""
        records = []
        for message in messages:
            record = self.ingest_email(message)
            if record is not None:
                records.append(record)
        logger.info("Email batch ingested", extra={"records": len(records)})
        return records

    def ingest_sms(
        self,
        body: str,
        sender: str | None = None,
        recipient: str | None = None,
        user_id: str | None = None,
    ) -> TransactionRecord | None:
        """Build a record from an SMS body.

        Args:
            body: Message text
            sender: Sender number/name, used when no vendor is found
            recipient: Receiving number (logged only)
            user_id: Owner of the record

        Returns:
            TransactionRecord, or None when no amount could be found
        """
        result = regex_parse_transaction(body)
        parsed = result.parsed
        if not parsed.amount:
            log_parse_error("sms", "Failed to parse SMS amount", sender=sender, recipient=recipient)
            return None

        vendor = parsed.vendor or sender
        return TransactionRecord(
            user_id=user_id,
            source="sms",
            amount=parsed.amount,
            currency=parsed.currency or self.settings.default_currency,
            vendor=vendor,
            date=parsed.date or to_iso_instant(self.clock()),
            category=self.categorize(user_id, vendor, body),
            confidence_score=result.confidence,
            raw_text=body,
            reference_id=parsed.reference_id,
        )

    def create_manual(
        self, entry: ManualTransaction, user_id: str | None = None
    ) -> TransactionRecord:
        """Build a record from caller-supplied fields.

        The caller's category is kept when given; otherwise the user's
        rules run over the vendor and raw text.

        Args:
            entry: Fields entered by the caller
            user_id: Owner of the record

        Returns:
            TransactionRecord with currency and confidence defaults applied
        """
        raw_text = entry.raw_text or ""
        category = entry.category or self.categorize(user_id, entry.vendor, raw_text)

        return TransactionRecord(
            user_id=user_id,
            source=entry.source,
            amount=entry.amount,
            currency=entry.currency or self.settings.default_currency,
            vendor=entry.vendor,
            date=entry.date,
            category=category,
            confidence_score=1.0 if entry.confidence_score is None else entry.confidence_score,
            raw_text=raw_text,
        )

    def ingest_csv(self, text: str, user_id: str | None = None) -> CsvImportResult:
        """Import a CSV export; see csv_import.import_csv for the rules.

        Raises:
            CsvFormatError: If the file can't be imported
        """
        rules = self.rule_provider.get_enabled_rules(user_id)
        result = import_csv(
            text,
            categorize=lambda vendor, row: infer_category_from_rules(vendor, row, rules),
            user_id=user_id,
            default_currency=self.settings.default_currency,
            vendor_keys=tuple(self.settings.csv_vendor_columns),
        )
        logger.info(
            "CSV imported",
            extra={"imported": result.imported, "skipped": result.skipped},
        )
        return result
