"""Hand-off point from ingestion to the storage collaborator."""

import logging
from typing import Protocol

from expense_ingest.schemas.internal import TransactionRecord

logger = logging.getLogger(__name__)


class TransactionSink(Protocol):
    """Receives records that passed ingestion."""

    def save(self, records: list[TransactionRecord]) -> None:
        ...


class LoggingTransactionSink:
    """Default sink: logs what would be persisted."""

    def save(self, records: list[TransactionRecord]) -> None:
        for record in records:
            logger.info(
                "Transaction ready for persistence",
                extra={
                    "user_id": record.user_id,
                    "source": record.source,
                    "confidence": record.confidence_score,
                    "has_category": record.category is not None,
                },
            )


class InMemoryTransactionSink:
    """Keeps records in a list (tests and local runs)."""

    def __init__(self):
        self.records: list[TransactionRecord] = []

    def save(self, records: list[TransactionRecord]) -> None:
        self.records.extend(records)
