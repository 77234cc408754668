"""Transaction endpoints: manual entry, CSV import and email ingestion."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from expense_ingest.api.deps import get_ingestion_service, get_transaction_sink
from expense_ingest.core.exceptions import CsvFormatError
from expense_ingest.schemas.api import CsvImportResponse, EmailIngestResponse
from expense_ingest.schemas.internal import EmailMessage, ManualTransaction, TransactionRecord
from expense_ingest.services.ingestion import IngestionService
from expense_ingest.services.sink import TransactionSink

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post(
    "",
    response_model=TransactionRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Add a transaction by hand",
    description="""
    Record a transaction whose fields are already known.

    - **category**: kept as given; when omitted, the user's rules are
      matched against vendor and raw_text
    - **currency** defaults to the configured currency (USD)
    - **confidence_score** defaults to 1
    """,
)
def create_transaction(
    entry: ManualTransaction,
    user_id: Annotated[str | None, Query(description="Owner of the transaction")] = None,
    service: IngestionService = Depends(get_ingestion_service),
    sink: TransactionSink = Depends(get_transaction_sink),
) -> TransactionRecord:
    record = service.create_manual(entry, user_id=user_id)
    sink.save([record])
    return record


@router.post(
    "/import-csv",
    response_model=CsvImportResponse,
    summary="Import a CSV export",
    description="""
    Import transactions from a bank/card CSV export uploaded as `file`.

    The header row must contain an amount column and a date column
    (matched by substring). Currency and description/vendor/merchant/
    narration columns are optional. Invalid rows are skipped.
    """,
)
async def import_csv(
    file: Annotated[UploadFile | None, File(description="CSV file")] = None,
    user_id: Annotated[str | None, Query(description="Owner of the rows")] = None,
    service: IngestionService = Depends(get_ingestion_service),
    sink: TransactionSink = Depends(get_transaction_sink),
) -> CsvImportResponse:
    if file is None:
        raise CsvFormatError("CSV_001", details={"reason": "no file"})

    content = await file.read()
    result = service.ingest_csv(content.decode("utf-8-sig", errors="replace"), user_id=user_id)
    sink.save(result.transactions)

    return CsvImportResponse(
        imported=result.imported,
        skipped=result.skipped,
        transactions=result.transactions,
    )


@router.post(
    "/ingest-emails",
    response_model=EmailIngestResponse,
    summary="Ingest fetched emails",
    description="""
    Turn already-fetched emails (payload tree plus extracted PDF text)
    into transactions. Emails without an amount, even after the LLM
    fallback, are skipped.
    """,
)
def ingest_emails(
    messages: list[EmailMessage],
    service: IngestionService = Depends(get_ingestion_service),
    sink: TransactionSink = Depends(get_transaction_sink),
) -> EmailIngestResponse:
    records = service.ingest_emails(messages)
    if records:
        sink.save(records)

    return EmailIngestResponse(
        inserted=len(records),
        skipped=len(messages) - len(records),
        transactions=records,
    )
