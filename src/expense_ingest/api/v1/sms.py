"""SMS webhook endpoint (Twilio-style form posts or JSON)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import PlainTextResponse

from expense_ingest.api.deps import get_ingestion_service, get_transaction_sink
from expense_ingest.services.ingestion import IngestionService
from expense_ingest.services.sink import TransactionSink

router = APIRouter(prefix="/sms", tags=["sms"])


def _first(data, *keys: str) -> str | None:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


async def _read_sms_fields(request: Request) -> tuple[str | None, str | None, str | None]:
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            data = await request.json()
        except ValueError:
            return None, None, None
        if not isinstance(data, dict):
            return None, None, None
        return (
            _first(data, "body", "Body"),
            _first(data, "from", "From"),
            _first(data, "to", "To"),
        )

    form = await request.form()
    return _first(form, "Body"), _first(form, "From"), _first(form, "To")


@router.post(
    "",
    response_class=PlainTextResponse,
    summary="Receive an SMS",
    description="""
    Parse an incoming SMS and hand the transaction to the sink.

    Always answers 200 "OK" once a body is present, even when no amount
    could be parsed, so the SMS gateway does not retry.
    """,
)
async def receive_sms(
    request: Request,
    user_id: Annotated[str | None, Query(description="Owner of the transaction")] = None,
    service: IngestionService = Depends(get_ingestion_service),
    sink: TransactionSink = Depends(get_transaction_sink),
) -> PlainTextResponse:
    body, sender, recipient = await _read_sms_fields(request)
    if not body:
        return PlainTextResponse("Missing SMS body", status_code=status.HTTP_400_BAD_REQUEST)

    record = service.ingest_sms(body, sender=sender, recipient=recipient, user_id=user_id)
    if record is not None:
        sink.save([record])

    return PlainTextResponse("OK")
