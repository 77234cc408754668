"""Category label endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from expense_ingest.categorization.labels import category_options, summarize_by_category
from expense_ingest.schemas.api import CategoryOptionsResponse, CategorySummaryItem
from expense_ingest.schemas.internal import TransactionRecord

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryOptionsResponse, summary="Category picker options")
def list_categories(
    existing: Annotated[
        list[str], Query(description="Categories already present in the user's data")
    ] = [],
) -> CategoryOptionsResponse:
    return CategoryOptionsResponse(categories=category_options(existing))


@router.post(
    "/summary",
    response_model=list[CategorySummaryItem],
    summary="Spend per category",
    description="Totals grouped by category lookup key, one display label per group.",
)
def category_summary(transactions: list[TransactionRecord]) -> list[CategorySummaryItem]:
    return [
        CategorySummaryItem(label=label, total=total)
        for label, total in summarize_by_category(transactions)
    ]
