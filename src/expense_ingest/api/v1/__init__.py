"""API version 1 routes."""

from fastapi import APIRouter

from expense_ingest.api.v1 import categories, parse, sms, transactions

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(parse.router)
router.include_router(sms.router)
router.include_router(transactions.router)
router.include_router(categories.router)
