from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from expense_ingest.api.middleware.error_handler import (
    handle_generic_error,
    handle_ingestion_error,
    handle_validation_error,
)
from expense_ingest.api.middleware.logging import RequestLoggingMiddleware
from expense_ingest.api.v1 import router as v1_router
from expense_ingest.api.v1.health import router as health_router
from expense_ingest.config import settings
from expense_ingest.core.exceptions import IngestionError
from expense_ingest.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, json_format=settings.log_json)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Expense Ingest API",
        description="Transaction parsing and categorization for emails, SMS and CSV exports",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Most specific first
    app.add_exception_handler(IngestionError, handle_ingestion_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
