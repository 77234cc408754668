"""Custom exception classes for transaction ingestion.

Each exception maps to an error code defined in errors.py. The parser
and the rule engine are total over their inputs and never raise these;
only the ingestion jobs and the HTTP layer do.
"""

from typing import Any


class IngestionError(Exception):
    """Base exception for all ingestion errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "CSV_002")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class CsvFormatError(IngestionError):
    """Raised when a CSV export cannot be imported.

    Common causes:
    - Empty file or header only (CSV_001)
    - Missing amount/date columns (CSV_002)
    - Every row invalid (CSV_003)
    """

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(error_code, details=details, http_status=400)


class InvalidInputError(IngestionError):
    """Raised when a request lacks the text to parse."""

    def __init__(self, error_code: str = "API_001", details: dict[str, Any] | None = None):
        super().__init__(error_code, details=details, http_status=400)

