"""Error codes and user-friendly messages.

This module defines the error catalog for transaction ingestion.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable

Parsing and categorization never produce these errors; they only
surface at the ingestion/API boundary.
"""

ERROR_CATALOG: dict[str, dict] = {
    "CSV_001": {
        "code": "CSV_001",
        "message": "CSV file missing or empty",
        "user_message": "CSV must contain a header and at least one row.",
        "suggestion": "Export the statement again and upload it under the 'file' field.",
        "retry_allowed": False,
    },
    "CSV_002": {
        "code": "CSV_002",
        "message": "CSV header lacks amount or date column",
        "user_message": "CSV must at least contain amount and date columns.",
        "suggestion": "Make sure the header row has columns named like 'Amount' and 'Date'.",
        "retry_allowed": False,
    },
    "CSV_003": {
        "code": "CSV_003",
        "message": "No valid rows to import",
        "user_message": "None of the rows in this CSV could be imported.",
        "suggestion": "Check that amounts are numbers and dates are readable.",
        "retry_allowed": False,
    },
    "API_001": {
        "code": "API_001",
        "message": "Required text input missing",
        "user_message": "'text' is required.",
        "suggestion": "Send a JSON body with a non-empty 'text' field.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred",
        "suggestion": "Please try again later or contact support",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
