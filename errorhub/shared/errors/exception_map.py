"""
Mapping of unexpected exceptions to catalog error codes.

The first matching entry wins, so subclasses are listed before their
bases (JSONDecodeError is a ValueError, FileNotFoundError an OSError).
"""

import json
from typing import Any

import httpx
from sqlalchemy.exc import SQLAlchemyError

DEFAULT_ERROR_CODE = "UNEXPECTED_ERROR"

EXCEPTION_CODES: tuple[tuple[type[BaseException], str], ...] = (
    (SQLAlchemyError, "DATABASE_ERROR"),
    (PermissionError, "AUTHORIZATION_ERROR"),
    (json.JSONDecodeError, "JSON_ERROR"),
    (FileNotFoundError, "FILE_NOT_FOUND"),
    (TimeoutError, "TIMEOUT_ERROR"),
    (httpx.TimeoutException, "TIMEOUT_ERROR"),
)


def map_exception_to_code(exc: BaseException) -> str:
    """Return the catalog code used for an unhandled exception."""
    for exc_type, code in EXCEPTION_CODES:
        if isinstance(exc, exc_type):
            return code
    return DEFAULT_ERROR_CODE


def exception_context(exc: BaseException) -> dict[str, Any]:
    """Placeholder values describing exc, for message templates."""
    return {
        "exception_class": type(exc).__name__,
        "exception_message": str(exc),
    }
