"""
Materialization of handled-error outcomes into HTTP responses.

The JSON body carries the user-facing message only; developer messages,
context and stack traces stay in logs and persisted records.
"""

from collections.abc import Iterable
from typing import Any, Optional

from fastapi.responses import JSONResponse

from errorhub.domain.reporting.entities import Outcome, UiNotice


def outcome_body(outcome: Outcome, notices: Optional[Iterable[UiNotice]] = None) -> dict[str, Any]:
    info = outcome.info
    return {
        "error": outcome.code,
        "message": outcome.user_message,
        "blocking": info.blocking_level.value,
        "display_mode": info.display_mode.value,
        "notices": [notice.to_dict() for notice in notices or ()],
    }


def materialize_outcome(
    outcome: Outcome, notices: Optional[Iterable[UiNotice]] = None
) -> JSONResponse:
    """Render an outcome as a JSON response with its status code.

    Args:
        outcome: Blocked or Continue returned by ErrorManager.handle.
        notices: UI notices queued while handling the request.
    """
    return JSONResponse(
        status_code=outcome.status_code,
        content=outcome_body(outcome, notices),
    )


def error_response(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, Optional[str]] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)
