"""
Error-handling middleware.

Binds request metadata and a UI-notice store for every request, then
routes any exception the application did not handle itself through the
ErrorManager held by the application container. The client receives the
materialized outcome, never a stack trace.
"""

import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from errorhub.domain.reporting.entities import RequestMetadata
from errorhub.domain.reporting.errors import ResolutionExhaustedError
from errorhub.infrastructure.reporting.request_context import bind_request
from errorhub.shared.errors.exception_map import exception_context, map_exception_to_code
from errorhub.shared.errors.responses import error_response, materialize_outcome

logger = logging.getLogger(__name__)


def request_metadata(request: Request) -> RequestMetadata:
    """Extract the request attributes recorded with each error."""
    user = request.scope.get("user")
    identity: Optional[str] = None
    if user is not None and getattr(user, "is_authenticated", False):
        identity = str(getattr(user, "identity", "") or "") or None

    return RequestMetadata(
        method=request.method,
        url=str(request.url),
        ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        user_id=identity,
    )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turns unexpected exceptions into handled errors."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        with bind_request(request_metadata(request)) as notices:
            try:
                return await call_next(request)
            except Exception as exc:
                code = map_exception_to_code(exc)
                context = exception_context(exc)
                context["request_path"] = request.url.path
                manager = request.app.state.container.manager
                try:
                    outcome = await run_in_threadpool(manager.handle, code, context, exc)
                except ResolutionExhaustedError as fatal:
                    logger.critical("%s: %s", fatal.code, fatal.message)
                    return error_response(500, fatal.code)
                return materialize_outcome(outcome, notices)
