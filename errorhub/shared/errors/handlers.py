"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from errorhub.domain.reporting.errors import (
    EnvironmentForbiddenError,
    HandledError,
    InvalidDefinitionError,
    ReportingDomainError,
    ResolutionExhaustedError,
    UnknownErrorCodeError,
    UnknownRecoveryActionError,
)
from errorhub.infrastructure.reporting.request_context import current_notices
from errorhub.shared.errors.responses import error_response, materialize_outcome

logger = logging.getLogger(__name__)

HTTP_403 = 403
HTTP_404 = 404
HTTP_422 = 422
HTTP_500 = 500


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(HandledError)
    async def handle_handled_error(
        _request: Request, exc: HandledError
    ) -> JSONResponse:
        """Materialize an error that was already handled and thrown."""
        if exc.outcome is None:
            logger.error("Handled error [%s] carries no outcome", exc.code)
            return error_response(HTTP_500, "Internal server error")
        return materialize_outcome(exc.outcome, current_notices())

    @app.exception_handler(UnknownErrorCodeError)
    async def handle_unknown_code(
        _request: Request, exc: UnknownErrorCodeError
    ) -> JSONResponse:
        logger.warning("Unknown error code: %s", exc.code)
        return error_response(HTTP_404, "Unknown error code", exc.message)

    @app.exception_handler(InvalidDefinitionError)
    async def handle_invalid_definition(
        _request: Request, exc: InvalidDefinitionError
    ) -> JSONResponse:
        logger.warning("Invalid definition: %s", exc.message)
        return error_response(HTTP_422, "Invalid error definition", exc.message)

    @app.exception_handler(EnvironmentForbiddenError)
    async def handle_environment_forbidden(
        _request: Request, exc: EnvironmentForbiddenError
    ) -> JSONResponse:
        logger.warning("Feature refused in environment %s", exc.environment)
        return error_response(HTTP_403, "Forbidden", exc.message)

    @app.exception_handler(UnknownRecoveryActionError)
    async def handle_unknown_recovery_action(
        _request: Request, exc: UnknownRecoveryActionError
    ) -> JSONResponse:
        logger.warning("Unknown recovery action: %s", exc.action)
        return error_response(HTTP_422, "Unknown recovery action", exc.message)

    @app.exception_handler(ResolutionExhaustedError)
    async def handle_resolution_exhausted(
        _request: Request, exc: ResolutionExhaustedError
    ) -> JSONResponse:
        """Last resort when neither the code nor any fallback is configured."""
        logger.critical("%s: %s", exc.code, exc.message)
        return error_response(HTTP_500, exc.code)

    @app.exception_handler(ReportingDomainError)
    async def handle_reporting_domain(
        _request: Request, exc: ReportingDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled reporting domain errors."""
        logger.error("Unhandled reporting domain error: %s", exc.message)
        return error_response(HTTP_500, "Internal server error")
