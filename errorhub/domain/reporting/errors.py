"""
Domain-specific errors for the reporting bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""

from typing import Any, Optional

from errorhub.domain.reporting.entities import Outcome


class ReportingDomainError(Exception):
    """Base error for all reporting domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ResolutionExhaustedError(ReportingDomainError):
    """Raised when no configuration can be resolved for an error code.

    This is the only internal failure that escapes ErrorManager.handle:
    it means both UNDEFINED_ERROR_CODE and the hard fallback are missing.
    """

    code = "FATAL_FALLBACK_FAILURE"

    def __init__(self, requested_code: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            f"Fallback failed: no configuration available for [{requested_code}]"
        )
        self.requested_code = requested_code
        self.cause = cause


class HandledError(ReportingDomainError):
    """Raised by ErrorManager.handle when the caller asked to abort.

    Carries everything the host needs to materialize the error later.
    """

    def __init__(
        self,
        code: str,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
        outcome: Optional[Outcome] = None,
    ) -> None:
        super().__init__(f"Handled error: {code}")
        self.code = code
        self.context = context
        self.cause = cause
        self.outcome = outcome


class InvalidDefinitionError(ReportingDomainError):
    """Raised when an error definition record fails validation."""

    def __init__(self, code: str, reason: str) -> None:
        super().__init__(f"Invalid definition for [{code}]: {reason}")
        self.code = code
        self.reason = reason


class UnknownErrorCodeError(ReportingDomainError):
    """Raised by admin operations targeting a code absent from the catalog."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Error code '{code}' does not exist")
        self.code = code


class UnknownRecoveryActionError(ReportingDomainError):
    """Raised when a recovery action name has no registered routine."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Unknown recovery action: {action}")
        self.action = action


class EnvironmentForbiddenError(ReportingDomainError):
    """Raised when a non-production feature is used in production."""

    def __init__(self, environment: str) -> None:
        super().__init__(
            f"This feature is not available in the {environment} environment."
        )
        self.environment = environment
