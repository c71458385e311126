"""
Handler: persist every error occurrence for later inspection.

Builds an ErrorRecord from the definition, the sanitized context, the
active request (if any) and the cause, then hands it to the
ErrorRecordRepository port.
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Optional

from errorhub.domain.reporting.entities import ErrorDefinition, ErrorRecord
from errorhub.domain.reporting.ports import (
    ErrorHandler,
    ErrorRecordRepository,
    RequestMetadataProvider,
)
from errorhub.domain.reporting.sanitizer import sanitize_context

logger = logging.getLogger(__name__)

TRUNCATED_SUFFIX = "\n[Truncated...]"


def truncate_trace(trace: str, max_length: int) -> str:
    if len(trace) <= max_length:
        return trace
    return trace[:max_length] + TRUNCATED_SUFFIX


class PersistenceHandler(ErrorHandler):
    """Saves an ErrorRecord per handled error.

    Repository failures propagate to the pipeline, which logs them and
    carries on with the next handler.
    """

    name = "persistence"

    def __init__(
        self,
        repository: ErrorRecordRepository,
        request_provider: Optional[RequestMetadataProvider] = None,
        enabled: bool = True,
        include_trace: bool = True,
        max_trace_length: int = 10_000,
    ) -> None:
        self._repository = repository
        self._request_provider = request_provider
        self._enabled = enabled
        self._include_trace = include_trace
        self._max_trace_length = max_trace_length

    def interested(self, definition: ErrorDefinition) -> bool:
        return self._enabled

    def process(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> ErrorRecord:
        record = self.build_record(code, definition, context, cause)
        self._repository.save(record)
        logger.debug("Error [%s] persisted", code)
        return record

    def build_record(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> ErrorRecord:
        request = self._request_provider.current() if self._request_provider else None

        fields: dict[str, Any] = {
            "error_code": code,
            "severity": definition.severity.value,
            "blocking": definition.blocking_level.value,
            "message": definition.dev_message or definition.dev_message_key,
            "user_message": definition.user_message or definition.user_message_key,
            "status_code": definition.status_code,
            "display_mode": definition.display_mode.value,
            "context": sanitize_context(context),
            "occurred_at": datetime.now(timezone.utc),
        }

        if request is not None:
            fields.update(
                request_method=request.method,
                request_url=request.url,
                ip_address=request.ip,
                user_agent=request.user_agent,
                user_id=request.user_id,
            )

        if cause is not None:
            frames = traceback.extract_tb(cause.__traceback__) if cause.__traceback__ else []
            exc_type = type(cause)
            fields.update(
                exception_class=f"{exc_type.__module__}.{exc_type.__qualname__}",
                exception_message=str(cause),
                exception_file=frames[-1].filename if frames else None,
                exception_line=frames[-1].lineno if frames else None,
            )
            if self._include_trace:
                trace = "".join(traceback.format_exception(exc_type, cause, cause.__traceback__))
                fields["exception_trace"] = truncate_trace(trace, self._max_trace_length)

        return ErrorRecord(**fields)
