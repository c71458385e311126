"""
Handler: write every error to the application log.

The log level follows the definition's severity
(critical → CRITICAL, error → ERROR, warning → WARNING, notice → INFO).
"""

import logging
from typing import Any, Optional

from errorhub.domain.reporting.entities import ErrorDefinition
from errorhub.domain.reporting.ports import ErrorHandler
from errorhub.infrastructure.reporting.log_formatter import format_log_entry

ERROR_LOGGER_NAME = "errorhub.errors"


class LogHandler(ErrorHandler):
    """Logs a formatted block for every handled error."""

    name = "log"

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(ERROR_LOGGER_NAME)

    def interested(self, definition: ErrorDefinition) -> bool:
        return True

    def process(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> None:
        body = format_log_entry(code, definition, context, cause)
        self._logger.log(definition.severity.log_level, body)
