"""
Handler: surface the user-facing message in the current response.

Pushes a UiNotice onto the request-scoped notice store; the response
materializer adds queued notices to the JSON body. Definitions with
display mode ``log_only`` are never shown to users.
"""

import logging
from typing import Any, Optional

from errorhub.domain.reporting.entities import (
    DisplayMode,
    ErrorDefinition,
    MessageKind,
    UiNotice,
)
from errorhub.domain.reporting.formatter import MessageFormatter
from errorhub.domain.reporting.ports import ErrorHandler, UiNoticeSink

logger = logging.getLogger(__name__)


class UIHandler(ErrorHandler):
    """Queues user-visible notices."""

    name = "ui"

    def __init__(
        self,
        sink: UiNoticeSink,
        formatter: Optional[MessageFormatter] = None,
        show_error_codes: bool = False,
    ) -> None:
        self._sink = sink
        self._formatter = formatter or MessageFormatter()
        self._show_error_codes = show_error_codes

    def interested(self, definition: ErrorDefinition) -> bool:
        return definition.display_mode is not DisplayMode.LOG_ONLY

    def process(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> Optional[UiNotice]:
        notice = UiNotice(
            display_mode=definition.display_mode,
            message=self._formatter.format(definition, context, MessageKind.USER),
            severity=definition.severity,
            blocking_level=definition.blocking_level,
            code=code if self._show_error_codes else None,
        )
        if not self._sink.push(notice):
            logger.debug("No active response for UI notice [%s]", code)
            return None
        return notice
