"""
Handlers: notify the team about errors.

    EmailNotifyHandler: definitions with notify_team
    SecondaryChannelNotifyHandler: critical errors, or definitions with
        notify_secondary_channel (Slack)

Both hand a subject and a plain-text body to a NotificationChannel.
Delivery failures are logged here and never re-raised into the pipeline.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from errorhub.domain.reporting.entities import ErrorDefinition, MessageKind, Severity
from errorhub.domain.reporting.formatter import MessageFormatter
from errorhub.domain.reporting.ports import (
    ErrorHandler,
    NotificationChannel,
    RequestMetadataProvider,
)
from errorhub.domain.reporting.sanitizer import sanitize_context

logger = logging.getLogger(__name__)


class _NotifyHandler(ErrorHandler):
    """Shared subject/body rendering for notification handlers."""

    def __init__(
        self,
        channel: NotificationChannel,
        destination: Optional[str],
        app_name: str = "Application",
        environment: str = "production",
        enabled: bool = True,
        formatter: Optional[MessageFormatter] = None,
        request_provider: Optional[RequestMetadataProvider] = None,
        subject_prefix: str = "",
    ) -> None:
        self._channel = channel
        self._destination = destination
        self._app_name = app_name
        self._environment = environment
        self._enabled = enabled
        self._formatter = formatter or MessageFormatter()
        self._request_provider = request_provider
        self._subject_prefix = subject_prefix

    def build_subject(self, code: str) -> str:
        return f"{self._subject_prefix}{self._app_name} ({self._environment}): {code}"

    def build_body(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> str:
        message = self._formatter.format(definition, context, MessageKind.DEV)
        sections = [
            f"Error code: {code}\n"
            f"Severity: {definition.severity.value}\n"
            f"Blocking level: {definition.blocking_level.value}\n"
            f"Time: {datetime.now(timezone.utc):%Y-%m-%d %H:%M:%S} UTC",
            f"Message:\n{message}",
        ]

        request = self._request_provider.current() if self._request_provider else None
        if request is not None:
            sections.append(
                f"Request: {request.method or '-'} {request.url or '-'}\n"
                f"IP: {request.ip or '-'}\n"
                f"User: {request.user_id or 'anonymous'}"
            )

        if cause is not None:
            exc_type = type(cause)
            sections.append(
                f"Exception:\n{exc_type.__module__}.{exc_type.__qualname__}: {cause}"
            )

        if context:
            rendered = json.dumps(sanitize_context(context), indent=2, default=str)
            sections.append(f"Context:\n```{rendered}```")

        return "\n\n".join(sections)

    def process(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> bool:
        if not self._destination:
            logger.warning("%s handler has no destination configured", self.name)
            return False

        subject = self.build_subject(code)
        try:
            body = self.build_body(code, definition, context, cause)
            self._channel.send(self._destination, subject, body)
        except Exception as exc:
            logger.error(
                "Failed to send %s notification for [%s]: %s",
                self.name,
                code,
                exc,
            )
            return False
        return True


class EmailNotifyHandler(_NotifyHandler):
    """Mails the development team about errors flagged notify_team."""

    name = "email"

    def __init__(
        self,
        channel: NotificationChannel,
        recipient: Optional[str],
        subject_prefix: str = "[ERROR] ",
        **kwargs: Any,
    ) -> None:
        super().__init__(channel, recipient, subject_prefix=subject_prefix, **kwargs)

    def interested(self, definition: ErrorDefinition) -> bool:
        return self._enabled and definition.notify_team


class SecondaryChannelNotifyHandler(_NotifyHandler):
    """Posts critical or explicitly flagged errors to a chat channel."""

    name = "secondary_channel"

    def interested(self, definition: ErrorDefinition) -> bool:
        if not (definition.severity is Severity.CRITICAL or definition.notify_secondary_channel):
            return False
        return self._enabled and bool(self._destination)
