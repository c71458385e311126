"""
Domain entities for the reporting bounded context.

Value objects describing an error definition, its resolution, the
formatted error information and the outcome returned to the caller.
They contain no framework imports and no IO operations.
"""

import logging
import traceback
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class Severity(Enum):
    """How serious an error is. Drives log level and default status."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"

    @property
    def default_status_code(self) -> int:
        return _SEVERITY_DEFAULTS[self][0]

    @property
    def default_notify_team(self) -> bool:
        return _SEVERITY_DEFAULTS[self][1]

    @property
    def log_level(self) -> int:
        return _SEVERITY_DEFAULTS[self][2]


# severity -> (status code, notify team, log level)
_SEVERITY_DEFAULTS = {
    Severity.CRITICAL: (500, True, logging.CRITICAL),
    Severity.ERROR: (400, False, logging.ERROR),
    Severity.WARNING: (400, False, logging.WARNING),
    Severity.NOTICE: (200, False, logging.INFO),
}


class BlockingLevel(Enum):
    """Whether the operation that triggered the error must be aborted."""

    BLOCKING = "blocking"
    SEMI_BLOCKING = "semi_blocking"
    NOT_BLOCKING = "not_blocking"


class DisplayMode(Enum):
    """Where the user-facing message should be surfaced."""

    INLINE = "inline"
    MODAL = "modal"
    TOAST = "toast"
    LOG_ONLY = "log_only"


class MessageKind(Enum):
    """Audience of a formatted message."""

    DEV = "dev"
    USER = "user"


@dataclass(frozen=True)
class ErrorDefinition:
    """Declarative configuration for a single error code.

    Exactly one of the key/template pair is consulted per formatting
    call; the translation key wins when both are present.
    """

    code: str
    severity: Severity
    blocking_level: BlockingLevel
    status_code: int
    dev_message: Optional[str] = None
    dev_message_key: Optional[str] = None
    user_message: Optional[str] = None
    user_message_key: Optional[str] = None
    notify_team: bool = False
    notify_secondary_channel: bool = False
    display_mode: DisplayMode = DisplayMode.INLINE
    recovery_action: Optional[str] = None

    def template_for(self, kind: MessageKind) -> Optional[str]:
        return self.dev_message if kind is MessageKind.DEV else self.user_message

    def key_for(self, kind: MessageKind) -> Optional[str]:
        return self.dev_message_key if kind is MessageKind.DEV else self.user_message_key

    def with_code(self, code: str) -> "ErrorDefinition":
        """Return a copy registered under another code."""
        return replace(self, code=code)


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of running the resolution cascade for a requested code.

    Attributes:
        definition: The definition that will drive formatting and dispatch.
        effective_code: Code after fallback (may differ from the request).
        rewritten: True when a fallback tier produced the definition.
        original_code: The requested code when it was rewritten.
    """

    definition: ErrorDefinition
    effective_code: str
    rewritten: bool = False
    original_code: Optional[str] = None


@dataclass(frozen=True)
class CauseSummary:
    """Serializable summary of the exception that caused an error."""

    exception_class: str
    message: str
    file: Optional[str] = None
    line: Optional[int] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "CauseSummary":
        file, line = None, None
        if exc.__traceback__ is not None:
            frames = traceback.extract_tb(exc.__traceback__)
            if frames:
                file, line = frames[-1].filename, frames[-1].lineno
        exc_type = type(exc)
        return cls(
            exception_class=f"{exc_type.__module__}.{exc_type.__qualname__}",
            message=str(exc),
            file=file,
            line=line,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.exception_class,
            "message": self.message,
            "file": self.file,
            "line": self.line,
        }


@dataclass(frozen=True)
class ErrorInfo:
    """Fully formatted description of a handled error."""

    effective_code: str
    severity: Severity
    blocking_level: BlockingLevel
    dev_message: str
    user_message: str
    status_code: int
    context: dict[str, Any]
    display_mode: DisplayMode
    timestamp: datetime
    cause_summary: Optional[CauseSummary] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "error_code": self.effective_code,
            "severity": self.severity.value,
            "blocking": self.blocking_level.value,
            "message": self.dev_message,
            "user_message": self.user_message,
            "status_code": self.status_code,
            "context": dict(self.context),
            "display_mode": self.display_mode.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.cause_summary is not None:
            data["exception"] = self.cause_summary.to_dict()
        return data


@dataclass(frozen=True)
class Outcome:
    """Classification of a handled error returned to the host.

    The host pattern-matches on the concrete subclass and decides how
    to materialize it (JSON body, abort, flash-and-redirect).
    """

    info: ErrorInfo

    @property
    def code(self) -> str:
        return self.info.effective_code

    @property
    def status_code(self) -> int:
        return self.info.status_code

    @property
    def user_message(self) -> str:
        return self.info.user_message

    @property
    def is_blocking(self) -> bool:
        return isinstance(self, Blocked)


@dataclass(frozen=True)
class Blocked(Outcome):
    """Terminate the current operation with status_code and user_message."""


@dataclass(frozen=True)
class Continue(Outcome):
    """Surface the message through display_mode and keep going."""

    @property
    def display_mode(self) -> DisplayMode:
        return self.info.display_mode


@dataclass(frozen=True)
class RequestMetadata:
    """Request attributes attached to persisted records and notifications."""

    method: Optional[str] = None
    url: Optional[str] = None
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    user_id: Optional[str] = None


@dataclass(frozen=True)
class ErrorRecord:
    """A persisted occurrence of a handled error."""

    error_code: str
    severity: str
    blocking: str
    message: Optional[str]
    user_message: Optional[str]
    status_code: int
    display_mode: str
    context: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_method: Optional[str] = None
    request_url: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    user_id: Optional[str] = None
    exception_class: Optional[str] = None
    exception_message: Optional[str] = None
    exception_file: Optional[str] = None
    exception_line: Optional[int] = None
    exception_trace: Optional[str] = None


@dataclass(frozen=True)
class UiNotice:
    """A user-facing message queued for the current response."""

    display_mode: DisplayMode
    message: str
    severity: Severity
    blocking_level: BlockingLevel
    code: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "display_mode": self.display_mode.value,
            "message": self.message,
            "severity": self.severity.value,
            "blocking": self.blocking_level.value,
        }
        if self.code is not None:
            data["code"] = self.code
        return data
