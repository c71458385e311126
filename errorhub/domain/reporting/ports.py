"""
Port interfaces (ABCs) for the reporting bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from errorhub.domain.reporting.entities import (
    ErrorDefinition,
    ErrorRecord,
    RequestMetadata,
    UiNotice,
)


class ErrorHandler(ABC):
    """Port for a unit of side-effecting work triggered per error.

    The pipeline only relies on ``interested`` and ``process``; any
    object exposing both is accepted, subclassing is a convenience.
    """

    name: str = "handler"

    @abstractmethod
    def interested(self, definition: ErrorDefinition) -> bool:
        """Return True when this handler wants to process the error."""
        raise NotImplementedError

    @abstractmethod
    def process(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> Any:
        """Perform the side effect for a resolved error."""
        raise NotImplementedError


class Translator(ABC):
    """Port for looking up localized message strings."""

    @abstractmethod
    def translate(self, key: str, params: dict[str, Any]) -> str:
        """Return the translation for key with params substituted.

        Implementations return the key itself when no translation exists.
        """
        raise NotImplementedError


class ErrorRecordRepository(ABC):
    """Port for persisting historical error records."""

    @abstractmethod
    def save(self, record: ErrorRecord) -> None:
        """Persist a single error record."""
        raise NotImplementedError


class NotificationChannel(ABC):
    """Port for delivering a notification to a destination."""

    @abstractmethod
    def send(self, destination: str, subject: str, body: str) -> None:
        """Deliver a message.

        Raises:
            Exception: Any delivery failure; callers log and absorb it.
        """
        raise NotImplementedError


class RequestMetadataProvider(ABC):
    """Port for reading metadata about the request being served."""

    @abstractmethod
    def current(self) -> Optional[RequestMetadata]:
        """Return metadata for the active request, or None outside one."""
        raise NotImplementedError


class UiNoticeSink(ABC):
    """Port for queuing user-facing notices on the current response."""

    @abstractmethod
    def push(self, notice: UiNotice) -> bool:
        """Queue a notice. Returns False when no response is active."""
        raise NotImplementedError
