"""
Adapter: request-scoped state held in context variables.

The error-handling middleware binds the current request's metadata and
an empty notice list for every request. Handlers read them through the
RequestMetadataProvider and UiNoticeSink ports, so they work the same
inside and outside a web request.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from errorhub.domain.reporting.entities import RequestMetadata, UiNotice
from errorhub.domain.reporting.ports import RequestMetadataProvider, UiNoticeSink

_current_request: ContextVar[Optional[RequestMetadata]] = ContextVar(
    "errorhub_request", default=None
)
_current_notices: ContextVar[Optional[list[UiNotice]]] = ContextVar(
    "errorhub_notices", default=None
)


@contextmanager
def bind_request(metadata: Optional[RequestMetadata]) -> Iterator[list[UiNotice]]:
    """Bind metadata and a fresh notice list for the enclosed block.

    Yields:
        The notice list collected while the block runs.
    """
    notices: list[UiNotice] = []
    request_token = _current_request.set(metadata)
    notices_token = _current_notices.set(notices)
    try:
        yield notices
    finally:
        _current_notices.reset(notices_token)
        _current_request.reset(request_token)


def current_notices() -> list[UiNotice]:
    notices = _current_notices.get()
    return list(notices) if notices is not None else []


class ContextRequestMetadataProvider(RequestMetadataProvider):
    """Reads request metadata bound by bind_request()."""

    def current(self) -> Optional[RequestMetadata]:
        return _current_request.get()


class ContextUiNoticeSink(UiNoticeSink):
    """Appends notices to the list bound by bind_request()."""

    def push(self, notice: UiNotice) -> bool:
        notices = _current_notices.get()
        if notices is None:
            return False
        notices.append(notice)
        return True
