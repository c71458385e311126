"""
Shared fixtures for the errorhub test suite.

Every test builds fresh catalog, registry and manager instances; nothing
is shared between tests through module-level state.
"""

from typing import Any, Optional

import pytest

import errorhub.cli
import errorhub.main
from errorhub.domain.reporting.catalog import ErrorCatalog
from errorhub.domain.reporting.definitions import parse_definition
from errorhub.domain.reporting.entities import ErrorDefinition
from errorhub.domain.reporting.manager import ErrorManager
from errorhub.domain.reporting.ports import ErrorHandler


def make_definition(code: str, **fields: Any) -> ErrorDefinition:
    """Build a definition; severity/blocking_level default to error/blocking."""
    raw = {"severity": "error", "blocking_level": "blocking"}
    raw.update(fields)
    return parse_definition(code, raw)


class RecordingHandler(ErrorHandler):
    """Handler that records every call it receives."""

    def __init__(self, name: str = "recording", wants: bool = True) -> None:
        self.name = name
        self._wants = wants
        self.calls: list[tuple[str, ErrorDefinition, dict[str, Any], Optional[BaseException]]] = []

    def interested(self, definition: ErrorDefinition) -> bool:
        return self._wants

    def process(self, code, definition, context, cause=None):
        self.calls.append((code, definition, dict(context), cause))
        return True


class ExplodingHandler(ErrorHandler):
    """Handler whose process always raises."""

    name = "exploding"

    def __init__(self) -> None:
        self.attempts = 0

    def interested(self, definition: ErrorDefinition) -> bool:
        return True

    def process(self, code, definition, context, cause=None):
        self.attempts += 1
        raise RuntimeError("handler exploded")


@pytest.fixture(autouse=True)
def keep_pytest_logging(monkeypatch):
    """Stop the app and CLI from replacing pytest's log capture handlers."""
    monkeypatch.setattr(errorhub.main, "configure_logging", lambda level="INFO": None)
    monkeypatch.setattr(errorhub.cli, "configure_logging", lambda level="INFO": None)


@pytest.fixture
def definitions() -> dict[str, ErrorDefinition]:
    return {
        "UNDEFINED_ERROR_CODE": make_definition(
            "UNDEFINED_ERROR_CODE",
            severity="critical",
            status_code=500,
            user_message="Unknown problem (:_original_code)",
        ),
        "FILE_NOT_FOUND": make_definition(
            "FILE_NOT_FOUND",
            severity="warning",
            blocking_level="semi_blocking",
            status_code=404,
            dev_message="File not found: :file_path",
            user_message="The requested file was not found.",
        ),
        "AUTHENTICATION_ERROR": make_definition(
            "AUTHENTICATION_ERROR",
            status_code=401,
            user_message="You are not authorized to perform this operation.",
            display_mode="modal",
        ),
        "DISK_LOW": make_definition(
            "DISK_LOW",
            severity="notice",
            blocking_level="not_blocking",
            display_mode="log_only",
            dev_message="Disk usage at :percent%",
        ),
    }


@pytest.fixture
def catalog(definitions) -> ErrorCatalog:
    return ErrorCatalog(definitions)


@pytest.fixture
def recorder() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def manager(catalog, recorder) -> ErrorManager:
    fallback = make_definition("FALLBACK_ERROR", status_code=500, user_message="Fallback")
    return ErrorManager(catalog, fallback=fallback).register_handler(recorder)
