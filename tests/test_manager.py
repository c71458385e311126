"""
Tests for ErrorManager: resolution, formatting, dispatch and outcome.
"""

from datetime import datetime, timezone

import pytest

from errorhub.domain.reporting.catalog import ErrorCatalog
from errorhub.domain.reporting.entities import Blocked, Continue, DisplayMode, Severity
from errorhub.domain.reporting.errors import (
    HandledError,
    InvalidDefinitionError,
    ResolutionExhaustedError,
)
from errorhub.domain.reporting.manager import ORIGINAL_CODE_KEY, ErrorManager
from tests.conftest import ExplodingHandler, RecordingHandler, make_definition


class TestHandle:
    """Tests for ErrorManager.handle()."""

    def test_blocking_definition_yields_blocked(self, manager) -> None:
        outcome = manager.handle("AUTHENTICATION_ERROR")
        assert isinstance(outcome, Blocked)
        assert outcome.is_blocking
        assert outcome.status_code == 401
        assert outcome.user_message == "You are not authorized to perform this operation."

    @pytest.mark.parametrize("code", ["FILE_NOT_FOUND", "DISK_LOW"])
    def test_non_blocking_definitions_yield_continue(self, manager, code) -> None:
        outcome = manager.handle(code)
        assert isinstance(outcome, Continue)
        assert not outcome.is_blocking

    def test_continue_exposes_display_mode(self, manager) -> None:
        outcome = manager.handle("DISK_LOW", {"percent": 97})
        assert outcome.display_mode is DisplayMode.LOG_ONLY
        assert outcome.info.dev_message == "Disk usage at 97%"

    def test_unknown_code_end_to_end(self, manager, recorder) -> None:
        outcome = manager.handle("UNKNOWN_XYZ", {}, None, False)
        assert outcome.status_code == 500
        assert outcome.code == "UNDEFINED_ERROR_CODE"
        assert outcome.info.context[ORIGINAL_CODE_KEY] == "UNKNOWN_XYZ"
        assert outcome.user_message == "Unknown problem (UNKNOWN_XYZ)"
        code, definition, context, _ = recorder.calls[0]
        assert code == "UNDEFINED_ERROR_CODE"
        assert definition.severity is Severity.CRITICAL
        assert context[ORIGINAL_CODE_KEY] == "UNKNOWN_XYZ"

    def test_hard_fallback_used_when_undefined_missing(self) -> None:
        manager = ErrorManager(
            ErrorCatalog(), fallback={"severity": "error", "blocking_level": "blocking", "status_code": 500}
        )
        outcome = manager.handle("NOPE")
        assert outcome.code == "FALLBACK_ERROR"
        assert outcome.info.context[ORIGINAL_CODE_KEY] == "NOPE"

    def test_exhausted_resolution_escapes(self) -> None:
        handler = RecordingHandler()
        manager = ErrorManager(ErrorCatalog()).register_handler(handler)
        with pytest.raises(ResolutionExhaustedError):
            manager.handle("NOPE")
        assert handler.calls == []

    def test_caller_context_not_mutated(self, manager) -> None:
        context = {"file_path": "/tmp/a"}
        manager.handle("UNKNOWN_XYZ", context)
        assert context == {"file_path": "/tmp/a"}

    def test_non_mapping_context_treated_as_empty(self, manager) -> None:
        outcome = manager.handle("FILE_NOT_FOUND", ["not", "a", "mapping"])
        assert outcome.info.context == {}

    def test_dispatches_only_to_interested_handlers(self, catalog) -> None:
        wanted, unwanted = RecordingHandler("wanted"), RecordingHandler("unwanted", wants=False)
        manager = ErrorManager(catalog).register_handlers([wanted, unwanted])
        manager.handle("FILE_NOT_FOUND", {"file_path": "a.txt"})
        assert len(wanted.calls) == 1
        assert unwanted.calls == []

    def test_failing_handler_does_not_change_outcome(self, catalog) -> None:
        plain = ErrorManager(catalog).handle("AUTHENTICATION_ERROR")
        after = RecordingHandler("after")
        noisy = ErrorManager(catalog).register_handlers([ExplodingHandler(), after])
        outcome = noisy.handle("AUTHENTICATION_ERROR")
        assert type(outcome) is type(plain)
        assert outcome.status_code == plain.status_code
        assert outcome.user_message == plain.user_message
        assert len(after.calls) == 1

    def test_context_mutating_handler_does_not_change_outcome(self, catalog) -> None:
        class MutatingHandler(ExplodingHandler):
            def process(self, code, definition, context, cause=None):
                context["injected"] = "by handler"
                context.pop("user", None)
                raise RuntimeError("handler exploded")

        plain = ErrorManager(catalog).handle("AUTHENTICATION_ERROR", {"user": "u1"})
        noisy = ErrorManager(catalog).register_handler(MutatingHandler())
        outcome = noisy.handle("AUTHENTICATION_ERROR", {"user": "u1"})
        assert outcome.info.context == plain.info.context == {"user": "u1"}

    def test_messages_formatted_from_context(self, manager) -> None:
        outcome = manager.handle("FILE_NOT_FOUND", {"file_path": "a.txt"})
        assert outcome.info.dev_message == "File not found: a.txt"
        assert outcome.info.user_message == "The requested file was not found."

    def test_cause_summary_recorded(self, manager) -> None:
        try:
            raise FileNotFoundError("a.txt")
        except FileNotFoundError as exc:
            outcome = manager.handle("FILE_NOT_FOUND", cause=exc)
        summary = outcome.info.cause_summary
        assert summary.exception_class == "builtins.FileNotFoundError"
        assert summary.message == "a.txt"
        assert summary.file.endswith("test_manager.py")
        assert outcome.info.to_dict()["exception"]["class"] == "builtins.FileNotFoundError"

    def test_timestamp_comes_from_clock(self, catalog) -> None:
        fixed = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        outcome = ErrorManager(catalog, clock=lambda: fixed).handle("DISK_LOW")
        assert outcome.info.timestamp == fixed
        assert outcome.info.to_dict()["timestamp"] == "2024-05-01T12:00:00+00:00"

    def test_throw_raises_handled_error_after_dispatch(self, manager, recorder) -> None:
        cause = ValueError("bad")
        with pytest.raises(HandledError) as exc_info:
            manager.handle("AUTHENTICATION_ERROR", {"user": "bob"}, cause, throw=True)
        err = exc_info.value
        assert err.code == "AUTHENTICATION_ERROR"
        assert err.context == {"user": "bob"}
        assert err.__cause__ is cause
        assert isinstance(err.outcome, Blocked)
        assert len(recorder.calls) == 1


class TestRuntimeDefinitions:
    """Tests for define_error / get_definition / known_codes."""

    def test_define_error_from_mapping(self, manager) -> None:
        manager.define_error("QUOTA", {"severity": "warning", "blocking_level": "blocking", "status_code": 429})
        outcome = manager.handle("QUOTA")
        assert outcome.code == "QUOTA"
        assert outcome.status_code == 429

    def test_define_error_rejects_invalid_mapping(self, manager) -> None:
        with pytest.raises(InvalidDefinitionError):
            manager.define_error("QUOTA", {"severity": "warning"})

    def test_define_twice_is_idempotent(self, manager) -> None:
        definition = make_definition("QUOTA", status_code=429)
        manager.define_error("QUOTA", definition)
        first = manager.get_definition("QUOTA")
        manager.define_error("QUOTA", definition)
        assert manager.get_definition("QUOTA") == first

    def test_get_definition_does_not_fall_back(self, manager) -> None:
        assert manager.get_definition("UNKNOWN_XYZ") is None

    def test_known_codes_filter_by_severity(self, manager) -> None:
        assert manager.known_codes(Severity.CRITICAL) == ["UNDEFINED_ERROR_CODE"]
        assert "DISK_LOW" in manager.known_codes()
