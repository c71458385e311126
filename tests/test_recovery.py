"""
Tests for the recovery registry, built-in actions and RecoveryHandler.
"""

import logging

import pytest

from errorhub.domain.reporting.errors import UnknownRecoveryActionError
from errorhub.domain.reporting.recovery import RecoveryRegistry
from errorhub.infrastructure.reporting.recovery_actions import (
    create_temp_directory,
    default_recovery_registry,
    schedule_cleanup,
)
from errorhub.infrastructure.reporting.recovery_handler import RecoveryHandler
from tests.conftest import make_definition


class TestRecoveryRegistry:
    """Tests for RecoveryRegistry."""

    def test_register_and_get(self) -> None:
        registry = RecoveryRegistry()
        action = lambda context: True  # noqa: E731
        registry.register("retry_upload", action)
        assert registry.get("retry_upload") is action
        assert "retry_upload" in registry
        assert registry.names() == ["retry_upload"]

    def test_validation_at_registration(self) -> None:
        registry = RecoveryRegistry()
        with pytest.raises(ValueError):
            registry.register("", lambda context: True)
        with pytest.raises(ValueError):
            registry.register("not_callable", "retry")

    def test_require_unknown_raises(self) -> None:
        with pytest.raises(UnknownRecoveryActionError) as exc_info:
            RecoveryRegistry().require("retry_scan")
        assert exc_info.value.action == "retry_scan"

    def test_default_registry_has_builtins(self) -> None:
        assert default_recovery_registry().names() == [
            "create_temp_directory",
            "schedule_cleanup",
        ]


class TestBuiltinActions:
    """Tests for create_temp_directory and schedule_cleanup."""

    def test_create_temp_directory(self, tmp_path) -> None:
        target = tmp_path / "a" / "b"
        assert create_temp_directory({"directory": str(target)}) is True
        assert target.is_dir()

    def test_create_temp_directory_existing(self, tmp_path) -> None:
        assert create_temp_directory({"directory": str(tmp_path)}) is True

    def test_create_temp_directory_without_path(self) -> None:
        assert create_temp_directory({}) is False

    def test_immediate_cleanup_removes_file(self, tmp_path) -> None:
        target = tmp_path / "upload.tmp"
        target.write_text("x")
        assert schedule_cleanup({"file_path": str(target), "cleanup_delay": 0}) is True
        assert not target.exists()

    def test_delayed_cleanup_is_scheduled(self, tmp_path) -> None:
        target = tmp_path / "upload.tmp"
        target.write_text("x")
        assert schedule_cleanup({"file_path": str(target), "cleanup_delay": 3600}) is True
        assert target.exists()

    def test_cleanup_without_path(self) -> None:
        assert schedule_cleanup({}) is False


class TestRecoveryHandler:
    """Tests for RecoveryHandler."""

    def test_interested_only_with_action(self) -> None:
        handler = RecoveryHandler(RecoveryRegistry())
        assert handler.interested(make_definition("X", recovery_action="retry")) is True
        assert handler.interested(make_definition("X")) is False

    def test_runs_registered_action_with_context_copy(self) -> None:
        seen = []

        def action(context):
            seen.append(context)
            context["mutated"] = True
            return True

        handler = RecoveryHandler(RecoveryRegistry({"retry": action}))
        context = {"file_path": "/tmp/x"}
        assert handler.process("X", make_definition("X", recovery_action="retry"), context) is True
        assert seen == [{"file_path": "/tmp/x", "mutated": True}]
        assert "mutated" not in context

    def test_unknown_action_is_logged(self, caplog) -> None:
        handler = RecoveryHandler(RecoveryRegistry())
        with caplog.at_level(logging.WARNING):
            result = handler.process("X", make_definition("X", recovery_action="retry_scan"), {})
        assert result is False
        assert "Unknown recovery action [retry_scan] for [X]" in caplog.text

    def test_failing_action_is_absorbed(self, caplog) -> None:
        def action(context):
            raise OSError("disk full")

        handler = RecoveryHandler(RecoveryRegistry({"retry": action}))
        with caplog.at_level(logging.ERROR):
            result = handler.process("X", make_definition("X", recovery_action="retry"), {})
        assert result is False
        assert "Exception during recovery action [retry]" in caplog.text

    def test_action_returning_false_reports_failure(self) -> None:
        handler = RecoveryHandler(RecoveryRegistry({"retry": lambda context: False}))
        assert handler.process("X", make_definition("X", recovery_action="retry"), {}) is False
