"""
Tests for the failure-isolated HandlerPipeline.
"""

import logging

import pytest

from errorhub.domain.reporting.pipeline import HandlerPipeline, handler_name
from tests.conftest import ExplodingHandler, RecordingHandler, make_definition


class PickyHandler(RecordingHandler):
    """Only interested in critical errors."""

    def interested(self, definition):
        return definition.severity.value == "critical"


class BrokenPredicateHandler(RecordingHandler):
    def interested(self, definition):
        raise ValueError("predicate broke")


class TestHandlerPipeline:
    """Tests for HandlerPipeline.run() / dispatch()."""

    def test_runs_interested_handlers_in_registration_order(self) -> None:
        order = []

        class Ordered(RecordingHandler):
            def process(self, code, definition, context, cause=None):
                order.append(self.name)

        pipeline = HandlerPipeline([Ordered("first"), Ordered("second"), Ordered("third")])
        count = pipeline.dispatch("X", make_definition("X"), {})
        assert count == 3
        assert order == ["first", "second", "third"]

    def test_uninterested_handlers_are_skipped(self) -> None:
        wanted, unwanted = RecordingHandler("wanted"), RecordingHandler("unwanted", wants=False)
        picky = PickyHandler("picky")
        report = HandlerPipeline([wanted, unwanted, picky]).run("X", make_definition("X"), {})
        assert report.invoked == ["wanted"]
        assert report.skipped == ["unwanted", "picky"]
        assert len(wanted.calls) == 1
        assert unwanted.calls == [] and picky.calls == []

    def test_raising_handler_does_not_stop_the_others(self, caplog) -> None:
        before, exploding, after = RecordingHandler("before"), ExplodingHandler(), RecordingHandler("after")
        pipeline = HandlerPipeline([before, exploding, after])
        with caplog.at_level(logging.ERROR):
            report = pipeline.run("X", make_definition("X"), {"k": "v"})

        assert exploding.attempts == 1
        assert len(before.calls) == 1 and len(after.calls) == 1
        assert report.count == 3
        assert not report.all_success
        assert report.failures[0].handler == "exploding"
        assert report.failures[0].stage == "process"
        assert report.failures[0].error == "handler exploded"
        assert "Handler exploding failed during process for [X]" in caplog.text

    def test_unprintable_exception_does_not_escape(self) -> None:
        class UnprintableError(Exception):
            def __str__(self):
                raise ValueError("unprintable")

        class UnprintableHandler(ExplodingHandler):
            name = "unprintable"

            def process(self, code, definition, context, cause=None):
                raise UnprintableError()

        after = RecordingHandler("after")
        report = HandlerPipeline([UnprintableHandler(), after]).run("X", make_definition("X"), {})
        assert len(after.calls) == 1
        assert report.failures[0].handler == "unprintable"
        assert report.failures[0].error == "UnprintableError"

    def test_raising_predicate_counts_as_skipped_failure(self) -> None:
        after = RecordingHandler("after")
        report = HandlerPipeline([BrokenPredicateHandler("broken"), after]).run(
            "X", make_definition("X"), {}
        )
        assert report.skipped == ["broken"]
        assert report.failures[0].stage == "interested"
        assert len(after.calls) == 1

    def test_handlers_receive_code_definition_context_and_cause(self) -> None:
        handler = RecordingHandler()
        definition = make_definition("X")
        cause = KeyError("k")
        HandlerPipeline([handler]).dispatch("X", definition, {"a": 1}, cause)
        assert handler.calls == [("X", definition, {"a": 1}, cause)]

    def test_register_rejects_non_handlers(self) -> None:
        with pytest.raises(TypeError, match="missing callable 'process'"):
            HandlerPipeline().register(type("OnlyPredicate", (), {"interested": lambda s, d: True})())

    def test_empty_pipeline_dispatches_nothing(self) -> None:
        assert HandlerPipeline().dispatch("X", make_definition("X"), {}) == 0


class TestHandlerName:
    def test_uses_explicit_name(self) -> None:
        assert handler_name(RecordingHandler("custom")) == "custom"

    def test_falls_back_to_class_name(self) -> None:
        class Plain:
            def interested(self, definition):
                return True

            def process(self, *args):
                return None

        assert handler_name(Plain()) == "Plain"
