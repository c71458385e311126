"""
Tests for placeholder substitution and MessageFormatter.
"""

import logging
from decimal import Decimal

from errorhub.domain.reporting.entities import MessageKind
from errorhub.domain.reporting.formatter import (
    FALLBACK_MESSAGE,
    MessageFormatter,
    substitute_placeholders,
)
from errorhub.domain.reporting.ports import Translator
from tests.conftest import make_definition


class DictTranslator(Translator):
    def __init__(self, messages: dict) -> None:
        self.messages = messages
        self.calls = []

    def translate(self, key, params):
        self.calls.append((key, params))
        return substitute_placeholders(self.messages.get(key, key), params)


class BrokenTranslator(Translator):
    def translate(self, key, params):
        raise RuntimeError("translation backend down")


class NonStringTranslator(Translator):
    def translate(self, key, params):
        return None


class TestSubstitutePlaceholders:
    """Tests for substitute_placeholders()."""

    def test_replaces_matching_keys(self) -> None:
        result = substitute_placeholders("File :name at :line", {"name": "a.txt", "line": 42})
        assert result == "File a.txt at 42"

    def test_unmatched_tokens_left_untouched(self) -> None:
        assert substitute_placeholders("File :name at :line", {}) == "File :name at :line"

    def test_overlapping_keys_substituted_independently(self) -> None:
        result = substitute_placeholders(":identifier/:id", {"id": "1", "identifier": "abc"})
        assert result == "abc/1"

    def test_shorter_key_does_not_match_inside_longer_token(self) -> None:
        assert substitute_placeholders("Id :identifier", {"id": 7}) == "Id :identifier"
        assert substitute_placeholders("Id :id.", {"id": 7}) == "Id 7."

    def test_numeric_values_rendered(self) -> None:
        result = substitute_placeholders(":a :b :c", {"a": 1.5, "b": Decimal("2.50"), "c": 0})
        assert result == "1.5 2.50 0"

    def test_non_scalar_values_ignored(self) -> None:
        params = {"items": [1, 2], "flag": True, "obj": object(), "none": None}
        template = ":items :flag :obj :none"
        assert substitute_placeholders(template, params) == template

    def test_repeated_token_replaced_everywhere(self) -> None:
        assert substitute_placeholders(":x+:x", {"x": "y"}) == "y+y"


class TestMessageFormatter:
    """Tests for MessageFormatter.format()."""

    def test_literal_template_without_translator(self) -> None:
        definition = make_definition("X", dev_message="Missing :file", dev_message_key="k.dev")
        formatter = MessageFormatter()
        assert formatter.format(definition, {"file": "a.txt"}, MessageKind.DEV) == "Missing a.txt"

    def test_translation_key_preferred_when_translator_present(self) -> None:
        translator = DictTranslator({"errors.user.x": "Translated :file"})
        definition = make_definition(
            "X", user_message="Literal :file", user_message_key="errors.user.x"
        )
        result = MessageFormatter(translator).format(definition, {"file": "b"}, MessageKind.USER)
        assert result == "Translated b"
        assert translator.calls == [("errors.user.x", {"file": "b"})]

    def test_falls_back_to_template_when_no_key(self) -> None:
        translator = DictTranslator({})
        definition = make_definition("X", user_message="Literal")
        assert MessageFormatter(translator).format(definition, {}, MessageKind.USER) == "Literal"
        assert translator.calls == []

    def test_generic_message_when_nothing_configured(self) -> None:
        definition = make_definition("X")
        assert MessageFormatter().format(definition, {}, MessageKind.USER) == FALLBACK_MESSAGE

    def test_translator_failure_degrades_to_generic(self, caplog) -> None:
        definition = make_definition("X", dev_message_key="k")
        with caplog.at_level(logging.WARNING):
            result = MessageFormatter(BrokenTranslator()).format(definition, {}, MessageKind.DEV)
        assert result == FALLBACK_MESSAGE
        assert "Formatting dev message for [X] failed" in caplog.text

    def test_non_string_translation_degrades_to_generic(self) -> None:
        definition = make_definition("X", dev_message_key="k")
        result = MessageFormatter(NonStringTranslator()).format(definition, {}, MessageKind.DEV)
        assert result == FALLBACK_MESSAGE
