"""
Message formatting for developer- and user-facing error text.

Priority per call:
    1. Translation key  -> resolved through the injected Translator.
    2. Literal template -> ``:placeholder`` substitution from context.
    3. FALLBACK_MESSAGE.

Formatting never raises. Any failure degrades to FALLBACK_MESSAGE.
"""

import logging
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional

from errorhub.domain.reporting.entities import ErrorDefinition, MessageKind
from errorhub.domain.reporting.ports import Translator

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "An error has occurred"

PLACEHOLDER_PATTERN = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def _is_substitutable(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int, float, Decimal))


def substitute_placeholders(template: str, params: Mapping[str, Any]) -> str:
    """Replace ``:key`` tokens with the matching string/number params.

    Only whole tokens are replaced, so ``:id`` never matches inside
    ``:identifier``. Tokens without a matching param are left untouched.

    Args:
        template: Message text containing ``:name`` placeholders.
        params: Substitution values; non-scalar values are ignored.

    Returns:
        The rendered message.
    """
    values = {
        str(key): str(value)
        for key, value in params.items()
        if _is_substitutable(value)
    }

    def _replace(match: "re.Match[str]") -> str:
        return values.get(match.group(1), match.group(0))

    return PLACEHOLDER_PATTERN.sub(_replace, template)


class MessageFormatter:
    """Renders messages from a definition and a context map."""

    def __init__(self, translator: Optional[Translator] = None) -> None:
        self._translator = translator

    def format(
        self,
        definition: ErrorDefinition,
        context: Mapping[str, Any],
        kind: MessageKind,
    ) -> str:
        """Render the dev or user message for definition.

        Returns:
            The rendered message, or FALLBACK_MESSAGE when nothing is
            configured or rendering fails.
        """
        try:
            return self._render(definition, context, kind)
        except Exception:
            logger.warning(
                "Formatting %s message for [%s] failed; using fallback text",
                kind.value,
                definition.code,
                exc_info=True,
            )
            return FALLBACK_MESSAGE

    def _render(
        self,
        definition: ErrorDefinition,
        context: Mapping[str, Any],
        kind: MessageKind,
    ) -> str:
        key = definition.key_for(kind)
        if key and self._translator is not None:
            logger.debug("Using translated %s message: %s", kind.value, key)
            message = self._translator.translate(key, dict(context))
            if not isinstance(message, str):
                raise TypeError(f"translator returned {type(message).__name__}")
            return message

        template = definition.template_for(kind)
        if template:
            logger.debug("Using direct %s message for [%s]", kind.value, definition.code)
            return substitute_placeholders(template, context)

        logger.debug("No %s message for [%s]; using fallback", kind.value, definition.code)
        return FALLBACK_MESSAGE
