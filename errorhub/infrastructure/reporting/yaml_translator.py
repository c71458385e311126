"""
Adapter: YAML-backed message translator.

Implements the Translator port. Each locale lives in
``<translations_dir>/<locale>.yaml`` as a nested mapping; keys are
dotted paths (``errors.user.file_not_found``). Missing keys fall back to
the fallback locale and finally to the key itself.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from errorhub.domain.reporting.formatter import substitute_placeholders
from errorhub.domain.reporting.ports import Translator

logger = logging.getLogger(__name__)


def _flatten(tree: dict[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, path))
        elif value is not None:
            flat[path] = str(value)
    return flat


class YamlTranslator(Translator):
    """Translator reading one YAML file per locale."""

    def __init__(
        self,
        translations_dir: Union[str, Path],
        locale: str = "en",
        fallback_locale: Optional[str] = "en",
    ) -> None:
        self._dir = Path(translations_dir)
        self._locale = locale
        self._fallback_locale = fallback_locale
        self._messages: dict[str, dict[str, str]] = {}

    @property
    def locale(self) -> str:
        return self._locale

    def available_locales(self) -> list[str]:
        if not self._dir.is_dir():
            return []
        return sorted(p.stem for p in self._dir.glob("*.yaml"))

    def has(self, key: str, locale: Optional[str] = None) -> bool:
        return key in self._load(locale or self._locale)

    def translate(self, key: str, params: dict[str, Any]) -> str:
        """Return the translation for key with ``:placeholders`` filled in."""
        message = self._lookup(key)
        if message is None:
            logger.debug("No translation for key %s", key)
            return key
        return substitute_placeholders(message, params)

    def _lookup(self, key: str) -> Optional[str]:
        message = self._load(self._locale).get(key)
        if message is None and self._fallback_locale and self._fallback_locale != self._locale:
            message = self._load(self._fallback_locale).get(key)
        return message

    def _load(self, locale: str) -> dict[str, str]:
        if locale in self._messages:
            return self._messages[locale]

        path = self._dir / f"{locale}.yaml"
        messages: dict[str, str] = {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                tree = yaml.safe_load(f) or {}
            if isinstance(tree, dict):
                messages = _flatten(tree)
            logger.info("Loaded %d messages for locale %s", len(messages), locale)
        except FileNotFoundError:
            logger.warning("Translation file not found: %s", path)
        except yaml.YAMLError as exc:
            logger.error("Failed to parse translations %s: %s", path, exc)

        self._messages[locale] = messages
        return messages
