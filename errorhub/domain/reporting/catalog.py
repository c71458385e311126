"""
Error catalog: read-mostly mapping from error code to definition.

Two tiers:
    static: loaded once at process start, never mutated afterwards.
    dynamic: runtime definitions added via define(), checked first.

The dynamic tier may be written by tests or admin tooling while
requests are reading it, so every access goes through a lock.
"""

import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from errorhub.domain.reporting.entities import ErrorDefinition


class ErrorCatalog:
    """Lookup table for error definitions.

    Lookups have no side effects and do not log; reporting a missing
    code is the resolver's job.
    """

    def __init__(self, static: Optional[Mapping[str, ErrorDefinition]] = None) -> None:
        self._static = MappingProxyType(dict(static or {}))
        self._dynamic: dict[str, ErrorDefinition] = {}
        self._lock = threading.RLock()

    def lookup(self, code: str) -> Optional[ErrorDefinition]:
        """Return the definition for code, dynamic tier first, or None."""
        with self._lock:
            definition = self._dynamic.get(code)
        if definition is not None:
            return definition
        return self._static.get(code)

    def define(self, code: str, definition: ErrorDefinition) -> None:
        """Insert or overwrite a runtime definition. Last write wins.

        Partial definitions are not merged: definition must be complete.
        """
        if not isinstance(definition, ErrorDefinition):
            raise TypeError(
                f"definition must be an ErrorDefinition, got {type(definition).__name__}"
            )
        if definition.code != code:
            definition = definition.with_code(code)
        with self._lock:
            self._dynamic[code] = definition

    def codes(self) -> list[str]:
        """Return every known code (static and dynamic), sorted."""
        with self._lock:
            dynamic = set(self._dynamic)
        return sorted(dynamic | set(self._static))

    @property
    def static_codes(self) -> list[str]:
        return sorted(self._static)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.lookup(code) is not None

    def __len__(self) -> int:
        return len(self.codes())
