"""
Resolution engine: guarantees a usable definition for any error code.

Tiers, executed in order, returning on first success:

    1. Direct lookup of the requested code.
    2. Remap to UNDEFINED_ERROR_CODE and look that up.
    3. Hard fallback definition supplied at construction.
    4. Fatal: ResolutionExhaustedError (FATAL_FALLBACK_FAILURE).

Every tier transition is logged. Logging is best-effort: a broken
logging setup must never turn a recoverable resolution into a crash.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from errorhub.domain.reporting.catalog import ErrorCatalog
from errorhub.domain.reporting.definitions import parse_definition
from errorhub.domain.reporting.entities import ErrorDefinition, ResolutionOutcome
from errorhub.domain.reporting.errors import (
    InvalidDefinitionError,
    ResolutionExhaustedError,
)

logger = logging.getLogger(__name__)

UNDEFINED_ERROR_CODE = "UNDEFINED_ERROR_CODE"
FALLBACK_ERROR = "FALLBACK_ERROR"
FATAL_FALLBACK_FAILURE = ResolutionExhaustedError.code

FallbackSource = Union[ErrorDefinition, Mapping[str, Any], None]


def _diagnose(level: int, msg: str, *args: Any) -> None:
    try:
        logger.log(level, msg, *args)
    except Exception:  # best-effort
        pass


def _coerce_fallback(fallback: FallbackSource) -> Optional[ErrorDefinition]:
    if fallback is None:
        return None
    if isinstance(fallback, ErrorDefinition):
        return fallback.with_code(FALLBACK_ERROR)
    if isinstance(fallback, Mapping):
        try:
            return parse_definition(FALLBACK_ERROR, fallback)
        except InvalidDefinitionError as exc:
            _diagnose(logging.CRITICAL, "Fallback definition is malformed: %s", exc.reason)
            return None
    _diagnose(
        logging.CRITICAL,
        "Fallback definition has unsupported type %s",
        type(fallback).__name__,
    )
    return None


class ResolutionEngine:
    """Runs the three-tier fallback cascade against an ErrorCatalog."""

    def __init__(self, catalog: ErrorCatalog, fallback: FallbackSource = None) -> None:
        self._catalog = catalog
        self._fallback = _coerce_fallback(fallback)

    @property
    def fallback(self) -> Optional[ErrorDefinition]:
        return self._fallback

    def resolve(
        self, code: str, cause: Optional[BaseException] = None
    ) -> ResolutionOutcome:
        """Resolve code to a definition.

        Args:
            code: The requested error code.
            cause: Original exception, attached to the fatal error.

        Returns:
            A ResolutionOutcome whose definition is never None.

        Raises:
            ResolutionExhaustedError: If no tier produced a definition.
        """
        definition = self._catalog.lookup(code)
        if definition is not None:
            return ResolutionOutcome(definition=definition, effective_code=code)

        _diagnose(logging.WARNING, "Undefined error code: [%s]. Attempting fallback.", code)

        definition = self._catalog.lookup(UNDEFINED_ERROR_CODE)
        if definition is not None:
            return ResolutionOutcome(
                definition=definition,
                effective_code=UNDEFINED_ERROR_CODE,
                rewritten=True,
                original_code=code,
            )

        _diagnose(
            logging.CRITICAL,
            "Missing config for %s. Trying %s for [%s].",
            UNDEFINED_ERROR_CODE,
            FALLBACK_ERROR,
            code,
        )

        if self._fallback is not None:
            return ResolutionOutcome(
                definition=self._fallback,
                effective_code=FALLBACK_ERROR,
                rewritten=True,
                original_code=code,
            )

        _diagnose(
            logging.CRITICAL,
            "No fallback configuration available for [%s]. Raising %s.",
            code,
            FATAL_FALLBACK_FAILURE,
        )
        raise ResolutionExhaustedError(code, cause)
