"""
ErrorManager: the single public entry point of the reporting context.

Lifecycle of ``handle(code, context, cause, throw)``:

    1. Normalize context (never None, never the caller's own dict).
    2. Resolve the definition (may rewrite the code); a rewritten code
       keeps the requested one under ``context["_original_code"]``.
    3. Build ErrorInfo (dev/user messages, status, display mode).
    4. Dispatch to the handler pipeline.
    5. throw=True  -> raise HandledError.
       throw=False -> return Blocked or Continue.

Only ResolutionExhaustedError escapes as an internal failure. The
manager classifies the outcome; it never performs response IO.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union

from errorhub.domain.reporting.catalog import ErrorCatalog
from errorhub.domain.reporting.definitions import parse_definition
from errorhub.domain.reporting.entities import (
    Blocked,
    BlockingLevel,
    CauseSummary,
    Continue,
    ErrorDefinition,
    ErrorInfo,
    MessageKind,
    Outcome,
    Severity,
)
from errorhub.domain.reporting.errors import HandledError
from errorhub.domain.reporting.formatter import MessageFormatter
from errorhub.domain.reporting.pipeline import HandlerPipeline
from errorhub.domain.reporting.resolution import FallbackSource, ResolutionEngine

logger = logging.getLogger(__name__)

ORIGINAL_CODE_KEY = "_original_code"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorManager:
    """Orchestrates resolution, formatting and dispatch for error codes.

    Usage:
        manager = ErrorManager(catalog, fallback=fallback_definition)
        manager.register_handler(LogHandler())
        outcome = manager.handle("FILE_NOT_FOUND", {"file": "a.txt"})
        if outcome.is_blocking:
            abort(outcome.status_code, outcome.user_message)
    """

    def __init__(
        self,
        catalog: ErrorCatalog,
        formatter: Optional[MessageFormatter] = None,
        pipeline: Optional[HandlerPipeline] = None,
        fallback: FallbackSource = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._catalog = catalog
        self._formatter = formatter or MessageFormatter()
        self._pipeline = pipeline or HandlerPipeline()
        self._engine = ResolutionEngine(catalog, fallback)
        self._clock = clock
        logger.info(
            "Initialized ErrorManager with %d codes and %d handlers",
            len(catalog),
            len(self._pipeline.handlers),
        )

    @property
    def catalog(self) -> ErrorCatalog:
        return self._catalog

    @property
    def formatter(self) -> MessageFormatter:
        return self._formatter

    @property
    def handlers(self) -> tuple[Any, ...]:
        return self._pipeline.handlers

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def register_handler(self, handler: Any) -> "ErrorManager":
        """Append handler to the dispatch pipeline."""
        self._pipeline.register(handler)
        return self

    def register_handlers(self, handlers: Iterable[Any]) -> "ErrorManager":
        for handler in handlers:
            self._pipeline.register(handler)
        return self

    def define_error(
        self,
        code: str,
        definition: Union[ErrorDefinition, Mapping[str, Any]],
    ) -> "ErrorManager":
        """Define or redefine an error at runtime.

        Raises:
            InvalidDefinitionError: If a mapping fails validation.
        """
        if not isinstance(definition, ErrorDefinition):
            definition = parse_definition(code, definition)
        self._catalog.define(code, definition)
        logger.debug("Defined runtime error type [%s]", code)
        return self

    def get_definition(self, code: str) -> Optional[ErrorDefinition]:
        """Return the catalog definition for code, without fallback."""
        definition = self._catalog.lookup(code)
        if definition is None:
            logger.warning("Error code configuration not found: [%s]", code)
        return definition

    def known_codes(self, severity: Optional[Severity] = None) -> list[str]:
        """List catalog codes, optionally only those of one severity."""
        codes = self._catalog.codes()
        if severity is None:
            return codes
        matching = []
        for code in codes:
            definition = self._catalog.lookup(code)
            if definition is not None and definition.severity is severity:
                matching.append(code)
        return matching

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def handle(
        self,
        code: str,
        context: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
        throw: bool = False,
    ) -> Outcome:
        """Handle an error occurrence.

        Args:
            code: Symbolic error code (e.g. "INVALID_TOKEN").
            context: Values for message placeholders and handlers.
            cause: The exception that triggered the error, if any.
            throw: Raise HandledError instead of returning an Outcome.

        Returns:
            Blocked for blocking errors, Continue otherwise.

        Raises:
            HandledError: When throw is True, after handlers ran.
            ResolutionExhaustedError: When no configuration exists at all.
        """
        ctx: dict[str, Any] = dict(context) if isinstance(context, Mapping) else {}

        logger.info("Handling error [%s]", code)

        resolution = self._engine.resolve(code, cause)
        if resolution.rewritten:
            ctx[ORIGINAL_CODE_KEY] = resolution.original_code

        effective_code = resolution.effective_code
        definition = resolution.definition

        info = self._build_info(effective_code, definition, ctx, cause)
        self._pipeline.dispatch(effective_code, definition, dict(ctx), cause)

        outcome = self._classify(info)

        if throw:
            raise HandledError(effective_code, ctx, cause, outcome) from cause

        return outcome

    def _build_info(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException],
    ) -> ErrorInfo:
        return ErrorInfo(
            effective_code=code,
            severity=definition.severity,
            blocking_level=definition.blocking_level,
            dev_message=self._formatter.format(definition, context, MessageKind.DEV),
            user_message=self._formatter.format(definition, context, MessageKind.USER),
            status_code=definition.status_code,
            context=context,
            display_mode=definition.display_mode,
            timestamp=self._clock(),
            cause_summary=CauseSummary.from_exception(cause) if cause is not None else None,
        )

    @staticmethod
    def _classify(info: ErrorInfo) -> Outcome:
        if info.blocking_level is BlockingLevel.BLOCKING:
            return Blocked(info)
        return Continue(info)
