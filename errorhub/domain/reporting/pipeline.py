"""
Ordered, failure-isolated handler dispatch.

For each registered handler, in registration order:
    1. Ask ``interested(definition)``. A raising predicate counts as
       "not interested".
    2. If interested, call ``process(...)``. A raising handler is logged
       with its identity and the error code, and the next handler runs.

Error-reporting machinery must be more reliable than the errors it
reports: no single handler may stop logging or recovery from running.

Architecture:
    ErrorManager  ──▶  HandlerPipeline
                            │
                  ┌─────────┴──────────┐
                  │ log → persist →    │
                  │ notify → ui →      │
                  │ recovery → sim     │
                  └────────────────────┘
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from errorhub.domain.reporting.entities import ErrorDefinition

logger = logging.getLogger(__name__)


def handler_name(handler: Any) -> str:
    """Return a stable, human-readable identity for a handler."""
    name = getattr(handler, "name", None)
    if isinstance(name, str) and name and name != "handler":
        return name
    return type(handler).__name__


@dataclass(frozen=True)
class HandlerFailure:
    """A single handler fault absorbed by the pipeline."""

    handler: str
    code: str
    stage: str
    error: str


@dataclass
class DispatchReport:
    """What happened during one dispatch."""

    code: str
    invoked: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failures: list[HandlerFailure] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.invoked)

    @property
    def all_success(self) -> bool:
        return not self.failures


class HandlerPipeline:
    """Ordered collection of handlers invoked for every resolved error.

    The engine does not impose an order; the caller registers handlers
    in the order they should run (log before notify before recovery is
    the recommended default).
    """

    def __init__(self, handlers: Optional[Iterable[Any]] = None) -> None:
        self._handlers: list[Any] = []
        self._lock = threading.Lock()
        for handler in handlers or ():
            self.register(handler)

    @property
    def handlers(self) -> tuple[Any, ...]:
        with self._lock:
            return tuple(self._handlers)

    def register(self, handler: Any) -> None:
        """Append a handler to the end of the pipeline.

        Raises:
            TypeError: If the object lacks callable interested/process.
        """
        for attr in ("interested", "process"):
            if not callable(getattr(handler, attr, None)):
                raise TypeError(
                    f"{type(handler).__name__} is not a handler: missing callable '{attr}'"
                )
        with self._lock:
            self._handlers.append(handler)
        logger.debug("Registered error handler: %s", handler_name(handler))

    def dispatch(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> int:
        """Run every interested handler and return how many were invoked."""
        return self.run(code, definition, context, cause).count

    def run(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> DispatchReport:
        """Run every interested handler and return a full DispatchReport."""
        report = DispatchReport(code=code)

        for handler in self.handlers:
            name = handler_name(handler)

            try:
                wanted = bool(handler.interested(definition))
            except Exception as exc:
                self._record_failure(report, name, code, "interested", exc)
                report.skipped.append(name)
                continue

            if not wanted:
                report.skipped.append(name)
                continue

            report.invoked.append(name)
            logger.debug("Executing handler %s for [%s]", name, code)
            try:
                handler.process(code, definition, context, cause)
            except Exception as exc:
                self._record_failure(report, name, code, "process", exc)

        logger.info(
            "Dispatched %d handlers for [%s] (%d failed)",
            report.count,
            code,
            len(report.failures),
        )
        return report

    @staticmethod
    def _record_failure(
        report: DispatchReport, name: str, code: str, stage: str, exc: Exception
    ) -> None:
        try:
            error = str(exc)
        except Exception:
            error = type(exc).__name__
        report.failures.append(
            HandlerFailure(handler=name, code=code, stage=stage, error=error)
        )
        try:
            logger.error(
                "Handler %s failed during %s for [%s]: %s",
                name,
                stage,
                code,
                exc,
                exc_info=exc,
            )
        except Exception:  # best-effort
            pass
