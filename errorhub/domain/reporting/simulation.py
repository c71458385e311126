"""
Error simulation registry.

Lets operators and tests force specific error codes to "fire" without
code changes. Upstream interceptors consult ``is_forced(code)`` before
their normal error detection runs and, when it returns True, pass that
code into ErrorManager.handle. The registry never touches resolution or
dispatch internals.

Globally gated by ``enabled``: when disabled (production), every code
reads as not forced regardless of what has been set.
"""

import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class SimulationRegistry:
    """Thread-safe set of forced-active error codes."""

    def __init__(self, enabled: bool = False) -> None:
        self._enabled = enabled
        self._forced: dict[str, bool] = {}
        self._lock = threading.RLock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._enabled = enabled
        logger.info("Error simulation %s", "enabled" if enabled else "disabled")

    def set_condition(self, code: str, active: bool) -> None:
        """Upsert the forced state of code."""
        with self._lock:
            self._forced[code] = bool(active)
        logger.debug("Simulation condition [%s] set to %s", code, active)

    def activate(self, code: str) -> None:
        self.set_condition(code, True)

    def deactivate(self, code: str) -> None:
        self.set_condition(code, False)

    def is_forced(self, code: str) -> bool:
        """Return True when simulation is enabled and code is forced."""
        with self._lock:
            if not self._enabled:
                return False
            return self._forced.get(code, False)

    def active_conditions(self) -> frozenset[str]:
        """Return every code currently mapped to True."""
        with self._lock:
            return frozenset(code for code, active in self._forced.items() if active)

    def reset_all(self) -> None:
        """Forget every condition."""
        with self._lock:
            self._forced.clear()
        logger.info("All error simulations have been reset")


def first_forced(registry: SimulationRegistry, *codes: str) -> Optional[str]:
    """Return the first of codes currently forced, or None.

    Usage:
        code = first_forced(registry, "VIRUS_FOUND", "SCAN_ERROR")
        if code:
            return manager.handle(code, {"file": name})
    """
    for code in codes:
        if registry.is_forced(code):
            return code
    return None
