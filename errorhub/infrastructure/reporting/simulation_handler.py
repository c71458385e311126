"""
Handler: record error simulation activity.

Only active while the simulation registry is enabled (never in
production). It logs every dispatched error together with whether the
code was being simulated, which makes forced error paths easy to trace
in test runs. It also offers the activate/deactivate helpers used by
test scaffolding.
"""

import logging
from typing import Any, Optional

from errorhub.domain.reporting.entities import ErrorDefinition
from errorhub.domain.reporting.ports import ErrorHandler
from errorhub.domain.reporting.simulation import SimulationRegistry

SIMULATION_LOGGER_NAME = "errorhub.simulation"

logger = logging.getLogger(SIMULATION_LOGGER_NAME)


class SimulationHandler(ErrorHandler):
    """Logs simulated and organic errors while simulation is enabled."""

    name = "simulation"

    def __init__(self, registry: SimulationRegistry) -> None:
        self._registry = registry

    def interested(self, definition: ErrorDefinition) -> bool:
        return self._registry.enabled

    def process(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> bool:
        simulated = self._registry.is_forced(code)
        logger.info(
            "Error simulation: [%s] simulated=%s severity=%s",
            code,
            simulated,
            definition.severity.value,
        )
        return simulated

    def simulate_error(self, code: str) -> str:
        """Force code to fire and return it."""
        self._registry.activate(code)
        logger.info("Activating error simulation for [%s]", code)
        return code

    def stop_simulating_error(self, code: str) -> None:
        self._registry.deactivate(code)
        logger.info("Deactivating error simulation for [%s]", code)

    def is_simulating_error(self, code: str) -> bool:
        return self._registry.is_forced(code)
