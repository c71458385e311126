"""
Use case: Clear every simulated error code.

Output: number of codes that were active
Side effects: Empties the simulation registry.
Failure cases: EnvironmentForbiddenError.
"""

import logging

from errorhub.domain.reporting.errors import EnvironmentForbiddenError
from errorhub.domain.reporting.simulation import SimulationRegistry

logger = logging.getLogger(__name__)


class ResetSimulationsUseCase:
    """Resets all simulation conditions at once."""

    def __init__(self, registry: SimulationRegistry, environment: str = "production") -> None:
        self._registry = registry
        self._environment = environment

    def execute(self) -> int:
        if not self._registry.enabled:
            raise EnvironmentForbiddenError(self._environment)

        cleared = len(self._registry.active_conditions())
        self._registry.reset_all()
        logger.info("Error simulations reset (%d cleared)", cleared)
        return cleared
