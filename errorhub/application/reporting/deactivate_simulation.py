"""
Use case: Stop forcing an error code.

Input:  SimulationCommand (code)
Output: SimulationStatus
Side effects: Removes the code from the simulation registry.
Failure cases: EnvironmentForbiddenError.
"""

import logging

from errorhub.application.reporting.dtos import SimulationCommand, SimulationStatus
from errorhub.domain.reporting.errors import EnvironmentForbiddenError
from errorhub.domain.reporting.simulation import SimulationRegistry

logger = logging.getLogger(__name__)


class DeactivateSimulationUseCase:
    """Deactivates a simulated code. Unknown or inactive codes are a no-op."""

    def __init__(self, registry: SimulationRegistry, environment: str = "production") -> None:
        self._registry = registry
        self._environment = environment

    def execute(self, command: SimulationCommand) -> SimulationStatus:
        if not self._registry.enabled:
            raise EnvironmentForbiddenError(self._environment)

        self._registry.deactivate(command.code)
        logger.info("Error simulation deactivated for [%s]", command.code)
        return SimulationStatus(code=command.code, active=False)
