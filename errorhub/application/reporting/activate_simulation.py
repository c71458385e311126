"""
Use case: Force an error code to fire on its next check.

Input:  SimulationCommand (code)
Output: SimulationStatus
Side effects: Adds the code to the simulation registry.
Failure cases: UnknownErrorCodeError, EnvironmentForbiddenError.
"""

import logging

from errorhub.application.reporting.dtos import SimulationCommand, SimulationStatus
from errorhub.domain.reporting.catalog import ErrorCatalog
from errorhub.domain.reporting.errors import (
    EnvironmentForbiddenError,
    UnknownErrorCodeError,
)
from errorhub.domain.reporting.simulation import SimulationRegistry

logger = logging.getLogger(__name__)


class ActivateSimulationUseCase:
    """Activates the simulation of a catalog error code."""

    def __init__(
        self,
        registry: SimulationRegistry,
        catalog: ErrorCatalog,
        environment: str = "production",
    ) -> None:
        self._registry = registry
        self._catalog = catalog
        self._environment = environment

    def execute(self, command: SimulationCommand) -> SimulationStatus:
        """Activate the simulation.

        Raises:
            EnvironmentForbiddenError: If simulation is disabled here.
            UnknownErrorCodeError: If the code is not in the catalog.
        """
        if not self._registry.enabled:
            raise EnvironmentForbiddenError(self._environment)
        if command.code not in self._catalog:
            raise UnknownErrorCodeError(command.code)

        self._registry.activate(command.code)
        logger.info("Error simulation activated for [%s]", command.code)
        return SimulationStatus(code=command.code, active=True)
