"""
Use case: List the error codes currently forced.

Output: ActiveSimulationsResult (sorted codes)
Side effects: None.
"""

from errorhub.application.reporting.dtos import ActiveSimulationsResult
from errorhub.domain.reporting.simulation import SimulationRegistry


class ListActiveSimulationsUseCase:
    def __init__(self, registry: SimulationRegistry) -> None:
        self._registry = registry

    def execute(self) -> ActiveSimulationsResult:
        return ActiveSimulationsResult(
            enabled=self._registry.enabled,
            codes=sorted(self._registry.active_conditions()),
        )
