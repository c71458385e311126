"""
Data Transfer Objects for the reporting application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SimulationCommand:
    """Input DTO for toggling the simulation of one error code.

    Attributes:
        code: Catalog error code to force or release.
    """

    code: str


@dataclass(frozen=True)
class SimulationStatus:
    """Output DTO describing the simulation state of one code."""

    code: str
    active: bool


@dataclass(frozen=True)
class ActiveSimulationsResult:
    """Output DTO listing every forced code."""

    enabled: bool
    codes: list[str]


@dataclass(frozen=True)
class ListErrorCodesQuery:
    """Input DTO for listing catalog codes.

    Attributes:
        severity: Optional severity name (critical, error, warning, notice).
    """

    severity: Optional[str] = None


@dataclass(frozen=True)
class ErrorCodeItem:
    """A single catalog entry in a code listing."""

    code: str
    severity: str
    blocking_level: str
    status_code: int
    display_mode: str
    notify_team: bool
    recovery_action: Optional[str] = None


@dataclass(frozen=True)
class DefineErrorCommand:
    """Input DTO for defining an error type at runtime.

    Attributes:
        code: Error code to define or redefine.
        definition: Raw definition record, validated like catalog entries.
    """

    code: str
    definition: dict[str, Any] = field(default_factory=dict)
