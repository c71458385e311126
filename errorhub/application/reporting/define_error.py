"""
Use case: Define or redefine an error type at runtime.

Runtime definitions shadow the static catalog for the life of the
process; they are not written back to the catalog file.

Input:  DefineErrorCommand (code, definition)
Output: ErrorCodeItem for the new definition
Side effects: Adds the definition to the catalog's dynamic layer.
Failure cases: InvalidDefinitionError, EnvironmentForbiddenError.
"""

import logging

from errorhub.application.reporting.dtos import DefineErrorCommand, ErrorCodeItem
from errorhub.domain.reporting.definitions import parse_definition
from errorhub.domain.reporting.entities import DisplayMode
from errorhub.domain.reporting.errors import EnvironmentForbiddenError
from errorhub.domain.reporting.manager import ErrorManager

logger = logging.getLogger(__name__)


class DefineErrorUseCase:
    """Validates a raw definition and registers it with the manager."""

    def __init__(
        self,
        manager: ErrorManager,
        allowed: bool = True,
        environment: str = "production",
        default_display_mode: DisplayMode = DisplayMode.INLINE,
    ) -> None:
        """
        Args:
            manager: ErrorManager owning the catalog.
            allowed: False disables runtime definitions (production).
            environment: Environment name, reported when forbidden.
            default_display_mode: Display mode for records that omit one.
        """
        self._manager = manager
        self._allowed = allowed
        self._environment = environment
        self._default_display_mode = default_display_mode

    def execute(self, command: DefineErrorCommand) -> ErrorCodeItem:
        if not self._allowed:
            raise EnvironmentForbiddenError(self._environment)

        definition = parse_definition(
            command.code, command.definition, self._default_display_mode
        )
        self._manager.define_error(command.code, definition)
        logger.info("Runtime definition registered for [%s]", command.code)

        return ErrorCodeItem(
            code=definition.code,
            severity=definition.severity.value,
            blocking_level=definition.blocking_level.value,
            status_code=definition.status_code,
            display_mode=definition.display_mode.value,
            notify_team=definition.notify_team,
            recovery_action=definition.recovery_action,
        )
