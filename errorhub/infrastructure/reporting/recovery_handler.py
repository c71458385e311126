"""
Handler: run the automated recovery routine named by a definition.
"""

import logging
from typing import Any, Optional

from errorhub.domain.reporting.entities import ErrorDefinition
from errorhub.domain.reporting.ports import ErrorHandler
from errorhub.domain.reporting.recovery import RecoveryRegistry

logger = logging.getLogger(__name__)


class RecoveryHandler(ErrorHandler):
    """Looks up ``recovery_action`` in a RecoveryRegistry and runs it.

    An unknown action or a failing routine is logged; the handler
    reports False and the pipeline moves on.
    """

    name = "recovery"

    def __init__(self, registry: RecoveryRegistry) -> None:
        self._registry = registry

    def interested(self, definition: ErrorDefinition) -> bool:
        return bool(definition.recovery_action)

    def process(
        self,
        code: str,
        definition: ErrorDefinition,
        context: dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> bool:
        action_name = definition.recovery_action
        action = self._registry.get(action_name)
        if action is None:
            logger.warning("Unknown recovery action [%s] for [%s]", action_name, code)
            return False

        logger.info("Attempting recovery action [%s] for [%s]", action_name, code)
        try:
            success = bool(action(dict(context)))
        except Exception:
            logger.exception("Exception during recovery action [%s] for [%s]", action_name, code)
            return False

        if success:
            logger.info("Recovery action [%s] succeeded for [%s]", action_name, code)
        else:
            logger.warning("Recovery action [%s] failed for [%s]", action_name, code)
        return success
