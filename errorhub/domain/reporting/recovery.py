"""
Registry of automated recovery routines.

Maps the symbolic ``recovery_action`` name of a definition to a callable
taking the error context and returning True on success. Names are
validated when registered, not resolved reflectively at call time.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Optional

from errorhub.domain.reporting.errors import UnknownRecoveryActionError

logger = logging.getLogger(__name__)

RecoveryAction = Callable[[dict[str, Any]], bool]


class RecoveryRegistry:
    """Name -> recovery action mapping."""

    def __init__(self, actions: Optional[Mapping[str, RecoveryAction]] = None) -> None:
        self._actions: dict[str, RecoveryAction] = {}
        for name, action in (actions or {}).items():
            self.register(name, action)

    def register(self, name: str, action: RecoveryAction) -> None:
        """Register action under name, replacing any previous one.

        Raises:
            ValueError: If name is empty or action is not callable.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Recovery action name must be a non-empty string")
        if not callable(action):
            raise ValueError(f"Recovery action '{name}' is not callable")
        self._actions[name] = action
        logger.debug("Registered recovery action: %s", name)

    def get(self, name: str) -> Optional[RecoveryAction]:
        return self._actions.get(name)

    def require(self, name: str) -> RecoveryAction:
        action = self._actions.get(name)
        if action is None:
            raise UnknownRecoveryActionError(name)
        return action

    def names(self) -> list[str]:
        return sorted(self._actions)

    def __contains__(self, name: object) -> bool:
        return name in self._actions
