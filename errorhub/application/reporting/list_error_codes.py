"""
Use case: List the error codes known to the catalog.

Input:  ListErrorCodesQuery (severity?)
Output: list[ErrorCodeItem], sorted by code
Side effects: None.
Failure cases: InvalidDefinitionError for an unknown severity name.
"""

import logging
from typing import Optional

from errorhub.application.reporting.dtos import ErrorCodeItem, ListErrorCodesQuery
from errorhub.domain.reporting.entities import Severity
from errorhub.domain.reporting.errors import InvalidDefinitionError
from errorhub.domain.reporting.manager import ErrorManager

logger = logging.getLogger(__name__)


def _parse_severity(value: Optional[str]) -> Optional[Severity]:
    if value is None:
        return None
    try:
        return Severity(value.lower())
    except ValueError:
        allowed = ", ".join(s.value for s in Severity)
        raise InvalidDefinitionError("severity", f"must be one of: {allowed}") from None


class ListErrorCodesUseCase:
    """Lists catalog codes with their main attributes."""

    def __init__(self, manager: ErrorManager) -> None:
        self._manager = manager

    def execute(self, query: ListErrorCodesQuery) -> list[ErrorCodeItem]:
        severity = _parse_severity(query.severity)
        items = []
        for code in self._manager.known_codes(severity):
            definition = self._manager.catalog.lookup(code)
            if definition is None:
                continue
            items.append(
                ErrorCodeItem(
                    code=code,
                    severity=definition.severity.value,
                    blocking_level=definition.blocking_level.value,
                    status_code=definition.status_code,
                    display_mode=definition.display_mode.value,
                    notify_team=definition.notify_team,
                    recovery_action=definition.recovery_action,
                )
            )
        logger.debug("Listed %d error codes (severity=%s)", len(items), query.severity or "ALL")
        return items
