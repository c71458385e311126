"""
Parsing and validation of declarative error definitions.

Raw configuration records (mappings loaded from YAML, JSON or code) are
turned into typed ErrorDefinition values at load time. Records missing
required fields are rejected here, at startup, never at first use.

The legacy field names of older catalogs are accepted as aliases:

    type                -> severity
    blocking            -> blocking_level
    http_status_code    -> status_code
    devTeam_email_need  -> notify_team
    notify_slack        -> notify_secondary_channel
    msg_to              -> display_mode
"""

from collections.abc import Mapping
from typing import Any, Optional

from errorhub.domain.reporting.entities import (
    BlockingLevel,
    DisplayMode,
    ErrorDefinition,
    Severity,
)
from errorhub.domain.reporting.errors import InvalidDefinitionError

FIELD_ALIASES = {
    "type": "severity",
    "blocking": "blocking_level",
    "http_status_code": "status_code",
    "devTeam_email_need": "notify_team",
    "notify_slack": "notify_secondary_channel",
    "msg_to": "display_mode",
}

BLOCKING_ALIASES = {
    "semi-blocking": BlockingLevel.SEMI_BLOCKING,
    "not": BlockingLevel.NOT_BLOCKING,
    "non-blocking": BlockingLevel.NOT_BLOCKING,
}

DISPLAY_ALIASES = {
    "div": DisplayMode.INLINE,
    "sweet-alert": DisplayMode.MODAL,
    "log-only": DisplayMode.LOG_ONLY,
}

KNOWN_FIELDS = frozenset(
    {
        "severity",
        "blocking_level",
        "status_code",
        "dev_message",
        "dev_message_key",
        "user_message",
        "user_message_key",
        "notify_team",
        "notify_secondary_channel",
        "display_mode",
        "recovery_action",
    }
)


def _normalize_keys(code: str, raw: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for key, value in raw.items():
        name = FIELD_ALIASES.get(key, key)
        if name not in KNOWN_FIELDS:
            raise InvalidDefinitionError(code, f"unknown field '{key}'")
        if name in fields:
            raise InvalidDefinitionError(code, f"field '{name}' given twice")
        fields[name] = value
    return fields


def _parse_enum(code: str, field_name: str, value: Any, enum_cls, aliases=None):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise InvalidDefinitionError(code, f"'{field_name}' must be a string")
    text = value.strip().lower()
    if aliases and text in aliases:
        return aliases[text]
    try:
        return enum_cls(text)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidDefinitionError(
            code, f"'{field_name}' must be one of: {allowed} (got '{value}')"
        ) from None


def _optional_str(code: str, field_name: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidDefinitionError(code, f"'{field_name}' must be a string")
    return value or None


def _parse_bool(code: str, field_name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidDefinitionError(code, f"'{field_name}' must be a boolean")
    return value


def parse_definition(
    code: str,
    raw: Mapping[str, Any],
    default_display_mode: DisplayMode = DisplayMode.INLINE,
) -> ErrorDefinition:
    """Build a validated ErrorDefinition from a raw configuration record.

    Args:
        code: The error code the record is registered under.
        raw: Mapping of configuration fields (canonical or legacy names).
        default_display_mode: Display mode used when the record has none.

    Returns:
        A typed, immutable ErrorDefinition.

    Raises:
        InvalidDefinitionError: If a required field is missing or any
            field has the wrong type or an unknown value.
    """
    if not isinstance(code, str) or not code.strip():
        raise InvalidDefinitionError(str(code), "error code must be a non-empty string")
    if not isinstance(raw, Mapping):
        raise InvalidDefinitionError(code, "definition must be a mapping")

    fields = _normalize_keys(code, raw)

    for required in ("severity", "blocking_level"):
        if fields.get(required) is None:
            raise InvalidDefinitionError(code, f"missing required field '{required}'")

    severity = _parse_enum(code, "severity", fields["severity"], Severity)
    blocking_level = _parse_enum(
        code, "blocking_level", fields["blocking_level"], BlockingLevel, BLOCKING_ALIASES
    )

    status_code = fields.get("status_code")
    if status_code is None:
        status_code = severity.default_status_code
    elif isinstance(status_code, bool) or not isinstance(status_code, int):
        raise InvalidDefinitionError(code, "'status_code' must be an integer")
    elif not 100 <= status_code <= 599:
        raise InvalidDefinitionError(code, f"'status_code' out of range: {status_code}")

    display_mode = fields.get("display_mode")
    if display_mode is None:
        display_mode = default_display_mode
    else:
        display_mode = _parse_enum(
            code, "display_mode", display_mode, DisplayMode, DISPLAY_ALIASES
        )

    notify_team = fields.get("notify_team")
    notify_team = (
        severity.default_notify_team
        if notify_team is None
        else _parse_bool(code, "notify_team", notify_team)
    )

    return ErrorDefinition(
        code=code,
        severity=severity,
        blocking_level=blocking_level,
        status_code=status_code,
        dev_message=_optional_str(code, "dev_message", fields.get("dev_message")),
        dev_message_key=_optional_str(code, "dev_message_key", fields.get("dev_message_key")),
        user_message=_optional_str(code, "user_message", fields.get("user_message")),
        user_message_key=_optional_str(code, "user_message_key", fields.get("user_message_key")),
        notify_team=notify_team,
        notify_secondary_channel=_parse_bool(
            code, "notify_secondary_channel", fields.get("notify_secondary_channel", False)
        ),
        display_mode=display_mode,
        recovery_action=_optional_str(code, "recovery_action", fields.get("recovery_action")),
    )


def parse_catalog(
    raw_errors: Mapping[str, Any],
    default_display_mode: DisplayMode = DisplayMode.INLINE,
) -> dict[str, ErrorDefinition]:
    """Parse a whole table of definitions keyed by code.

    Raises:
        InvalidDefinitionError: On the first invalid record.
    """
    if not isinstance(raw_errors, Mapping):
        raise InvalidDefinitionError("<catalog>", "errors table must be a mapping")
    return {
        code: parse_definition(code, raw, default_display_mode)
        for code, raw in raw_errors.items()
    }
