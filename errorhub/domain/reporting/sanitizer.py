"""
Context sanitization before errors leave the process.

Sensitive keys are redacted; values that cannot be serialized are
replaced with a short description of their type.
"""

from collections.abc import Mapping
from typing import Any

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "secret",
        "token",
        "auth",
        "key",
        "credentials",
        "authorization",
        "api_key",
    }
)
REDACTED = "[REDACTED]"


def _describe(value: Any) -> str:
    return f"[Object: {type(value).__qualname__}]"


def sanitize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-sanitize a context for persistence.

    Nested mappings are sanitized recursively, lists and tuples element
    by element; other non-scalar values are described by type name.
    """
    sanitized: dict[str, Any] = {}
    for key, value in context.items():
        if str(key).lower() in SENSITIVE_KEYS:
            sanitized[key] = REDACTED
        else:
            sanitized[key] = _sanitize_value(value)
    return sanitized


def _sanitize_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return sanitize_context(value)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item) for item in value]
    return _describe(value)


def sanitize_context_for_log(context: Mapping[str, Any], max_length: int = 250) -> dict[str, Any]:
    """Shallow-sanitize a context for a log line.

    Long strings are truncated, containers are summarized by size and
    are never expanded.
    """
    sanitized: dict[str, Any] = {}
    for key, value in context.items():
        if str(key).lower() in SENSITIVE_KEYS:
            sanitized[key] = REDACTED
        elif isinstance(value, str):
            sanitized[key] = value if len(value) <= max_length else value[: max_length - 3] + "..."
        elif isinstance(value, (Mapping, list, tuple, set, frozenset)):
            sanitized[key] = f"[Array:{len(value)} items]"
        elif value is None or isinstance(value, (int, float, bool)):
            sanitized[key] = value
        else:
            sanitized[key] = _describe(value)
    return sanitized
