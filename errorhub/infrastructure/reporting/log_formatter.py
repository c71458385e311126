"""
Multi-line log block for a handled error.

    --------------------------------------------------------------------------------
    CRITICAL: ✦ ERR [FILE_NOT_FOUND]
    builtins.FileNotFoundError:
    [Errno 2] No such file or directory: 'a.txt'

    File: errorhub/uploads.py:42
    Context: {
      "file": "a.txt"
    }
    --------------------------------------------------------------------------------
"""

import json
import os
import re
import traceback
from typing import Any, Optional

from errorhub.domain.reporting.entities import ErrorDefinition
from errorhub.domain.reporting.sanitizer import sanitize_context_for_log

SEPARATOR = "-" * 80
MAX_EXCEPTION_MESSAGE = 250

_LIBRARY_MARKERS = (
    f"{os.sep}site-packages{os.sep}",
    f"{os.sep}dist-packages{os.sep}",
)


def truncate_message(message: str, max_length: int = 120) -> str:
    """Shorten message, keeping the useful part of common DB errors."""
    if len(message) <= max_length:
        return message

    match = re.search(r"no such column: (\S+)", message)
    if match:
        return f"no such column: {match.group(1)}"
    match = re.search(r'relation "([^"]+)" does not exist', message)
    if match:
        return f'relation "{match.group(1)}" does not exist'

    return message[: max_length - 3] + "..."


def find_application_frame(exc: BaseException) -> Optional[tuple[str, int]]:
    """Return (file, line) of the innermost frame outside installed libraries.

    Walks the exception and its chained causes.
    """
    current: Optional[BaseException] = exc
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        frames = traceback.extract_tb(current.__traceback__) if current.__traceback__ else []
        for frame in reversed(frames):
            if not any(marker in frame.filename for marker in _LIBRARY_MARKERS):
                return frame.filename, frame.lineno or 0
        current = current.__cause__ or current.__context__
    return None


def _display_path(path: str) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:
        return os.path.basename(path)


def format_log_entry(
    code: str,
    definition: ErrorDefinition,
    context: dict[str, Any],
    cause: Optional[BaseException] = None,
) -> str:
    """Render the log body for an error."""
    level = definition.severity.value.upper()
    lines = ["", SEPARATOR, f"{level}: ✦ ERR [{code}]"]

    if cause is not None:
        exc_type = type(cause)
        lines.append(f"{exc_type.__module__}.{exc_type.__qualname__}:")
        lines.append(truncate_message(str(cause), MAX_EXCEPTION_MESSAGE))
        lines.append("")
        location = find_application_frame(cause)
        if location is not None:
            lines.append(f"File: {_display_path(location[0])}:{location[1]}")

    safe_context = sanitize_context_for_log(context)
    if cause is not None and "error_message" not in safe_context:
        safe_context["error_message"] = str(cause)
    body = json.dumps(safe_context, indent=2, ensure_ascii=False, default=str)
    lines.append("Context: " + body)
    lines.append(SEPARATOR)
    return "\n".join(lines)
