"""
Built-in recovery actions.

    create_temp_directory: create ``context["directory"]`` if missing.
    schedule_cleanup: remove ``context["file_path"]`` after a delay,
        on a background timer thread.

Host-specific retries (retry_upload, retry_scan, retry_presigned,
retry_metadata_save) depend on the host's services and are registered
by the host on the same registry.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Any

from errorhub.domain.reporting.recovery import RecoveryRegistry

logger = logging.getLogger(__name__)

DEFAULT_CLEANUP_DELAY_SECONDS = 300.0


def create_temp_directory(context: dict[str, Any]) -> bool:
    """Create the directory named in the context, parents included."""
    directory = context.get("directory")
    if not directory:
        return False

    path = Path(directory)
    if path.is_dir():
        return True

    logger.debug("Creating directory [%s]", path)
    path.mkdir(mode=0o755, parents=True, exist_ok=True)
    logger.info("Directory [%s] created successfully", path)
    return True


def _remove_file(path: Path) -> None:
    try:
        path.unlink()
        logger.info("Cleaned up temporary file [%s]", path)
    except FileNotFoundError:
        logger.debug("Temporary file [%s] already gone", path)
    except OSError as exc:
        logger.error("Cleanup of [%s] failed: %s", path, exc)


def schedule_cleanup(context: dict[str, Any]) -> bool:
    """Schedule removal of the temporary file named in the context.

    ``context["cleanup_delay"]`` overrides the default delay in seconds;
    a delay of 0 removes the file immediately.
    """
    file_path = context.get("file_path")
    if not file_path:
        return False

    path = Path(file_path)
    delay = float(context.get("cleanup_delay", DEFAULT_CLEANUP_DELAY_SECONDS))
    if delay <= 0:
        _remove_file(path)
        return not os.path.exists(path)

    timer = threading.Timer(delay, _remove_file, args=(path,))
    timer.daemon = True
    timer.start()
    logger.debug("Cleanup of [%s] scheduled in %.0fs", path, delay)
    return True


def default_recovery_registry() -> RecoveryRegistry:
    """Return a registry holding the built-in recovery actions."""
    return RecoveryRegistry(
        {
            "create_temp_directory": create_temp_directory,
            "schedule_cleanup": schedule_cleanup,
        }
    )
