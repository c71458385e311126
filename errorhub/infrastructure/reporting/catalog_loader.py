"""
Adapter: YAML error catalog loader.

Reads the declarative error table once at startup:

    fallback_error:
      severity: error
      blocking_level: blocking
      ...
    errors:
      UNDEFINED_ERROR_CODE:
        severity: critical
        ...

Every record is validated before the process starts serving.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from errorhub.domain.reporting.definitions import parse_catalog, parse_definition
from errorhub.domain.reporting.entities import DisplayMode, ErrorDefinition
from errorhub.domain.reporting.errors import InvalidDefinitionError
from errorhub.domain.reporting.resolution import FALLBACK_ERROR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedCatalog:
    """Static definitions plus the hard fallback read from one file."""

    definitions: dict[str, ErrorDefinition]
    fallback: Optional[ErrorDefinition]


def load_catalog_file(
    path: Union[str, Path],
    default_display_mode: DisplayMode = DisplayMode.INLINE,
) -> LoadedCatalog:
    """Load and validate an error catalog from a YAML file.

    Args:
        path: Path to the catalog file.
        default_display_mode: Display mode for records without one.

    Returns:
        The parsed definitions and fallback definition.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidDefinitionError: If the file or any record is malformed.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InvalidDefinitionError("<catalog>", f"invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise InvalidDefinitionError("<catalog>", f"{path} must contain a mapping")

    definitions = parse_catalog(raw.get("errors") or {}, default_display_mode)

    fallback = None
    raw_fallback = raw.get("fallback_error")
    if raw_fallback is not None:
        fallback = parse_definition(FALLBACK_ERROR, raw_fallback, default_display_mode)
    else:
        logger.warning("Catalog %s defines no fallback_error block", path)

    logger.info("Loaded %d error definitions from %s", len(definitions), path)
    return LoadedCatalog(definitions=definitions, fallback=fallback)
