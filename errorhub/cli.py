"""
CLI entry point for errorhub.

Usage:
    # Validate the catalog and its translation keys
    python -m errorhub.cli check

    # List catalog codes, optionally by severity
    python -m errorhub.cli codes --severity critical

    # Run the HTTP API
    python -m errorhub.cli serve --port 8000
"""

import argparse
import logging
import sys
from typing import Optional

from errorhub.core.config import settings
from errorhub.domain.reporting.entities import DisplayMode, ErrorDefinition, MessageKind
from errorhub.domain.reporting.errors import InvalidDefinitionError
from errorhub.infrastructure.reporting.catalog_loader import load_catalog_file
from errorhub.infrastructure.reporting.yaml_translator import YamlTranslator
from errorhub.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def _missing_keys(definition: ErrorDefinition, translator: YamlTranslator) -> list[str]:
    missing = []
    for kind in MessageKind:
        key = definition.key_for(kind)
        if key is None:
            continue
        if not (translator.has(key) or translator.has(key, settings.fallback_locale)):
            missing.append(key)
    return missing


def cmd_check(args: argparse.Namespace) -> None:
    """Validate the catalog file and every translation key it uses."""
    catalog_path = args.catalog or settings.catalog_path
    try:
        loaded = load_catalog_file(catalog_path, DisplayMode(settings.ui_default_display_mode))
    except (OSError, InvalidDefinitionError) as exc:
        logger.error("Catalog check failed: %s", exc)
        sys.exit(1)

    translator = YamlTranslator(
        settings.translations_dir,
        locale=args.locale or settings.locale,
        fallback_locale=settings.fallback_locale,
    )

    definitions = list(loaded.definitions.values())
    if loaded.fallback is None:
        logger.warning("No fallback_error block: unknown codes will fail hard")
    else:
        definitions.append(loaded.fallback)

    problems = 0
    for definition in definitions:
        for key in _missing_keys(definition, translator):
            logger.error("[%s] missing translation key: %s", definition.code, key)
            problems += 1

    if problems:
        logger.error("Catalog check found %d problem(s).", problems)
        sys.exit(1)
    logger.info("Catalog OK: %d definitions.", len(loaded.definitions))


def cmd_codes(args: argparse.Namespace) -> None:
    """Print catalog codes, one per line."""
    try:
        loaded = load_catalog_file(settings.catalog_path, DisplayMode(settings.ui_default_display_mode))
    except (OSError, InvalidDefinitionError) as exc:
        logger.error("Could not load catalog: %s", exc)
        sys.exit(1)

    for code in sorted(loaded.definitions):
        definition = loaded.definitions[code]
        if args.severity and definition.severity.value != args.severity:
            continue
        print(
            f"{code:<40} {definition.severity.value:<9} "
            f"{definition.blocking_level.value:<14} {definition.status_code}"
        )


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the HTTP API with uvicorn."""
    import uvicorn

    from errorhub.main import create_app

    logger.info("Starting errorhub at http://%s:%d", args.host, args.port)
    uvicorn.run(create_app(), host=args.host, port=args.port, reload=False)


def main(argv: Optional[list[str]] = None) -> None:
    configure_logging(level=settings.log_level)

    parser = argparse.ArgumentParser(description="errorhub CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Check
    check_parser = subparsers.add_parser("check", help="Validate the error catalog")
    check_parser.add_argument(
        "--catalog", default=None,
        help="Catalog file to check (default: CATALOG_PATH setting)",
    )
    check_parser.add_argument(
        "--locale", default=None,
        help="Locale whose translations are checked (default: LOCALE setting)",
    )
    check_parser.set_defaults(func=cmd_check)

    # Codes
    codes_parser = subparsers.add_parser("codes", help="List catalog error codes")
    codes_parser.add_argument(
        "--severity", default=None,
        choices=["critical", "error", "warning", "notice"],
        help="Only list codes of this severity",
    )
    codes_parser.set_defaults(func=cmd_codes)

    # Serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port (default 8000)")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
