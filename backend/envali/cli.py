"""Command-line interface for envali.

    envali content-check content/envali
    envali validate myapp.entities:sample_account --content-dir content/envali

Exit codes: 0 valid, 1 violations found, 2 configuration error.
"""

import argparse
import importlib
import json
import sys
from typing import Optional, Sequence

from envali.config import get_settings
from envali.exceptions import ConfigurationError, EntityTypeError
from envali.logging_config import configure_logging
from envali.validators.content import JsonContentSource
from envali.validators.engine import ValidationEngine
from envali.validators.entity import ValidatableEntity

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIGURATION = 2


def _load_entity(target: str) -> ValidatableEntity:
    """Import ``module:attr``; call it when it is a factory."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise EntityTypeError(f"Target must look like 'package.module:attribute', got {target!r}")

    try:
        obj = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise EntityTypeError(f"Cannot load {target!r}: {e}") from e

    if not isinstance(obj, ValidatableEntity) and callable(obj):
        obj = obj()
    if not isinstance(obj, ValidatableEntity):
        raise EntityTypeError(f"{target!r} did not produce a ValidatableEntity")
    return obj


def _content_check(args: argparse.Namespace) -> int:
    source = JsonContentSource(args.directory)
    try:
        count = len(source)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION

    entities = source.entities()
    print(f"{count} condition(s) for {len(entities)} entit{'y' if len(entities) == 1 else 'ies'}")
    for entity in entities:
        print(f"  {entity}")
    return EXIT_OK


def _validate(args: argparse.Namespace) -> int:
    content_dir = args.content_dir or get_settings().CONTENT_DIR
    engine = ValidationEngine(content_source=JsonContentSource(content_dir))
    try:
        entity = _load_entity(args.target)
        report = engine.validate(entity)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION

    print(json.dumps(report.model_dump(mode="json"), indent=2))
    return EXIT_VIOLATIONS if report.has_error() else EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="envali", description="Declarative entity validation")
    subcommands = parser.add_subparsers(dest="command", required=True)

    check = subcommands.add_parser("content-check", help="Load and lint an external content directory")
    check.add_argument("directory", help="Directory holding *.json content files")
    check.set_defaults(handler=_content_check)

    run = subcommands.add_parser("validate", help="Validate an entity and print the report as JSON")
    run.add_argument("target", help="module:attribute naming an entity or a factory returning one")
    run.add_argument("--content-dir", default=None, help="Content directory (default: ENVALI_CONTENT_DIR)")
    run.set_defaults(handler=_validate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
