"""
Export command: SQLAlchemy declarative base -> JSON Schema document.

Usage:
    python -m orm_json_schema.cli export --base myapp.models:Base [--output schema.json]
"""

import argparse
import importlib
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from orm_json_schema.infrastructure.introspection import registry_from_sqlalchemy
from orm_json_schema.infrastructure.schema import (
    SchemaDerivationError,
    load_schema_set_options,
    schema_set,
)
from orm_json_schema.utils.logging import get_logger

logger = get_logger(__name__)


def load_object(spec: str) -> Any:
    """Import ``module.path:attribute`` and return the attribute."""
    module_name, sep, attr_name = spec.partition(":")
    if not sep or not module_name or not attr_name:
        raise ValueError(f"Expected 'module:attribute', got {spec!r}")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr_name)
    except AttributeError:
        raise ValueError(f"Module '{module_name}' has no attribute '{attr_name}'") from None


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the export command.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(
        prog="orm_json_schema.cli export",
        description="Export JSON Schema for every model of a declarative base",
    )
    parser.add_argument(
        "--base",
        required=True,
        help="Declarative base as 'module.path:Base'",
    )
    parser.add_argument(
        "--options",
        help="YAML file with include/exclude/per_model options",
    )
    parser.add_argument(
        "--output",
        help="Write to this file instead of stdout",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation",
    )
    args = parser.parse_args(argv)

    try:
        base = load_object(args.base)
        options = load_schema_set_options(args.options) if args.options else None
        document = schema_set(registry_from_sqlalchemy(base), options)
    except (ImportError, ValueError, SchemaDerivationError) as e:
        logger.error("export_failed", base=args.base, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rendered = json.dumps(document, indent=args.indent, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(rendered + "\n", encoding="utf-8")
        logger.info(
            "schema_exported",
            output=args.output,
            models=len(document["definitions"]),
        )
    else:
        print(rendered)
    return 0
