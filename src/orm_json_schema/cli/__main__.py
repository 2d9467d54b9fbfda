"""
Unified CLI entry point for orm-json-schema.

Usage:
    python -m orm_json_schema.cli <command> [options]

Available commands:
    export       - Write the JSON Schema of every model of a declarative base

Examples:
    python -m orm_json_schema.cli export --base myapp.models:Base
    python -m orm_json_schema.cli export --base myapp.models:Base \\
        --options schema_options.yml --output schema.json
"""

import argparse
import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="orm_json_schema.cli",
        description="orm-json-schema CLI - JSON Schema export for ORM models",
    )
    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
        help="Command to execute",
    )
    subparsers.add_parser(
        "export",
        help="Export JSON Schema for a SQLAlchemy declarative base",
        add_help=False,  # Let the delegated module handle help
    )

    args, remaining_args = parser.parse_known_args(argv)

    if args.command == "export":
        from .export import main as export_main

        return export_main(remaining_args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
