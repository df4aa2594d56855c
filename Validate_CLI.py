#!/usr/bin/env python3
"""
XML Validation Step - CLI Entry Point
=====================================

Validates XML documents against a RELAX NG schema and, where the schema
provides one, a Schematron schema, then reports all issues in one summary.

Architecture:
- Validators: External tool runs and diagnostic parsing
- Services: Issue aggregation and summary rendering
- Managers: Input resolution and file links
- CLI: User interface (parsing, formatting)
- Core: Settings and run parameters

Usage:
    python Validate_CLI.py --schema tei --files "tei/*.xml"
    python Validate_CLI.py --schema dracor --files "a.xml b.xml" --warn-only
"""

import os
import sys
from typing import Dict, List, Optional

from core.params import get_params, resolve_schema
from core.settings import SCHXSLT_JAR
from managers import FileManager
from services import SummaryService
from validators import ValidationPipeline, ValidationRunError

from cli import CommandParser, OutputFormatter


def run(argv: Optional[List[str]] = None, environ: Optional[Dict[str, str]] = None) -> int:
    """
    Run one validation step.

    Args:
        argv: Command-line arguments (default: sys.argv)
        environ: Environment mapping (default: os.environ)

    Returns:
        Exit status
    """
    environ = os.environ if environ is None else environ
    args = CommandParser().parse_args(argv)
    formatter = OutputFormatter(debug=args.debug)

    formatter.print_debug(f"cwd '{os.getcwd()}'")
    if environ.get("GITHUB_SHA"):
        formatter.print_debug(f"commit '{environ['GITHUB_SHA']}'")

    params = get_params(args, environ)
    formatter.print_debug(repr(params))

    try:
        schema = resolve_schema(params.schema, params.version, args.schema_dir)
    except ValueError as e:
        formatter.print_error(str(e))
        return 1
    formatter.print_debug(f"rngFile '{schema.rng_file}'")
    formatter.print_debug(f"schematronFile '{schema.schematron_file}'")

    file_manager = FileManager(environ)
    summary_service = SummaryService(environ)
    files = file_manager.resolve_files(params.files)

    formatter.print_header(f"Validation against {schema.title}")

    if not files:
        formatter.print_debug(f"No files found. ('{params.files}')")
        summary_service.write(summary_service.render(schema.title, None, [], params.files))
        return 0

    pipeline = ValidationPipeline(schema, jar=args.jar or SCHXSLT_JAR, file_manager=file_manager)
    try:
        result = pipeline.validate_files(files)
    except ValidationRunError as e:
        formatter.print_error(str(e))
        return 1

    statistics = result.statistics
    formatter.print_statistics(statistics.as_lines())
    for failed_file, message in result.failures.items():
        formatter.print_error(f"{failed_file}: {message}")

    try:
        summary_service.write(
            summary_service.render(schema.title, statistics, result.summary_rows(), params.files)
        )
    except OSError as e:
        formatter.print_warning(f"Could not write step summary: {e}")

    if not result.is_valid(params.warn_only):
        formatter.print_error("Invalid documents")
        return 1

    formatter.print_success("Validation complete")
    return 0


def main() -> None:
    """Main entry point for CLI."""
    formatter = OutputFormatter()
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        formatter.print_warning("Operation cancelled by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
