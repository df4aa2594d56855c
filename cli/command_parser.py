"""
Command Parser
==============

Handles CLI argument parsing.
Follows SRP: Only handles command-line argument parsing.
"""

import argparse
from typing import Any

from core.settings import SCHEMAS


class CommandParser:
    """
    Parser for command-line arguments.

    Follows SRP: Only handles argument parsing.
    """

    def __init__(self):
        """Initialize command parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all options.

        Returns:
            Configured ArgumentParser
        """
        parser = argparse.ArgumentParser(
            description="Validate XML documents against RELAX NG and Schematron schemas",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Validate the default files against TEI-All
  python Validate_CLI.py

  # Validate against the DraCor schema (RELAX NG + Schematron)
  python Validate_CLI.py --schema dracor --files "tei/*.xml"

  # Report issues without failing
  python Validate_CLI.py --files "a.xml b.xml" --warn-only

Unset options fall back to the CI inputs INPUT_SCHEMA, INPUT_VERSION,
INPUT_FILES and INPUT_WARN-ONLY.
            """
        )

        parser.add_argument(
            "--schema",
            choices=sorted(SCHEMAS),
            help="Schema to validate against (default: tei)"
        )

        parser.add_argument(
            "--version",
            help="Schema version (default depends on the schema)"
        )

        parser.add_argument(
            "--files",
            help="Space separated files or glob patterns (default: tei/*.xml)"
        )

        parser.add_argument(
            "--warn-only",
            action="store_true",
            help="Report errors without a failing exit status"
        )

        parser.add_argument(
            "--schema-dir",
            help="Directory containing the schema files"
        )

        parser.add_argument(
            "--jar",
            help="Path to schxslt-cli.jar"
        )

        parser.add_argument(
            "--debug",
            action="store_true",
            help="Print debug output"
        )

        return parser

    def parse_args(self, args=None) -> Any:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (default: sys.argv)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)
