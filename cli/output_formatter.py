"""
Output Formatter
================

Handles console output formatting.
Follows SRP: Only handles output formatting.
"""

import os
import sys
from typing import List


class OutputFormatter:
    """
    Formatter for console output.

    Follows SRP: Only handles output formatting.
    """

    def __init__(self, debug: bool = False):
        """
        Initialize formatter.

        Args:
            debug: Print debug messages (also enabled by RUNNER_DEBUG=1)
        """
        self.debug = debug or os.environ.get("RUNNER_DEBUG") == "1"

    def print_header(self, title: str) -> None:
        """
        Print formatted header.

        Args:
            title: Header title
        """
        print("\n" + "=" * 80)
        print(f" {title}")
        print("=" * 80)

    def print_statistics(self, lines: List[str]) -> None:
        """
        Print run statistics.

        Args:
            lines: Statistics lines
        """
        print()
        print("-" * 80)
        print("Validation Summary:")
        for line in lines:
            print(f"  {line}")
        print("=" * 80)

    def print_debug(self, message: str) -> None:
        if self.debug:
            print(f"::debug::{message}")

    def print_error(self, message: str) -> None:
        """
        Print error message.

        Args:
            message: Error message
        """
        print(f"ERROR: {message}", file=sys.stderr)

    def print_warning(self, message: str) -> None:
        """
        Print warning message.

        Args:
            message: Warning message
        """
        print(f"WARNING: {message}", file=sys.stderr)

    def print_success(self, message: str) -> None:
        """
        Print success message.

        Args:
            message: Success message
        """
        print(f"✓ {message}")
