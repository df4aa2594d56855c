"""
Summary Service
===============

Renders the validation result as a step summary (markdown with an HTML
table) following Single Responsibility Principle.
Only handles summary rendering and output.
"""

import html
import os
from typing import Dict, List, Optional

from services.issue_aggregator import ValidationStatistics

TABLE_HEADER = ["File", "Line:Col", "Type", "Message"]


class SummaryService:
    """
    Service responsible for the human-readable validation summary.

    Follows SRP: Only handles summary rendering.
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        environ = os.environ if environ is None else environ
        self.summary_file = environ.get("GITHUB_STEP_SUMMARY") or None

    def format_table(self, rows: List[List[str]]) -> str:
        """
        Format table rows as HTML.

        Cells are inserted as-is; callers pass already escaped content.
        """
        lines = ["<table>"]
        lines.append("<tr>" + "".join(f"<th>{h}</th>" for h in TABLE_HEADER) + "</tr>")
        for row in rows:
            lines.append("<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>")
        lines.append("</table>")
        return "\n".join(lines)

    def render(
        self,
        title: str,
        statistics: Optional[ValidationStatistics],
        rows: List[List[str]],
        files_pattern: str = "",
    ) -> str:
        """
        Render the summary.

        Args:
            title: Schema title
            statistics: Run statistics (None when no files were found)
            rows: Issue table rows
            files_pattern: Input pattern, quoted when nothing matched

        Returns:
            Summary text
        """
        lines = [f"## Validation against {title}", ""]

        if statistics is None:
            lines.append(f"No files found. ('{html.escape(files_pattern)}')")
            return "\n".join(lines) + "\n"

        for stat in statistics.as_lines():
            lines.append(f"- {stat}")
        lines.append("")

        if rows:
            lines.append(self.format_table(rows))
            lines.append("")

        return "\n".join(lines)

    def write(self, summary: str) -> Optional[str]:
        """
        Append the summary to the step summary file, or print it.

        Returns:
            Path written to, or None if printed
        """
        if self.summary_file:
            with open(self.summary_file, "a", encoding="utf-8") as f:
                f.write(summary)
            return self.summary_file
        print(summary)
        return None
