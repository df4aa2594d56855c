"""
Issue Aggregator
================

Merges RELAX NG diagnostics and Schematron assertions into one issue list
and computes the run statistics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from core.settings import JING_EXPECTED_MAX_LENGTH
from managers.file_manager import FileManager


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"

    @classmethod
    def from_role(cls, role: str) -> "Severity":
        """Map a Schematron role; anything but warning/information is an error."""
        if role == cls.WARNING.value:
            return cls.WARNING
        if role == cls.INFORMATION.value:
            return cls.INFORMATION
        return cls.ERROR

    @property
    def glyph(self) -> str:
        return "❌" if self is Severity.ERROR else "⚠️"


@dataclass(frozen=True)
class Issue:
    file: str
    message: str
    severity: Severity
    line: int = 0
    column: int = 0
    source: str = "rng"


@dataclass(frozen=True)
class ValidationStatistics:
    total_files: int
    files_with_issues: int
    total_issues: int
    unique_issues: int
    num_errors: int
    num_warnings: int

    def as_lines(self) -> List[str]:
        """Human-readable stats; issue counts are only listed when there are issues."""
        lines = [
            f"Total files validated: {self.total_files}",
            f"Files with issues: {self.files_with_issues}",
        ]
        if self.total_issues > 0:
            lines.extend(
                [
                    f"Total number of issues: {self.total_issues}",
                    f"Unique issues: {self.unique_issues}",
                    f"Errors: {self.num_errors}",
                    f"Warnings: {self.num_warnings}",
                ]
            )
        return lines


def truncate_jing_message(message: str, max_length: int = JING_EXPECTED_MAX_LENGTH) -> str:
    """
    Shorten the list of alternatives in a jing message.

    Jing appends "; expected ..." listing every allowed element, which can
    run to thousands of characters for TEI-All.
    """
    head, sep, expected = message.partition("; expected ")
    if not sep or len(expected) <= max_length:
        return message
    cut = expected[:max_length]
    if ", " in cut:
        cut = cut[: cut.rindex(", ")]
    return f"{head}{sep}{cut}, …"


def _unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


class IssueAggregator:
    """
    Collects issues in discovery order.

    Add the RELAX NG diagnostics first, then the Schematron assertions of
    each file in the order the files were processed.
    """

    def __init__(self, total_files: int = 0, file_manager: FileManager = None):
        self.total_files = total_files
        self.file_manager = file_manager or FileManager()
        self.issues: List[Issue] = []

    def add_line_diagnostics(self, diagnostics) -> List[Issue]:
        added = [
            Issue(
                file=d.file,
                message=d.message,
                severity=Severity(d.severity),
                line=d.line,
                column=d.column,
                source="rng",
            )
            for d in diagnostics
        ]
        self.issues.extend(added)
        return added

    def add_assertions(self, assertions) -> List[Issue]:
        """Add Schematron assertions, skipping informational ones."""
        added = [
            Issue(
                file=self.file_manager.trim_file_path(a.document) if a.document else a.file_name,
                message=a.text,
                severity=Severity.from_role(a.severity),
                line=a.line,
                column=a.column,
                source="schematron",
            )
            for a in assertions
            if not a.is_informational
        ]
        self.issues.extend(added)
        return added

    def unique_messages(self) -> List[str]:
        return _unique(issue.message for issue in self.issues)

    def files_with_issues(self) -> List[str]:
        return _unique(issue.file for issue in self.issues)

    @property
    def num_errors(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is Severity.ERROR)

    @property
    def num_warnings(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is Severity.WARNING)

    def statistics(self) -> ValidationStatistics:
        return ValidationStatistics(
            total_files=self.total_files,
            files_with_issues=len(self.files_with_issues()),
            total_issues=len(self.issues),
            unique_issues=len(self.unique_messages()),
            num_errors=self.num_errors,
            num_warnings=self.num_warnings,
        )

    def summary_rows(self) -> List[List[str]]:
        """Table rows: link, line:col, severity glyph, message."""
        rows = []
        for issue in self.issues:
            if issue.source == "schematron":
                message = f"<small>{issue.message}</small>"
            else:
                message = truncate_jing_message(issue.message)
            rows.append(
                [
                    self.file_manager.make_link(issue.file, issue.line),
                    f"{issue.line}:{issue.column}",
                    issue.severity.glyph,
                    message,
                ]
            )
        return rows
