"""
jing_output.py

Parses the text that the jing RELAX NG validator prints for a run.

Jing reports one diagnostic per line:

    /path/to/file.xml:10:36: error: attribute "foo" not allowed here

Any other line (status output, stack traces, blank lines) is ignored.
"""

import re
from typing import List, NamedTuple

from managers.file_manager import trim_file_path

DIAGNOSTIC_PATTERN = re.compile(r"^([^:]+):([0-9]+):([0-9]+): ([^:]+): (.+)$")


class RawLineDiagnostic(NamedTuple):
    """One diagnostic line from jing."""

    file: str
    line: int
    column: int
    severity_token: str
    message: str

    @property
    def severity(self) -> str:
        # jing emits "error" and "warning"; anything that is not an error
        # is reported as a warning
        return "error" if self.severity_token == "error" else "warning"


def parse_jing_line(line: str):
    """Return a RawLineDiagnostic for a diagnostic line, None otherwise."""
    m = DIAGNOSTIC_PATTERN.match(line.rstrip("\r"))
    if not m:
        return None
    return RawLineDiagnostic(
        file=trim_file_path(m.group(1)),
        line=int(m.group(2)),
        column=int(m.group(3)),
        severity_token=m.group(4),
        message=m.group(5),
    )


def parse_jing_output(output: str) -> List[RawLineDiagnostic]:
    """
    Parse the captured output of one jing run.

    Args:
        output: Everything jing printed (may cover many files)

    Returns:
        Diagnostics in output order
    """
    diagnostics: List[RawLineDiagnostic] = []
    for line in (output or "").split("\n"):
        diagnostic = parse_jing_line(line)
        if diagnostic is not None:
            diagnostics.append(diagnostic)
    return diagnostics
