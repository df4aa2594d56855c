"""
tool_runner.py

Invokes the external validators: jing for RELAX NG and the SchXslt CLI for
Schematron. A non-zero exit status from either tool only means that the
documents are invalid; it is not treated as an error here.
"""

import os
import subprocess
import tempfile
from typing import List, Optional

from core.settings import JAVA_COMMAND, JING_COMMAND, SCHXSLT_JAR, TOOL_TIMEOUT


class ValidationRunError(Exception):
    """The validation run could not be carried out."""


class ToolNotFoundError(ValidationRunError):
    """An external validator executable is missing."""


class ToolError(ValidationRunError):
    """An external validator could not complete."""


def _run(cmd: List[str], timeout: Optional[float] = TOOL_TIMEOUT) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise ToolNotFoundError(f"{cmd[0]} not found: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise ToolError(f"{cmd[0]} timed out after {timeout} seconds") from e


def run_jing(rng_file: str, files: List[str], command: str = JING_COMMAND) -> str:
    """
    Validate all files against a RELAX NG schema in one jing run.

    Args:
        rng_file: RELAX NG schema
        files: XML files to validate
        command: jing executable

    Returns:
        Captured stdout and stderr, joined by a newline
    """
    result = _run([command, str(rng_file), *[str(f) for f in files]])
    return "\n".join(part for part in (result.stdout, result.stderr) if part)


def run_schxslt(
    input_file: str,
    schema: str,
    jar: str = SCHXSLT_JAR,
    java: str = JAVA_COMMAND,
    report_dir: Optional[str] = None,
) -> str:
    """
    Run the SchXslt Schematron processor on one file.

    The report is written to report_dir, or to a fresh temporary directory
    the caller is responsible for.

    Args:
        input_file: XML file to validate
        schema: Schematron file
        jar: Path to schxslt-cli.jar
        report_dir: Directory for svrl.xml

    Returns:
        Path to the SVRL report (which may not exist if the processor failed)
    """
    if report_dir is None:
        report_dir = tempfile.mkdtemp(prefix="report-")
    report_file = os.path.join(report_dir, "svrl.xml")
    _run(
        [
            java,
            "-jar",
            str(jar),
            "-d",
            str(input_file),
            "-s",
            str(schema),
            "-o",
            report_file,
        ]
    )
    return report_file
