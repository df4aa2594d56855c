"""
validation_pipeline.py

Orchestrates a validation run: RELAX NG → Schematron → issue aggregation.

1. RELAX NG validation - one jing run covering all files
2. Schematron validation - one SchXslt run per file, only when the schema
   ships a Schematron file; the SVRL reports are resolved against the
   source documents
3. Aggregation - both diagnostic streams merged into one issue list

Files are processed one after another; the document cache and the issue
list are shared by the whole run.
"""

import sys
import tempfile
from typing import Dict, List, Optional
from xml.parsers import expat

from lxml import etree

from core.params import SchemaConfig
from core.settings import SCHXSLT_JAR
from managers.file_manager import FileManager
from services.issue_aggregator import Issue, IssueAggregator, ValidationStatistics
from validators.jing_output import RawLineDiagnostic, parse_jing_output
from validators.location_resolver import DocumentCache, LocationResolver
from validators.svrl_parser import SchematronAssertion, parse_svrl
from validators import tool_runner


def validate_schematron(
    input_file: str,
    schema: str,
    jar: str = SCHXSLT_JAR,
    resolver: Optional[LocationResolver] = None,
) -> List[SchematronAssertion]:
    """Run the Schematron processor on one file and parse its report.

    The report directory is removed once the report has been read.
    """
    with tempfile.TemporaryDirectory(prefix="report-") as report_dir:
        report_file = tool_runner.run_schxslt(input_file, schema, jar, report_dir=report_dir)
        return parse_svrl(report_file, resolver)


class ValidationResult:
    """Holds the outcome of a validation run."""

    def __init__(self, files: List[str], aggregator: IssueAggregator):
        self.files = files
        self.aggregator = aggregator
        # input file -> message for documents that could not be resolved
        self.failures: Dict[str, str] = {}

    @property
    def issues(self) -> List[Issue]:
        return self.aggregator.issues

    @property
    def statistics(self) -> ValidationStatistics:
        return self.aggregator.statistics()

    def summary_rows(self) -> List[List[str]]:
        return self.aggregator.summary_rows()

    def has_errors(self) -> bool:
        return self.aggregator.num_errors > 0 or bool(self.failures)

    def is_valid(self, warn_only: bool = False) -> bool:
        """Returns True if the run should pass."""
        return warn_only or not self.has_errors()


class ValidationPipeline:
    """Orchestrates RELAX NG → Schematron validation for a set of files."""

    def __init__(
        self,
        schema: SchemaConfig,
        jar: str = SCHXSLT_JAR,
        cache: Optional[DocumentCache] = None,
        file_manager: Optional[FileManager] = None,
    ):
        """
        Initialize validation pipeline.

        Args:
            schema: Resolved schema files
            jar: Path to schxslt-cli.jar
            cache: Document cache for this run (a fresh one by default)
            file_manager: Path and link helper
        """
        self.schema = schema
        self.jar = jar
        self.resolver = LocationResolver(cache if cache is not None else DocumentCache())
        self.file_manager = file_manager or FileManager()

    def validate_relaxng(self, files: List[str]) -> List[RawLineDiagnostic]:
        """Run jing once over all files."""
        output = tool_runner.run_jing(str(self.schema.rng_file), files)
        return parse_jing_output(output)

    def validate_schematron(self, xml_file: str) -> List[SchematronAssertion]:
        return validate_schematron(
            xml_file, str(self.schema.schematron_file), self.jar, self.resolver
        )

    def validate_files(self, files: List[str]) -> ValidationResult:
        """
        Run the complete pipeline.

        Args:
            files: XML files to validate

        Returns:
            ValidationResult

        Raises:
            ValidationRunError: If an external validator cannot be run
        """
        aggregator = IssueAggregator(total_files=len(files), file_manager=self.file_manager)
        result = ValidationResult(files, aggregator)
        if not files:
            return result

        # Stage 1: RELAX NG validation
        print(f"  [1/2] RELAX NG validation of {len(files)} file(s)...", end=" ")
        added = aggregator.add_line_diagnostics(self.validate_relaxng(files))
        print("✅ PASS" if not added else f"❌ {len(added)} issue(s)")

        # Stage 2: Schematron validation
        if self.schema.schematron_file is None:
            return result

        for index, xml_file in enumerate(files, 1):
            print(f"  [2/2] Schematron validation ({index}/{len(files)}) {xml_file}...", end=" ")
            try:
                assertions = self.validate_schematron(xml_file)
            except (OSError, ValueError, etree.XMLSyntaxError, expat.ExpatError) as e:
                print("❌ FAIL")
                result.failures[xml_file] = f"cannot resolve assertion locations: {e}"
                print(f"ERROR: {xml_file}: {result.failures[xml_file]}", file=sys.stderr)
                continue
            added = aggregator.add_assertions(assertions)
            print("✅ PASS" if not added else f"❌ {len(added)} issue(s)")

        return result
