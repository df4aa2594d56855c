"""
svrl_parser.py

Reads an SVRL (Schematron Validation Report Language) report and turns every
failed-assert and successful-report into a SchematronAssertion positioned in
the source document.
"""

import os
import re
import sys
from typing import List, Optional

from lxml import etree

from core.settings import NAMESPACES
from validators.location_resolver import LocationResolver, rewrite_clark_names

ASSERTION_XPATH = (
    '//svrl:*[(local-name() = "failed-assert" or local-name() = "successful-report")'
    " and @location and svrl:text]"
)


def sanitize_for_display(text: str) -> str:
    """Escape '<' and '@' so assertion text can be embedded in HTML."""
    return text.replace("<", "&lt;").replace("@", "&#x40;")


class SchematronAssertion:
    """
    A Schematron outcome from an SVRL report.

    `role` is the role of the fired rule as reported (possibly empty);
    `line` and `column` are 0 when the location could not be resolved.
    """

    def __init__(
        self,
        text: str,
        location: str,
        role: str = "",
        context: str = "",
        pattern_name: str = "",
        document: str = "",
        line: int = 0,
        column: int = 0,
        file_name: Optional[str] = None,
    ):
        self.text = text
        self.location = location
        self.role = role or ""
        self.context = context
        self.pattern_name = pattern_name
        self.document = document
        self.line = line or 0
        self.column = column or 0
        self.file_name = file_name if file_name is not None else os.path.basename(document)

    @property
    def severity(self) -> str:
        """The role, or 'error' when the rule has none."""
        return self.role or "error"

    @property
    def is_informational(self) -> bool:
        return self.role == "information"

    def __repr__(self) -> str:
        return (
            f"SchematronAssertion({self.file_name}:{self.line}:{self.column} "
            f"role={self.role!r} text={self.text!r})"
        )


def _attribute(element, name: str) -> str:
    if element is None:
        return ""
    return element.get(name, "")


def _preceding_sibling(element, local_name: str):
    siblings = element.xpath(f"preceding-sibling::svrl:{local_name}[1]", namespaces=NAMESPACES)
    return siblings[0] if siblings else None


def read_svrl_report(svrl_file: str):
    """
    Parse an SVRL report, recovering from non-fatal errors.

    Returns:
        Root element, or None if the report could not be parsed at all
    """
    parser = etree.XMLParser(recover=True, huge_tree=True)
    try:
        tree = etree.parse(svrl_file, parser)
    except (OSError, etree.XMLSyntaxError) as e:
        print(f"⚠️ Warning: could not parse SVRL report {svrl_file}: {e}", file=sys.stderr)
        return None
    root = tree.getroot()
    if root is None:
        print(f"⚠️ Warning: SVRL report {svrl_file} is empty", file=sys.stderr)
    return root


def parse_svrl(svrl_file: str, resolver: Optional[LocationResolver] = None) -> List[SchematronAssertion]:
    """
    Read an SVRL report, extract assertions and determine their positions.

    Assertions of every role are returned, in report order.

    Args:
        svrl_file: Report file in SVRL format
        resolver: Location resolver sharing the run's document cache

    Returns:
        List of SchematronAssertion

    Raises:
        OSError, lxml.etree.XMLSyntaxError: If a referenced source document
            cannot be loaded
    """
    if resolver is None:
        resolver = LocationResolver()

    root = read_svrl_report(svrl_file)
    if root is None:
        return []

    results: List[SchematronAssertion] = []
    for assertion in root.xpath(ASSERTION_XPATH, namespaces=NAMESPACES):
        text = assertion.xpath("normalize-space(svrl:text[1])", namespaces=NAMESPACES)
        location = rewrite_clark_names(assertion.get("location", ""))

        rule = _preceding_sibling(assertion, "fired-rule")
        pattern = _preceding_sibling(assertion, "active-pattern")
        document = re.sub(r"^file:", "", _attribute(pattern, "documents"))

        line, column = 0, 0
        if document:
            line, column = resolver.resolve(document, location)

        results.append(
            SchematronAssertion(
                text=sanitize_for_display(str(text)),
                location=location,
                role=_attribute(rule, "role"),
                context=_attribute(rule, "context"),
                pattern_name=_attribute(pattern, "name"),
                document=document,
                line=line,
                column=column,
            )
        )

    return results
