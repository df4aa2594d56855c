"""Pytest configuration.

This project is a simple app folder layout (not installed as a package).
For local testing we add the repository root to sys.path so that imports like
`from validators...` work reliably.
"""

from __future__ import annotations

import os
import sys

import pytest


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


TEI_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<TEI xmlns="http://www.tei-c.org/ns/1.0">
  <teiHeader/>
  <text>
    <body>
      <p n="1">Hello</p>
    </body>
  </text>
</TEI>
"""

TEI = "Q{http://www.tei-c.org/ns/1.0}"


def svrl_report(document: str, body: str) -> str:
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<svrl:schematron-output xmlns:svrl="http://purl.oclc.org/dsdl/svrl">
  <svrl:active-pattern name="structure" documents="file:{document}"/>
{body}
</svrl:schematron-output>
"""


@pytest.fixture
def tei_file(tmp_path):
    path = tmp_path / "play.xml"
    path.write_text(TEI_DOCUMENT, encoding="utf-8")
    return path
