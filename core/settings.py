import os
from pathlib import Path

# ==============================================================================
# PROJECT PATHS
# ==============================================================================
BASE_DIR = Path(__file__).resolve().parent.parent

# Schemas are expected next to the directory holding the entry point
SCHEMA_DIR = Path(os.environ.get("SCHEMA_DIR", BASE_DIR / "schemas"))

# ==============================================================================
# EXTERNAL TOOLS
# ==============================================================================
JING_COMMAND = os.environ.get("JING_COMMAND", "jing")
JAVA_COMMAND = os.environ.get("JAVA_COMMAND", "java")
SCHXSLT_JAR = os.environ.get("SCHXSLT_JAR", "/usr/src/app/schxslt-cli.jar")

# Seconds; None disables the limit
TOOL_TIMEOUT = None

# ==============================================================================
# NAMESPACES
# ==============================================================================
SVRL_NS = "http://purl.oclc.org/dsdl/svrl"
TEI_NS = "http://www.tei-c.org/ns/1.0"

NAMESPACES = {
    "svrl": SVRL_NS,
    "tei": TEI_NS,
}

# ==============================================================================
# SCHEMA REGISTRY
# ==============================================================================
TEI_VERSION = "4.9.0"
DRACOR_VERSION = "1.0.0"

SCHEMAS = {
    "tei": {
        "title": "TEI-All {version}",
        "rng": "tei_all_{version}.rng",
        "schematron": None,
    },
    "dracor": {
        "title": "DraCor Schema {version}",
        "rng": "dracor_{version}.rng",
        "schematron": "dracor_{version}.sch",
    },
}

# ==============================================================================
# RUN DEFAULTS
# ==============================================================================
DEFAULT_SCHEMA = "tei"
DEFAULT_FILES = "tei/*.xml"

# Longest "expected ..." list kept in a jing message table cell
JING_EXPECTED_MAX_LENGTH = 120
