"""
Run Parameters
==============

Collects the parameters of a validation run from command-line flags and the
CI environment, and resolves the selected schema to concrete files.
"""

import os
import re
from pathlib import Path
from typing import Dict, Optional

from core.settings import (
    DEFAULT_FILES,
    DEFAULT_SCHEMA,
    DRACOR_VERSION,
    SCHEMA_DIR,
    SCHEMAS,
    TEI_VERSION,
)


class RunParams:
    """Parameters for a single validation run."""

    def __init__(
        self,
        schema: str = DEFAULT_SCHEMA,
        version: Optional[str] = None,
        files: str = DEFAULT_FILES,
        warn_only: bool = False,
    ):
        self.schema = schema
        self.version = version or default_version(schema)
        self.files = files
        self.warn_only = warn_only

    def __repr__(self) -> str:
        return (
            f"RunParams(schema={self.schema!r}, version={self.version!r}, "
            f"files={self.files!r}, warn_only={self.warn_only!r})"
        )


class SchemaConfig:
    """Concrete schema files for a schema name and version."""

    def __init__(
        self,
        title: str,
        rng_file: Path,
        schematron_file: Optional[Path] = None,
    ):
        self.title = title
        self.rng_file = rng_file
        self.schematron_file = schematron_file


def default_version(schema: str) -> str:
    if schema == "dracor":
        return DRACOR_VERSION
    return TEI_VERSION


def _get_input(environ: Dict[str, str], name: str) -> str:
    """
    Read a CI input from the environment.

    Inputs are exposed as INPUT_<NAME> with the name upper-cased; dashes are
    kept by some runners and replaced by underscores by others.
    """
    key = f"INPUT_{name.upper()}"
    value = environ.get(key) or environ.get(key.replace("-", "_")) or ""
    return value.strip()


def get_params(args=None, environ: Optional[Dict[str, str]] = None) -> RunParams:
    """
    Build run parameters.

    Command-line values win over CI inputs, which win over the defaults.

    Args:
        args: Parsed argparse namespace (optional)
        environ: Environment mapping (default: os.environ)

    Returns:
        RunParams
    """
    if environ is None:
        environ = os.environ

    schema = getattr(args, "schema", None) or _get_input(environ, "schema") or DEFAULT_SCHEMA
    version = (
        getattr(args, "version", None)
        or _get_input(environ, "version")
        or default_version(schema)
    )
    files = getattr(args, "files", None) or _get_input(environ, "files") or DEFAULT_FILES

    warn_only = bool(getattr(args, "warn_only", False))
    if not warn_only:
        warn_only = bool(re.match(r"^(yes|true)$", _get_input(environ, "warn-only"), re.I))

    return RunParams(schema=schema, version=version, files=files, warn_only=warn_only)


def resolve_schema(schema: str, version: str, schema_dir: Optional[Path] = None) -> SchemaConfig:
    """
    Map a schema name and version to its RELAX NG and Schematron files.

    Raises:
        ValueError: If the schema name is not registered
    """
    if schema not in SCHEMAS:
        raise ValueError(f'Unknown schema "{schema}"')

    schema_dir = Path(schema_dir or SCHEMA_DIR)
    entry = SCHEMAS[schema]
    schematron = entry["schematron"]

    return SchemaConfig(
        title=entry["title"].format(version=version),
        rng_file=schema_dir / entry["rng"].format(version=version),
        schematron_file=(
            schema_dir / schematron.format(version=version) if schematron else None
        ),
    )
