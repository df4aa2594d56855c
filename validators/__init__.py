"""
Validators Package
==================

This package contains the diagnostic correlation logic:
- RELAX NG (jing) output parsing
- SVRL report parsing
- Location resolution in source documents

Modules:
- validation_pipeline.py: Main validation orchestrator
- jing_output.py: jing diagnostic line parser
- svrl_parser.py: SVRL report parser
- location_resolver.py: XPath location to line/column resolution
- tool_runner.py: External validator invocation
"""

from .jing_output import RawLineDiagnostic, parse_jing_output
from .location_resolver import DocumentCache, LocationResolver, rewrite_clark_names
from .svrl_parser import SchematronAssertion, parse_svrl, sanitize_for_display
from .tool_runner import ToolError, ToolNotFoundError, ValidationRunError
from .validation_pipeline import ValidationPipeline, ValidationResult, validate_schematron

__all__ = [
    'DocumentCache',
    'LocationResolver',
    'RawLineDiagnostic',
    'SchematronAssertion',
    'ToolError',
    'ToolNotFoundError',
    'ValidationPipeline',
    'ValidationResult',
    'ValidationRunError',
    'parse_jing_output',
    'parse_svrl',
    'rewrite_clark_names',
    'sanitize_for_display',
    'validate_schematron',
]
