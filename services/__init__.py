"""
Services Package
================

Business logic layer for the XML validation step.

Services:
- IssueAggregator: Issue normalization and statistics
- SummaryService: Step summary rendering
"""

from .issue_aggregator import (
    Issue,
    IssueAggregator,
    Severity,
    ValidationStatistics,
    truncate_jing_message,
)
from .summary_service import SummaryService

__all__ = [
    'Issue',
    'IssueAggregator',
    'Severity',
    'SummaryService',
    'ValidationStatistics',
    'truncate_jing_message',
]
