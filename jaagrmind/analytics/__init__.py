"""
Analytics module for JaagrMind.

Read-only aggregation over persisted submissions for dashboards and exports.
"""

from jaagrmind.submissions.filters import SubmissionFilters as AnalyticsFilters
from .models import AnalyticsSummary, GroupStats, StudentReport, StudentResult
from .engine import AggregationEngine

__all__ = [
    'AnalyticsFilters',
    'AnalyticsSummary',
    'GroupStats',
    'StudentReport',
    'StudentResult',
    'AggregationEngine',
]
