"""
JaagrMind Assessment Backend

Scores student submissions for the JaagrMind wellness assessment against the
authoritative question catalog, classifies each section and the overall
result into Stable, Emerging or SupportNeeded buckets, stores exactly one
submission per student and assessment, and aggregates stored submissions for
school dashboards and exports.

The application factory lives in ``jaagrmind.main.create_app``.
"""

__version__ = "1.0.0"
