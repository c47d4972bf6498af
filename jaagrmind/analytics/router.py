"""
Analytics API Router

Dashboard and export endpoints. All filters arrive as flat, optional query
parameters (``schoolId``, ``startDate``, ``endDate``, ``bucket``,
``className``, ``section``, ``assessmentId``, ``search``).
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from jaagrmind.analytics.engine import AggregationEngine
from jaagrmind.dependencies import get_aggregation_engine, get_filters
from jaagrmind.submissions.filters import SubmissionFilters

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("")
async def get_analytics(
    filters: SubmissionFilters = Depends(get_filters),
    engine: AggregationEngine = Depends(get_aggregation_engine),
) -> Dict[str, Any]:
    """Summary of the submissions matching the filters."""
    summary = await engine.aggregate(filters)
    return summary.to_dict()


@router.get("/students")
async def get_student_analytics(
    filters: SubmissionFilters = Depends(get_filters),
    engine: AggregationEngine = Depends(get_aggregation_engine),
) -> Dict[str, Any]:
    reports = await engine.student_report(filters)
    return {
        "totalStudents": len(reports),
        "students": [report.to_dict() for report in reports],
    }


@router.get("/export-rows")
async def get_export_rows(
    filters: SubmissionFilters = Depends(get_filters),
    engine: AggregationEngine = Depends(get_aggregation_engine),
) -> Dict[str, Any]:
    """Flat rows with display labels, consumed by the spreadsheet export."""
    rows = await engine.export_rows(filters)
    return {"count": len(rows), "rows": rows}
