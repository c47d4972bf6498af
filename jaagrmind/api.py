"""
Central API router for the JaagrMind backend.

This module provides:
- The versioned router that includes the submission and analytics routers
- The health endpoint
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter

from jaagrmind.analytics.router import router as analytics_router
from jaagrmind.submissions.router import router as submissions_router

# Configure logging
logger = logging.getLogger(__name__)

# Create main API router
main_router = APIRouter()


def build_api_router(api_prefix: str) -> APIRouter:
    """
    Create the versioned API router.

    Args:
        api_prefix: Version prefix, e.g. ``/api/v1``

    Returns:
        Router with all module routers mounted under the prefix
    """
    router = APIRouter(prefix=api_prefix)
    router.include_router(submissions_router)
    router.include_router(analytics_router)
    logger.info(f"API router built with {len(router.routes)} routes under {api_prefix}")
    return router


@main_router.get("/health", tags=["Health"])
async def health() -> Dict[str, Any]:
    """Liveness probe."""
    return {"status": "ok"}
