"""
Main application entry point for the JaagrMind assessment backend.

Usage:
    - Direct: python -m jaagrmind.main
    - ASGI server: uvicorn jaagrmind.main:app
"""

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jaagrmind.analytics.engine import AggregationEngine
from jaagrmind.api import build_api_router, main_router
from jaagrmind.catalog.repository import CatalogRepository, SqlCatalogRepository
from jaagrmind.common.db.connection import get_database_settings
from jaagrmind.common.error_handling import register_exception_handlers
from jaagrmind.common.logger import app_logger, configure_logger
from jaagrmind.config import Settings, settings as default_settings
from jaagrmind.database.init_db import close_database, create_schema, get_session_factory, initialize_database
from jaagrmind.submissions.classification import BucketThresholds
from jaagrmind.submissions.repository import SubmissionRepository
from jaagrmind.submissions.service import SubmissionService
from jaagrmind.submissions.sql_repository import SqlSubmissionRepository

# Setup module logger
logger = app_logger.getChild("main")


def create_app(
    catalog_repository: Optional[CatalogRepository] = None,
    submission_repository: Optional[SubmissionRepository] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    When both repositories are given (tests, local demos) no database is
    opened; otherwise the SQL repositories are built on startup.

    Args:
        catalog_repository: Catalog source to use instead of the database
        submission_repository: Submission store to use instead of the database
        app_settings: Settings to use, defaults to the global settings

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or default_settings
    configure_logger(
        name="jaagrmind",
        level=app_settings.LOG_LEVEL,
        use_json=app_settings.LOG_JSON,
        log_file=app_settings.LOG_FILE,
    )
    thresholds = BucketThresholds.from_settings(app_settings)
    uses_database = catalog_repository is None or submission_repository is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup sequence initiated.")
        catalogs, submissions = catalog_repository, submission_repository

        if uses_database:
            db_settings = get_database_settings(app_settings)
            engine = await initialize_database(db_settings["database_url"], db_settings["engine_kwargs"])
            if app_settings.CREATE_SCHEMA_ON_STARTUP:
                await create_schema(engine)
            session_factory = get_session_factory()
            catalogs = catalogs or SqlCatalogRepository(session_factory)
            submissions = submissions or SqlSubmissionRepository(session_factory)

        app.state.submission_service = SubmissionService(catalogs, submissions, thresholds=thresholds)
        app.state.aggregation_engine = AggregationEngine(
            submissions, recent_limit=app_settings.RECENT_SUBMISSIONS_LIMIT
        )
        logger.info(
            f"Application startup complete (stable >= {thresholds.stable_min}, "
            f"emerging >= {thresholds.emerging_min})"
        )

        yield

        logger.info("Application shutdown sequence initiated.")
        if uses_database:
            await close_database()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="Submission scoring, classification and analytics for JaagrMind assessments",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(main_router, prefix="/api")
    app.include_router(build_api_router(app_settings.API_V1_STR))
    register_exception_handlers(app)

    logger.info(f"Application created with {len(app.routes)} routes")
    return app


app = create_app()


# Entry point for running the application directly
if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 8000))

    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run("jaagrmind.main:app", host=host, port=port, log_level="info")
