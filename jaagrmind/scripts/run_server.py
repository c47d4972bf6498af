#!/usr/bin/env python3
"""
Backend server runner script.

This script starts the FastAPI server with the configuration from the
environment.
"""

import os
import sys

import uvicorn

from jaagrmind.common.logger import app_logger

logger = app_logger.getChild("scripts.run_server")


def main():
    """Run the backend server."""
    try:
        host = os.getenv("HOST", "0.0.0.0")
        port = int(os.getenv("PORT", 8000))
        reload_enabled = os.getenv("RELOAD", "false").lower() == "true"
        workers = int(os.getenv("WEB_CONCURRENCY", 1))

        logger.info(f"Starting server on {host}:{port} (reload: {reload_enabled}, workers: {workers})")

        uvicorn.run(
            "jaagrmind.main:app",
            host=host,
            port=port,
            reload=reload_enabled,
            workers=None if reload_enabled else workers,
            log_level="info"
        )

    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
