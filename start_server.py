#!/usr/bin/env python3
"""
Startup script for the Task Tracker API
This script starts the FastAPI server with settings from the environment
"""

import logging

import uvicorn

from tasktracker.config import Settings, configure_logging

logger = logging.getLogger("start_server")


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    logger.info("Starting Task Tracker API on %s:%s (reload=%s)", settings.host, settings.port, settings.reload)

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
