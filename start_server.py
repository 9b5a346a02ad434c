#!/usr/bin/env python3
"""
Startup script for the Employee Management Backend
This script starts the FastAPI server with the configured host and port
"""

import logging
import uvicorn

from emphub.config.settings import settings

logger = logging.getLogger(__name__)

def main():
    logging.basicConfig(level=settings.LOG_LEVEL)

    logger.info("Starting Employee Management Backend Server...")
    logger.info("Host: %s", settings.HOST)
    logger.info("Port: %s", settings.PORT)
    logger.info("Reload: %s", settings.RELOAD)

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )

if __name__ == "__main__":
    main()
