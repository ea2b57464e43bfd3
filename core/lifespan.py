"""
Define application startup and shutdown procedures
"""

import re
from contextlib import asynccontextmanager
from fastapi import FastAPI
from core.config import get_settings
from core.db import create_db_and_tables, get_engine
from core.logger import logger
from api.files.exceptions import StorageError
from api.files.repository import FileRecordRepository
from api.files.services import FileStorageService


def _log_setting(key: str, value):
    """Log a setting, masking sensitive values like passwords and secrets"""
    if ("PASSWORD" in key or "SECRET" in key) and value is not None:
        logger.info("  %s: %s", key, "*****")
    elif "SQLALCHEMY_DATABASE_URI" in key and value is not None:
        # Mask password in database URI if present
        masked_value = re.sub(r"://(.*?):(.*?)@", r"://\1:*****@", value)
        logger.info("  %s: %s", key, masked_value)
    else:
        logger.info("  %s: %s", key, value)


def init_storage_service() -> FileStorageService:
    """
    Build the storage service from settings.
    Creates the upload directory if needed.
    """
    settings = get_settings()
    repository = FileRecordRepository(get_engine())
    return FileStorageService(
        repository=repository,
        storage_location=settings.UPLOAD_DIR,
        max_file_size=settings.MAX_FILE_SIZE,
        allowed_extensions=settings.allowed_extensions,
    )


# Handle startup/shutdown tasks
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("In lifespan...starting up")

    # Print configuration settings (mask sensitive info)
    logger.info("Configuration Settings:")

    settings = get_settings()

    # Log computed fields first (they don't appear in vars())
    _log_setting("SQLALCHEMY_DATABASE_URI", settings.SQLALCHEMY_DATABASE_URI)

    # Log remaining settings
    for key, value in vars(settings).items():
        _log_setting(key, value)

    logger.info("Initializing database...")
    create_db_and_tables()

    logger.info("Initializing upload directory %s...", settings.UPLOAD_DIR)
    try:
        app.state.storage_service = init_storage_service()
    except StorageError as e:
        logger.error("Upload directory initialization failed: %s", e)
        # Re-raise the exception to fail application startup
        raise RuntimeError(
            f"Cannot start application: {e.message}"
        ) from e

    logger.info("In lifespan...yield")
    try:
        yield
    finally:
        # Shutdown
        logger.info("In lifespan...shutting down")
