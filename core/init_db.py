"""
Initialize the database and the upload directory.
Run before the first start when tables should exist ahead of time.
"""
from core.config import get_settings
from core.db import create_db_and_tables
from core.lifespan import init_storage_service
from core.logger import logger


def main():
  logger.info("Create tables...")
  create_db_and_tables()
  logger.info("Create upload directory %s...", get_settings().UPLOAD_DIR)
  init_storage_service()


if __name__ == "__main__":
  main()
