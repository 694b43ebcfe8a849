"""
Database initialization script.
Creates all tables, including the unique constraints on users.email and
reactions(post_id, user_id).
Run this as: python init_db.py
"""

import logging
import sys

from sqlalchemy import inspect

from socialfeed.core.config import get_settings
from socialfeed.db.init_db import create_all_tables
from socialfeed.db.session import create_db_engine

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")


def init_db() -> bool:
    """Initialize the database by creating all tables."""
    settings = get_settings()
    engine = create_db_engine(settings)
    try:
        create_all_tables(engine)
        logger.info(f"Tables: {inspect(engine).get_table_names()}")
        return True
    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        return False
    finally:
        engine.dispose()


if __name__ == "__main__":
    logger.info("Starting database initialization")
    if init_db():
        logger.info("Database initialization completed successfully")
    else:
        logger.error("Database initialization failed")
        sys.exit(1)
