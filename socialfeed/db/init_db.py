import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from socialfeed.db.base import Base

logger = logging.getLogger("app")


def create_all_tables(engine: Engine) -> None:
    """Create any missing tables, including the unique constraints the services rely on."""
    existing_tables = set(inspect(engine).get_table_names())

    Base.metadata.create_all(bind=engine)

    new_tables = set(inspect(engine).get_table_names()) - existing_tables
    if new_tables:
        logger.info(f"Created new tables: {new_tables}")
