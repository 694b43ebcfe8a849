from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
import logging

from socialfeed.core.config import Settings

logger = logging.getLogger("app")

# Base class for all SQLAlchemy models
Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    if not settings.DATABASE_URL:
        logger.error("DATABASE_URL is not set or empty!")
        raise ValueError("DATABASE_URL environment variable is required")

    connect_args = {}
    if settings.is_sqlite:
        # Sessions are used from FastAPI's threadpool
        connect_args["check_same_thread"] = False

    try:
        engine = create_engine(
            settings.DATABASE_URL,
            pool_pre_ping=True,  # Check connection before using from pool
            connect_args=connect_args,
        )
    except Exception as e:
        logger.error(f"Failed to create database engine: {e}")
        raise

    logger.info("Database engine created successfully")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    # Session factory for database interactions
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def utcnow() -> datetime:
    """Column default; naive UTC so values compare the same on every backend."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
