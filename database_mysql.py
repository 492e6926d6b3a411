"""
MySQL Database Service - pooled SQLAlchemy engine for the fleet store

- pool_pre_ping=True: Check connection health before use
- pool_recycle: Recycle connections after MYSQL_POOL_RECYCLE seconds
- pool_size / max_overflow from MYSQL_POOL_SIZE / MYSQL_MAX_OVERFLOW
"""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from settings import DATABASE, DatabaseSettings

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None


def get_sqlalchemy_engine(db_settings: DatabaseSettings = DATABASE) -> Engine:
    """
    Get or create SQLAlchemy engine with connection pooling.

    The engine is created lazily on first use so importing this module never
    touches the network.
    """
    global _engine
    if _engine is None:
        _engine = create_engine(
            db_settings.url,
            poolclass=QueuePool,
            pool_size=db_settings.pool_size,
            max_overflow=db_settings.max_overflow,
            pool_pre_ping=True,
            pool_recycle=db_settings.pool_recycle,
            echo=False,
        )
        logger.info(
            f"✅ SQLAlchemy engine created with connection pooling "
            f"({db_settings.pool_size}+{db_settings.max_overflow} connections)"
        )
    return _engine


def dispose_engine() -> None:
    """Close pooled connections (application shutdown)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
        logger.info("SQLAlchemy engine disposed")


@contextmanager
def get_db_connection(engine: Optional[Engine] = None) -> Generator[Connection, None, None]:
    """Context manager for pooled MySQL connections."""
    engine = engine or get_sqlalchemy_engine()
    conn = engine.connect()
    try:
        yield conn
    except SQLAlchemyError as e:
        logger.error(f"MySQL connection error: {e}")
        raise
    finally:
        conn.close()
