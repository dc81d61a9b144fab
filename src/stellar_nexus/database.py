"""Database connection and session management.

This module provides the engine and session factories used by the HTTP
adapter, plus small inspection helpers.
"""

import logging
from typing import Any

from sqlalchemy import create_engine, event, func, inspect, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from stellar_nexus.config import Settings, get_settings
from stellar_nexus.models import Base

logger = logging.getLogger(__name__)


def _configure_sqlite(
    dbapi_connection: Any, connection_record: Any  # noqa: ARG001
) -> None:
    """Enable foreign keys and WAL journaling on every SQLite connection.

    Args:
        dbapi_connection: The DBAPI connection
        connection_record: Connection record (required by SQLAlchemy event API)
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(settings: Settings | None = None) -> Engine:
    """Create and configure the database engine.

    Args:
        settings: Settings to read the URL and pool options from; defaults
            to :func:`get_settings`

    Returns:
        Engine: Configured SQLAlchemy engine

    Note:
        In-memory SQLite shares one connection across threads so that every
        session sees the same database.
    """
    settings = settings or get_settings()
    url = settings.DATABASE_URL

    if url.startswith("sqlite"):
        if ":memory:" in url or url == "sqlite://":
            engine = create_engine(
                url,
                echo=settings.DATABASE_ECHO,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_engine(
                url,
                echo=settings.DATABASE_ECHO,
                pool_pre_ping=True,
                connect_args={"check_same_thread": False},
            )
        event.listen(engine, "connect", _configure_sqlite)
    else:
        engine = create_engine(
            url,
            echo=settings.DATABASE_ECHO,
            pool_pre_ping=True,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_recycle=settings.DATABASE_POOL_RECYCLE,
            pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        )

    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    Base.metadata.create_all(bind=engine)


def check_database_health(engine: Engine) -> bool:
    """Return whether a trivial query succeeds; failures are logged, not raised."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Database health check failed", exc_info=True)
        return False
    return True


def get_table_names(engine: Engine) -> list[str]:
    return inspect(engine).get_table_names()


def count_rows(session: Session, table_name: str) -> int:
    """Count rows in a specific table.

    Args:
        session: Database session
        table_name: Name of the table to count

    Returns:
        int: Number of rows in the table

    Raises:
        ValueError: If table_name is not a valid table in the schema
    """
    if table_name not in Base.metadata.tables:
        valid_tables = sorted(Base.metadata.tables.keys())
        raise ValueError(
            f"Invalid table name: {table_name}. Valid tables: {', '.join(valid_tables)}"
        )

    table = Base.metadata.tables[table_name]
    result = session.execute(select(func.count()).select_from(table)).scalar()
    return result or 0
