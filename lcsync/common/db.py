"""
Database engine and session factory functions.

CRITICAL: This module does NOT create engine at import time.
The job must call create_engine_from_url() explicitly with
its configuration.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def create_engine_from_url(
    database_url: str,
    pool_pre_ping: bool = True,
    pool_size: int = 1,
    max_overflow: int = 0,
    echo: bool = False
) -> Engine:
    """
    Create SQLAlchemy engine from database URL.

    The sync job holds a single connection for the whole run, hence the
    one-connection pool.

    Args:
        database_url: PostgreSQL connection URL
        pool_pre_ping: Enable connection health checks
        pool_size: Number of connections to maintain
        max_overflow: Maximum overflow connections
        echo: Enable SQL query logging

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    return create_engine(
        database_url,
        pool_pre_ping=pool_pre_ping,
        pool_size=pool_size,
        max_overflow=max_overflow,
        echo=echo
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Create session factory from engine.

    Args:
        engine: SQLAlchemy engine instance

    Returns:
        sessionmaker: Session factory for creating database sessions
    """
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine
    )


def check_connection(engine: Engine) -> None:
    """
    Open a connection and run a trivial query.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the database is unreachable
    """
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
