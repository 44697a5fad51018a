"""
Database engine and session management for the account service.

The engine is created when the application starts, kept on ``app.state`` and
disposed at shutdown; request handlers receive a session through ``get_db``.
"""
from typing import Generator
import logging

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(settings: Settings) -> Engine:
    """
    Build the pooled engine for ``settings.DATABASE_URL``.

    ``DB_TIMEOUT_SECONDS`` bounds how long a request may wait on the
    datastore: the pool checkout timeout for server databases, the busy
    timeout for SQLite.
    """
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={
                "check_same_thread": False,
                "timeout": settings.DB_TIMEOUT_SECONDS,
            },
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_TIMEOUT_SECONDS,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """
    Create the users and posts tables if they do not exist.
    Called from the application lifespan on startup.
    """
    # Import models to ensure they are registered with Base
    from . import models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized successfully")
    except SQLAlchemyError:
        logger.exception("Failed to initialize database")
        raise


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency function to get a database session.

    The session is closed, returning its connection to the pool, on every
    exit path of the request.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connection(engine: Engine) -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection is successful, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database connection check failed: %s", e.__class__.__name__)
        return False
