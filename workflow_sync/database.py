"""
Database connection and session management.
"""
from __future__ import annotations

from typing import Any, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from workflow_sync.config import Settings, settings


def build_engine(config: Settings) -> Engine:
    """
    Create the engine for the configured database.

    SQLite (local runs and tests) gets a single shared connection so an
    in-memory database survives across sessions.
    """
    if config.is_sqlite:
        return create_engine(
            config.database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    return create_engine(
        config.database_url,
        pool_pre_ping=True,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        pool_recycle=config.db_pool_recycle,
        echo=False,
    )


engine: Engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting a database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """
    Create the workflows table when it does not exist yet.
    """
    from workflow_sync.models import Base

    Base.metadata.create_all(bind=bind or engine)


def server_time(db: Session) -> Any:
    """Return the database server's current timestamp."""
    return db.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()


def database_health(bind: Engine | None = None) -> dict[str, Any]:
    """
    Return structured database health details.
    """
    target = bind or engine
    try:
        with target.connect() as connection:
            connection.execute(text("SELECT 1"))
        return {
            "ok": True,
            "dialect": target.dialect.name,
            "database": target.url.database,
        }
    except SQLAlchemyError:
        return {
            "ok": False,
            "dialect": target.dialect.name,
            "error": "Database unreachable",
        }
