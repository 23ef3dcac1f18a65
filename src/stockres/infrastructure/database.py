"""Engine, session factory and declarative base."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Base class for models
Base = declarative_base()


def make_engine(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite"):
        return _make_sqlite_engine(database_url, echo)

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=300,
        echo=echo,
    )


def _make_sqlite_engine(database_url: str, echo: bool) -> Engine:
    """SQLite engine whose transactions take the write lock up front.

    SQLite ignores ``FOR UPDATE`` and pysqlite defers BEGIN until the first
    write, so a locked read would see a value another writer is about to
    change.  ``BEGIN IMMEDIATE`` makes each transaction hold the database
    write lock from its first statement; a second writer waits for it.
    """
    if database_url.startswith("sqlite:///"):
        # Create the parent directory of a file-backed SQLite database
        db_path = database_url[len("sqlite:///"):]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(database_url, echo=echo)

    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        # pysqlite must not emit its own deferred BEGIN
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def create_schema(engine: Engine) -> None:
    # Register every model on Base.metadata before creating tables
    from stockres.infrastructure.persistence import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
