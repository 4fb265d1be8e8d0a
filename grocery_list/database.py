"""Database configuration and session management."""

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

from fastapi import Request
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from alembic import command
from alembic.config import Config
from alembic.util import CommandError
from grocery_list.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# Connection execution option naming the SQLite BEGIN mode (DEFERRED or IMMEDIATE)
SQLITE_BEGIN = "sqlite_begin"

Base: Any = declarative_base()


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    """Enable foreign keys and hand transaction control to SQLAlchemy.

    pysqlite would otherwise only emit BEGIN before the first INSERT/UPDATE/DELETE,
    leaving earlier SELECTs outside the transaction.
    """
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_sqlite_transaction(connection: Connection) -> None:
    options = connection.get_execution_options()
    if options.get("isolation_level") == "AUTOCOMMIT":
        return
    connection.exec_driver_sql(f"BEGIN {options.get(SQLITE_BEGIN, 'DEFERRED')}")


def begin_write(db: Session) -> None:
    """Start a write transaction on ``db`` before anything is read.

    On SQLite this takes the database write lock up front (BEGIN IMMEDIATE), so
    concurrent writers queue instead of computing positions from the same stale
    count. Any transaction already open on the session is committed first.
    """
    if db.in_transaction():
        db.commit()
    db.connection(execution_options={SQLITE_BEGIN: "IMMEDIATE"})


class Database:
    """Pooled engine plus session factory for one database URL."""

    def __init__(self, url: str):
        self.url = url
        self.is_sqlite = url.startswith("sqlite")

        if self.is_sqlite:
            self.engine = create_engine(url, connect_args={"check_same_thread": False})
            event.listen(self.engine, "connect", _configure_sqlite_connection)
            event.listen(self.engine, "begin", _begin_sqlite_transaction)
        else:
            self.engine = create_engine(url, pool_pre_ping=True, pool_size=5, max_overflow=10)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def migrate(self) -> None:
        """Upgrade the schema to the latest Alembic revision."""
        config = Config()
        config.set_main_option("script_location", str(MIGRATIONS_DIR))
        with self.engine.begin() as connection:
            config.attributes["connection"] = connection
            command.upgrade(config, "head")

    def dispose(self) -> None:
        self.engine.dispose()


def open_database(url: str) -> Database:
    """Open (creating if needed) and migrate the database at ``url``.

    Raises:
        DatabaseConnectionError: if the URL is invalid, the database is unreachable
            or the migrations can't be applied.
    """
    try:
        database = Database(url)
        with database.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        database.migrate()
    except (SQLAlchemyError, CommandError) as e:
        raise DatabaseConnectionError(f"Could not open database {url}: {e}") from e

    logger.info(f"Database ready: {url}")
    return database


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
