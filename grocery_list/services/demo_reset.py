"""Periodic demo reset: restore every table from a snapshot database.

The reset attaches the snapshot file to a pooled SQLite connection, wipes and
refills each table inside one transaction, then detaches and vacuums. Readers
see either the old data or the snapshot, never a mix.
"""

import asyncio
import logging
from datetime import UTC, datetime
from enum import StrEnum
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from grocery_list.database import Base, Database

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA = "demo"


class ResetState(StrEnum):
    """Scheduler states."""

    WAITING = "waiting"
    RESETTING = "resetting"


def allowed_tables() -> list[str]:
    """Application tables, parents before children."""
    return [table.name for table in Base.metadata.sorted_tables]


def reset_database(database: Database, snapshot_path: Path) -> list[str]:
    """Replace the contents of every application table with the snapshot's.

    Only tables known to the ORM metadata are touched, so bookkeeping tables
    such as ``alembic_version`` keep their rows. Returns the tables reset.

    Raises:
        FileNotFoundError: if the snapshot file is missing.
        sqlalchemy.exc.SQLAlchemyError: if any statement fails; the data is unchanged.
    """
    snapshot_path = Path(snapshot_path)
    if not snapshot_path.is_file():
        raise FileNotFoundError(f"Demo snapshot not found: {snapshot_path}")

    with database.engine.connect() as connection:
        # Explicit BEGIN/COMMIT: ATTACH, DETACH and VACUUM can't run inside a transaction
        conn = connection.execution_options(isolation_level="AUTOCOMMIT")
        conn.execute(
            text(f"ATTACH DATABASE :path AS {SNAPSHOT_SCHEMA}"), {"path": str(snapshot_path)}
        )
        try:
            present = {
                name
                for (name,) in conn.execute(
                    text(
                        "SELECT name FROM main.sqlite_master "
                        "WHERE type = 'table' AND name NOT LIKE 'sqlite_%'"
                    )
                )
            }
            tables = [name for name in allowed_tables() if name in present]
            skipped = sorted(present - set(tables))
            if skipped:
                logger.debug(f"Demo reset leaves tables untouched: {skipped}")

            conn.exec_driver_sql("BEGIN IMMEDIATE")
            try:
                conn.exec_driver_sql("PRAGMA defer_foreign_keys = ON")
                for table in reversed(tables):
                    conn.exec_driver_sql(f'DELETE FROM main."{table}"')
                for table in tables:
                    conn.exec_driver_sql(
                        f'INSERT INTO main."{table}" SELECT * FROM {SNAPSHOT_SCHEMA}."{table}"'
                    )
                conn.exec_driver_sql("COMMIT")
            except Exception:
                conn.exec_driver_sql("ROLLBACK")
                raise
        finally:
            conn.execute(text(f"DETACH DATABASE {SNAPSHOT_SCHEMA}"))

        try:
            conn.exec_driver_sql("VACUUM")
        except OperationalError as e:
            # Reset is already committed; compaction retries next tick
            logger.warning(f"VACUUM after demo reset failed: {e}")

    logger.debug(f"Database reset completed at {datetime.now(UTC).isoformat()}")
    return tables


class DemoResetScheduler:
    """Background job that resets the database now and then every ``interval_seconds``.

    Failures are logged and retried on the next tick; they never reach
    request handlers or stop the server.
    """

    def __init__(self, database: Database, snapshot_path: Path, interval_seconds: float):
        self.database = database
        self.snapshot_path = Path(snapshot_path)
        self.interval_seconds = interval_seconds
        self.state = ResetState.WAITING
        self._task: asyncio.Task | None = None

    async def tick(self) -> bool:
        """Run one reset. Returns False if it failed."""
        logger.debug("Starting database reset...")
        self.state = ResetState.RESETTING
        try:
            await asyncio.to_thread(reset_database, self.database, self.snapshot_path)
            return True
        except Exception as e:
            logger.exception(f"Failed to reset database: {e}")
            return False
        finally:
            self.state = ResetState.WAITING

    async def _run(self) -> None:
        while True:
            await self.tick()
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self._task is None:
            logger.info(
                f"Demo reset from {self.snapshot_path} every {self.interval_seconds:g} seconds"
            )
            self._task = asyncio.create_task(self._run(), name="demo-reset")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
