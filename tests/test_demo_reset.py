"""Demo reset tests."""

import asyncio
import time
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from grocery_list.database import Base, Database, open_database
from grocery_list.main import create_app
from grocery_list.services.categories import CategoryService
from grocery_list.services.demo_data import DEMO_LIST, seed_demo_snapshot
from grocery_list.services.demo_reset import DemoResetScheduler, ResetState, reset_database
from grocery_list.services.entries import EntryService

TABLES = ["categories", "entries", "entry_history"]


def dump(database: Database) -> dict[str, list[tuple]]:
    """All rows of every application table, ordered by id."""
    with database.engine.connect() as connection:
        return {
            table: [
                tuple(row)
                for row in connection.execute(text(f"SELECT * FROM {table} ORDER BY id"))
            ]
            for table in TABLES
        }


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "grocery_demo.db"
    seed_demo_snapshot(f"sqlite:///{path}")
    return path


@pytest.fixture
def snapshot(snapshot_path):
    database = open_database(f"sqlite:///{snapshot_path}")
    yield database
    database.dispose()


@pytest.fixture
def live_data(db):
    """Arbitrary data in the primary database that a reset must replace."""
    categories = CategoryService(db)
    entries = EntryService(db)
    snacks = categories.create("Snacks")
    for name in ["Chips", "Pretzels", "Popcorn"]:
        entries.create(name, category_id=snacks.id)
    entries.create("Batteries")
    # End the read transaction refresh() opened so the reset can commit
    db.commit()
    return snacks


def test_reset_copies_snapshot(database, snapshot, snapshot_path, live_data):
    """After a reset the primary tables equal the snapshot's."""
    assert dump(database) != dump(snapshot)

    tables = reset_database(database, snapshot_path)

    assert set(tables) == set(TABLES)
    assert dump(database) == dump(snapshot)
    session = database.session()
    try:
        names = [category.name for category in CategoryService(session).list_all()]
    finally:
        session.close()
    assert names == [name for name, _ in DEMO_LIST]


def test_reset_leaves_migration_state(database, snapshot_path):
    with database.engine.connect() as connection:
        before = connection.execute(text("SELECT version_num FROM alembic_version")).all()

    reset_database(database, snapshot_path)

    with database.engine.connect() as connection:
        after = connection.execute(text("SELECT version_num FROM alembic_version")).all()
    assert before == after


def test_reset_is_repeatable(database, snapshot, snapshot_path, live_data):
    reset_database(database, snapshot_path)
    reset_database(database, snapshot_path)
    assert dump(database) == dump(snapshot)


def test_missing_snapshot(database, tmp_path, live_data):
    before = dump(database)
    with pytest.raises(FileNotFoundError):
        reset_database(database, tmp_path / "nope.db")
    assert dump(database) == before


def test_failed_reset_changes_nothing(database, tmp_path, snapshot_path, live_data):
    """A snapshot missing a table aborts the whole reset."""
    partial_path = tmp_path / "partial.db"
    partial = Database(f"sqlite:///{partial_path}")
    Base.metadata.tables["categories"].create(partial.engine)
    partial.dispose()

    before = dump(database)
    with pytest.raises(OperationalError):
        reset_database(database, partial_path)
    assert dump(database) == before

    # The snapshot was detached, so a later reset works
    reset_database(database, snapshot_path)
    assert [row[1] for row in dump(database)["categories"]] == [name for name, _ in DEMO_LIST]


class TestDemoResetScheduler:
    """Tests for DemoResetScheduler."""

    @pytest.mark.asyncio
    async def test_tick_resets(self, database, snapshot, snapshot_path, live_data):
        scheduler = DemoResetScheduler(database, snapshot_path, interval_seconds=60)

        assert await scheduler.tick() is True
        assert scheduler.state == ResetState.WAITING
        assert dump(database) == dump(snapshot)

    @pytest.mark.asyncio
    async def test_tick_failure_is_logged_not_raised(self, database, tmp_path, caplog):
        scheduler = DemoResetScheduler(database, tmp_path / "nope.db", interval_seconds=60)

        assert await scheduler.tick() is False
        assert scheduler.state == ResetState.WAITING
        assert "Failed to reset database" in caplog.text

    @pytest.mark.asyncio
    async def test_start_runs_first_tick_and_stop_cancels(self, database, snapshot_path):
        scheduler = DemoResetScheduler(database, snapshot_path, interval_seconds=3600)

        with patch.object(scheduler, "tick", AsyncMock(return_value=True)) as tick:
            scheduler.start()
            await asyncio.sleep(0.05)
            tick.assert_awaited_once()

            await scheduler.stop()

        assert scheduler._task is None

    @pytest.mark.asyncio
    async def test_keeps_ticking_after_failure(self, database, snapshot_path):
        scheduler = DemoResetScheduler(database, snapshot_path, interval_seconds=0.01)

        with patch(
            "grocery_list.services.demo_reset.reset_database",
            side_effect=OSError("disk gone"),
        ) as reset:
            scheduler.start()
            await asyncio.sleep(0.2)
            await scheduler.stop()

        assert reset.call_count >= 2
        assert scheduler.state == ResetState.WAITING

    @pytest.mark.asyncio
    async def test_stop_without_start(self, database, snapshot_path):
        scheduler = DemoResetScheduler(database, snapshot_path, interval_seconds=60)
        await scheduler.stop()


def test_demo_app_resets_on_startup(settings, snapshot_path):
    """In demo mode the app restores the snapshot at startup and flags the frontend."""
    demo_settings = settings.model_copy(
        update={"gl_demo": True, "demo_database_path": snapshot_path}
    )
    app = create_app(demo_settings)

    with TestClient(app) as client:
        assert app.state.reset_scheduler is not None
        assert "window.IS_DEMO = true;" in client.get("/").text

        expected = [name for name, _ in DEMO_LIST]
        deadline = time.monotonic() + 10
        names = []
        while time.monotonic() < deadline:
            names = [c["name"] for c in client.get("/api/categories").json()]
            if names == expected:
                break
            time.sleep(0.05)
        assert names == expected
