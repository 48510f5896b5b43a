"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest
import pytest_asyncio

from mapmyride_sync.config import database_url_for
from mapmyride_sync.db.session import create_engine_for, create_session_maker, init_db

REF_TIME = datetime(2020, 3, 10, 7, 32, 56, tzinfo=timezone.utc)


@pytest.fixture
def ref_time() -> datetime:
    return REF_TIME


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    """Fresh SQLite file with the workout tables for each test."""
    engine = create_engine_for(database_url_for(str(tmp_path / "data.db")))
    await init_db(engine)
    yield create_session_maker(engine)
    await engine.dispose()
