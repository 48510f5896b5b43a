"""Sync one user's MapMyRide workouts for a time range into the database."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mapmyride_sync.services.mapmyride_client import MapMyRideClient
from mapmyride_sync.services.reconciler import latest_workout_started_at, remove_extra, upsert_workout
from mapmyride_sync.services.workout_fetcher import fetch_workouts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    synced: int
    removed: int


async def default_begin(
    session_maker: async_sessionmaker[AsyncSession],
    user_name: str,
    overlap_days: int,
) -> datetime | None:
    """
    Start of the default sync window: midnight UTC, overlap_days before the day of the
    latest stored workout, so recent edits on MapMyRide are picked up again.
    None if the user has nothing stored yet.
    """
    latest = await latest_workout_started_at(session_maker, user_name)
    if latest is None:
        return None
    day: date = latest.astimezone(timezone.utc).date() - timedelta(days=overlap_days)
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


async def sync_workouts(
    client: MapMyRideClient,
    session_maker: async_sessionmaker[AsyncSession],
    user_name: str,
    begin: datetime,
    end: datetime,
) -> SyncResult:
    """
    Fetch workouts started in [begin, end], upsert each, then remove stored ones not fetched.

    Each upsert commits on its own. If the run fails part way, workouts already
    upserted stay stored; nothing is removed because remove_extra runs last.
    """
    logger.info("syncing for %s from %s to %s", user_name, begin.isoformat(), end.isoformat())
    workouts = await fetch_workouts(client, begin, end)
    logger.info("fetched %s workouts for %s", len(workouts), user_name)

    for w in workouts:
        await upsert_workout(session_maker, user_name, w)

    removed = await remove_extra(session_maker, user_name, begin, end, workouts)
    return SyncResult(synced=len(workouts), removed=removed)
