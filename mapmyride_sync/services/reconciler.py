"""
Store fetched workouts and drop stored ones MapMyRide no longer returns.

upsert_workout replaces a workout and all its samples in one transaction.
remove_extra runs separately after the upserts; it is how deletions on the
MapMyRide side (or a workout moving out of the range) reach the database.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Sequence

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from mapmyride_sync.models import StoredDistance, StoredPosition, StoredSpeed, StoredStep, StoredWorkout
from mapmyride_sync.schemas.workout import Workout, WorkoutDistance, WorkoutPosition, WorkoutSpeed, WorkoutStep

logger = logging.getLogger(__name__)

SAMPLE_MODELS = (StoredStep, StoredSpeed, StoredPosition, StoredDistance)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _elapsed_from_seconds(seconds: float) -> timedelta:
    # Stored as float seconds; offsets were fetched at millisecond precision
    return timedelta(milliseconds=round(seconds * 1000))


def _workout_row(user_name: str, w: Workout) -> dict:
    return {
        "id": w.id,
        "user_name": user_name,
        "name": w.name,
        "kind": w.kind,
        "kcal": w.kcal,
        "distance_m": w.distance,
        "speed_mps": w.speed,
        "duration_s": int(w.duration.total_seconds()),
        "step_count": w.step_count,
        "gain_m": w.gain,
        "started_at": w.started_at,
        "created_at": w.created_at,
        "updated_at": w.updated_at,
    }


async def _delete_workouts(session: AsyncSession, workout_ids: Sequence[int]) -> None:
    for model in SAMPLE_MODELS:
        await session.execute(delete(model).where(model.workout_id.in_(workout_ids)))
    await session.execute(delete(StoredWorkout).where(StoredWorkout.id.in_(workout_ids)))


async def upsert_workout(
    session_maker: async_sessionmaker[AsyncSession],
    user_name: str,
    w: Workout,
) -> None:
    """Replace the stored workout w.id (parent row and every sample) with w, atomically."""
    logger.info(
        "sync %s workout id=%s started %s named %r",
        user_name,
        w.id,
        w.started_at.isoformat(),
        w.name,
    )
    async with session_maker() as session, session.begin():
        await _delete_workouts(session, [w.id])
        await session.execute(insert(StoredWorkout), [_workout_row(user_name, w)])

        # Inserted in fetched order; the autoincrement row id keeps that order on read
        distances = [
            {"workout_id": w.id, "elapsed_seconds": d.elapsed.total_seconds(), "total_meters": d.total}
            for d in w.distances
        ]
        positions = [
            {
                "workout_id": w.id,
                "elapsed_seconds": p.elapsed.total_seconds(),
                "elevation": p.elevation,
                "lat": p.lat,
                "lng": p.lng,
            }
            for p in w.positions
        ]
        speeds = [
            {"workout_id": w.id, "elapsed_seconds": s.elapsed.total_seconds(), "meters_per_second": s.meters_per_second}
            for s in w.speeds
        ]
        steps = [
            {"workout_id": w.id, "elapsed_seconds": s.elapsed.total_seconds(), "steps": s.steps_in_period}
            for s in w.steps
        ]
        for model, rows in (
            (StoredDistance, distances),
            (StoredPosition, positions),
            (StoredSpeed, speeds),
            (StoredStep, steps),
        ):
            if rows:
                await session.execute(insert(model), rows)


async def remove_extra(
    session_maker: async_sessionmaker[AsyncSession],
    user_name: str,
    begin: datetime,
    end: datetime,
    workouts: Sequence[Workout],
) -> int:
    """
    Delete user_name's stored workouts started in [begin, end] that are not in workouts.
    Returns the number of workouts removed.
    """
    begin, end = _as_utc(begin), _as_utc(end)
    keep_ids = [w.id for w in workouts]
    async with session_maker() as session, session.begin():
        r = await session.execute(
            select(StoredWorkout.id).where(
                StoredWorkout.user_name == user_name,
                StoredWorkout.started_at >= begin,
                StoredWorkout.started_at <= end,
                StoredWorkout.id.not_in(keep_ids),
            )
        )
        extra_ids = list(r.scalars().all())
        if extra_ids:
            await _delete_workouts(session, extra_ids)

    logger.info(
        "remove_extra removed %s extra workouts for %s started between %s and %s and not ids %s",
        len(extra_ids),
        user_name,
        begin.isoformat(),
        end.isoformat(),
        keep_ids,
    )
    return len(extra_ids)


async def latest_workout_started_at(
    session_maker: async_sessionmaker[AsyncSession],
    user_name: str,
) -> datetime | None:
    """Start time of the user's most recent stored workout, or None if nothing is stored."""
    async with session_maker() as session:
        r = await session.execute(
            select(func.max(StoredWorkout.started_at)).where(StoredWorkout.user_name == user_name)
        )
        return r.scalar_one_or_none()


def _to_workout(row: StoredWorkout) -> Workout:
    return Workout(
        id=row.id,
        name=row.name,
        kind=row.kind,
        kcal=row.kcal,
        distance=row.distance_m,
        speed=row.speed_mps,
        duration=timedelta(seconds=row.duration_s),
        step_count=row.step_count,
        gain=row.gain_m,
        started_at=row.started_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
        distances=tuple(
            WorkoutDistance(elapsed=_elapsed_from_seconds(d.elapsed_seconds), total=d.total_meters)
            for d in row.distances
        ),
        positions=tuple(
            WorkoutPosition(
                elapsed=_elapsed_from_seconds(p.elapsed_seconds),
                elevation=p.elevation,
                lat=p.lat,
                lng=p.lng,
            )
            for p in row.positions
        ),
        speeds=tuple(
            WorkoutSpeed(elapsed=_elapsed_from_seconds(s.elapsed_seconds), meters_per_second=s.meters_per_second)
            for s in row.speeds
        ),
        steps=tuple(
            WorkoutStep(elapsed=_elapsed_from_seconds(s.elapsed_seconds), steps_in_period=s.steps)
            for s in row.steps
        ),
    )


async def load_workout(
    session_maker: async_sessionmaker[AsyncSession],
    workout_id: int,
) -> Workout | None:
    """Read a stored workout back with its samples in stored order."""
    async with session_maker() as session:
        r = await session.execute(
            select(StoredWorkout)
            .where(StoredWorkout.id == workout_id)
            .options(
                selectinload(StoredWorkout.distances),
                selectinload(StoredWorkout.positions),
                selectinload(StoredWorkout.speeds),
                selectinload(StoredWorkout.steps),
            )
        )
        row = r.scalar_one_or_none()
        return _to_workout(row) if row is not None else None


async def list_workout_ids(
    session_maker: async_sessionmaker[AsyncSession],
    user_name: str,
) -> list[int]:
    """Ids of the user's stored workouts, oldest start first."""
    async with session_maker() as session:
        r = await session.execute(
            select(StoredWorkout.id)
            .where(StoredWorkout.user_name == user_name)
            .order_by(StoredWorkout.started_at, StoredWorkout.id)
        )
        return list(r.scalars().all())
