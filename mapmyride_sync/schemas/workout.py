"""Workout values produced by a sync run. Immutable once built."""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict


# Elapsed offsets below are durations since the workout started. They can drift
# from wall clock time because pauses during the workout are not counted.


class WorkoutDistance(BaseModel):
    """Cumulative distance in meters at an elapsed offset."""

    model_config = ConfigDict(frozen=True)

    elapsed: timedelta
    total: float


class WorkoutPosition(BaseModel):
    """Position at an elapsed offset. Elevation is in meters."""

    model_config = ConfigDict(frozen=True)

    elapsed: timedelta
    elevation: float
    lat: float
    lng: float


class WorkoutSpeed(BaseModel):
    model_config = ConfigDict(frozen=True)

    elapsed: timedelta
    meters_per_second: float


class WorkoutStep(BaseModel):
    """Steps counted in the period ending at the elapsed offset (may be fractional)."""

    model_config = ConfigDict(frozen=True)

    elapsed: timedelta
    steps_in_period: float


class WorkoutSummary(BaseModel):
    """What the monthly dashboard listing tells us about a workout."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    kind: str
    kcal: int = 0
    distance: float = 0.0  # meters
    speed: float = 0.0  # meters per second
    duration: timedelta = timedelta(0)
    step_count: int = 0


class Workout(WorkoutSummary):
    """A fully enriched workout: listing summary plus detail timestamps, series and gain."""

    gain: int = 0  # meters
    started_at: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None

    distances: tuple[WorkoutDistance, ...] = ()
    positions: tuple[WorkoutPosition, ...] = ()
    speeds: tuple[WorkoutSpeed, ...] = ()
    steps: tuple[WorkoutStep, ...] = ()
