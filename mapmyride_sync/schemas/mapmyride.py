"""Pydantic schemas for raw MapMyRide responses (dashboard listing and workout detail)."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field


def _optional_count(value: Any) -> int | None:
    """
    Dashboard renders a missing count as "" and a present one as a number.
    Anything that is not a whole number is treated as missing rather than failing the listing.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


OptionalCount = Annotated[int | None, BeforeValidator(_optional_count)]


class DashboardWorkout(BaseModel):
    """One entry of the monthly dashboard listing."""

    name: str = ""
    date: str  # MM/DD/YYYY
    activity_short_name: str = ""
    distance: float = 0.0  # kilometers
    energy: int | None = None  # kcal
    speed: float = 0.0
    steps: OptionalCount = None
    time: OptionalCount = None  # seconds
    view_url: str


class DashboardWorkoutData(BaseModel):
    # Keyed by a date string; entries can belong to the neighbouring month
    workouts: dict[str, list[DashboardWorkout]] = Field(default_factory=dict)


class DashboardResponse(BaseModel):
    workout_data: DashboardWorkoutData = Field(default_factory=DashboardWorkoutData)


class WorkoutDetailResponse(BaseModel):
    """Workout detail with field_set=time_series."""

    created_datetime: datetime | None = None
    start_datetime: datetime
    updated_datetime: datetime | None = None
    # Series payloads are loosely typed; decoded by services.time_series
    time_series: dict[str, Any] | None = None
