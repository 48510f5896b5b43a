"""Fill a dashboard summary with detail timestamps, time series and elevation gain."""

import asyncio
import logging
from datetime import datetime, timezone

from mapmyride_sync.schemas.mapmyride import WorkoutDetailResponse
from mapmyride_sync.schemas.workout import Workout, WorkoutSummary
from mapmyride_sync.services.gain_parser import parse_gain
from mapmyride_sync.services.mapmyride_client import MapMyRideClient
from mapmyride_sync.services.time_series import decode_time_series

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def _fetch_detail(client: MapMyRideClient, workout_id: int) -> tuple[WorkoutDetailResponse, dict]:
    detail = await client.get_workout_detail(workout_id)
    # Decoded inside the task so a malformed series fails the whole enrichment
    return detail, decode_time_series(detail.time_series)


async def _fetch_gain(client: MapMyRideClient, workout_id: int) -> int:
    html = await client.get_workout_page(workout_id)
    return parse_gain(html, workout_id)


async def enrich_workout(client: MapMyRideClient, summary: WorkoutSummary) -> Workout:
    """
    Fetch detail JSON and workout page concurrently and merge them with the summary.
    If either fetch fails the other is cancelled and the first error is raised as-is.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            detail_task = tg.create_task(_fetch_detail(client, summary.id))
            gain_task = tg.create_task(_fetch_gain(client, summary.id))
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None

    detail, series = detail_task.result()
    gain = gain_task.result()
    logger.debug(
        "Enriched workout id=%s started=%s gain=%s series=%s",
        summary.id,
        detail.start_datetime.isoformat(),
        gain,
        sorted(series),
    )
    return Workout(
        **summary.model_dump(),
        gain=gain,
        started_at=_as_utc(detail.start_datetime),
        created_at=_as_utc(detail.created_datetime),
        updated_at=_as_utc(detail.updated_datetime),
        distances=series.get("distance", ()),
        positions=series.get("position", ()),
        speeds=series.get("speed", ()),
        steps=series.get("steps", ()),
    )
