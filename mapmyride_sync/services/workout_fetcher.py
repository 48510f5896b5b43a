"""
Fetch all workouts started within a time range.

MapMyRide only lists workouts per calendar month, so the range is split into
month buckets. Each listed workout is enriched (see workout_enricher) one at a
time; buckets are processed in order. Any error aborts the whole fetch.
"""
import logging
from datetime import date, datetime, timedelta, timezone

from mapmyride_sync.schemas.mapmyride import DashboardWorkout
from mapmyride_sync.schemas.workout import Workout, WorkoutSummary
from mapmyride_sync.services.errors import ResponseDecodeError, WorkoutIdError
from mapmyride_sync.services.mapmyride_client import MapMyRideClient
from mapmyride_sync.services.workout_enricher import enrich_workout

logger = logging.getLogger(__name__)

DASHBOARD_DATE_FORMAT = "%m/%d/%Y"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def month_buckets(begin: datetime | date, end: datetime | date) -> list[date]:
    """First day of every month from begin's month through end's month, inclusive."""
    cur = date(begin.year, begin.month, 1)
    last = date(end.year, end.month, 1)
    out = [cur]
    while cur < last:
        cur = date(cur.year + 1, 1, 1) if cur.month == 12 else date(cur.year, cur.month + 1, 1)
        out.append(cur)
    return out


def parse_workout_id(view_url: str) -> int:
    """Workout id from a dashboard view_url such as /workout/1234567."""
    parts = view_url.split("/")
    try:
        return int(parts[2])
    except (IndexError, ValueError) as e:
        raise WorkoutIdError(f"converting {view_url!r} to id: {e}") from e


def _parse_dashboard_date(raw: str) -> date:
    try:
        return datetime.strptime(raw, DASHBOARD_DATE_FORMAT).date()
    except ValueError as e:
        raise ResponseDecodeError(f"converting {raw!r} to date: {e}") from e


def _to_summary(entry: DashboardWorkout) -> WorkoutSummary:
    return WorkoutSummary(
        id=parse_workout_id(entry.view_url),
        name=entry.name,
        kind=entry.activity_short_name,
        kcal=entry.energy or 0,
        distance=entry.distance * 1000,  # dashboard reports kilometers
        speed=entry.speed,
        duration=timedelta(seconds=entry.time or 0),
        step_count=entry.steps or 0,
    )


async def month_summaries(
    client: MapMyRideClient,
    year: int,
    month: int,
    begin_date: date,
    end_date: date,
) -> list[WorkoutSummary]:
    """
    Listed workouts for one month whose listing date lies in [begin_date, end_date].
    The dashboard may include workouts from the previous or next month; those are dropped.
    """
    resp = await client.get_dashboard(year, month)
    out: list[WorkoutSummary] = []
    for entries in resp.workout_data.workouts.values():
        for entry in entries:
            d = _parse_dashboard_date(entry.date)
            if (d.year, d.month) != (year, month):
                continue
            if d < begin_date or d > end_date:
                continue
            out.append(_to_summary(entry))
    logger.debug("MapMyRide dashboard %04d-%02d: %s workouts in range", year, month, len(out))
    return out


async def fetch_workouts(client: MapMyRideClient, begin: datetime, end: datetime) -> list[Workout]:
    """
    Workouts whose started_at lies in [begin, end], sorted by started_at.
    Naive datetimes are taken as UTC.
    """
    begin, end = _as_utc(begin), _as_utc(end)
    # Listing dates are coarse; this pre-filter only saves detail requests.
    begin_date, end_date = begin.date(), end.date()

    workouts: list[Workout] = []
    for m in month_buckets(begin, end):
        for summary in await month_summaries(client, m.year, m.month, begin_date, end_date):
            wk = await enrich_workout(client, summary)
            # started_at is only known after enrichment; this is the exact range check
            if wk.started_at < begin or wk.started_at > end:
                continue
            workouts.append(wk)
    workouts.sort(key=lambda w: w.started_at)
    return workouts
