import asyncio
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

import httpx
import typer
from sqlalchemy.exc import SQLAlchemyError

from mapmyride_sync.config import database_url_for, settings
from mapmyride_sync.db.session import create_engine_for, create_session_maker, init_db
from mapmyride_sync.services.errors import MapMyRideError
from mapmyride_sync.services.http_client import close_http_client, init_http_client
from mapmyride_sync.services.mapmyride_client import MapMyRideClient
from mapmyride_sync.services.token_source import StaticTokenSource
from mapmyride_sync.services.workout_sync import default_begin, sync_workouts

app = typer.Typer(add_completion=False, help="Sync MapMyRide workouts into a local SQLite database.")
logger = logging.getLogger("mapmyride_sync")

DAY_FORMAT = "%Y-%m-%d"

AUTH_TOKEN_HELP = (
    "need AUTH_TOKEN, which can be acquired by logging in to https://www.mapmyride.com/ "
    "and grabbing the value of the auth-token cookie"
)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("mapmyride_sync").setLevel(logging.DEBUG if settings.debug else logging.INFO)


def parse_day(value: str, option: str) -> datetime:
    """YYYY-MM-DD as midnight UTC."""
    try:
        day = datetime.strptime(value.strip(), DAY_FORMAT)
    except ValueError:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint=option)
    return day.replace(tzinfo=timezone.utc)


async def _run(
    database_file: str,
    username: str,
    auth_token: str,
    begin: datetime | None,
    end: datetime,
) -> None:
    engine = create_engine_for(database_url_for(database_file), echo=settings.debug)
    try:
        await init_db(engine)
        session_maker = create_session_maker(engine)

        if begin is None:
            begin = await default_begin(session_maker, username, settings.resync_overlap_days)
            if begin is None:
                raise typer.BadParameter(
                    f"no workouts stored for {username!r} yet; pass a start day",
                    param_hint="--begin-day",
                )

        http = init_http_client(settings.mapmyride_base_url, timeout=settings.http_timeout_seconds)
        client = MapMyRideClient(http, StaticTokenSource(auth_token), user_agent=settings.user_agent)
        result = await sync_workouts(client, session_maker, username, begin, end)
        logger.info("synced %s workouts for %s, removed %s", result.synced, username, result.removed)
    finally:
        await close_http_client()
        await engine.dispose()


@app.command()
def sync(
    database_file: str = typer.Option(settings.database_file, "--database-file", help="Data file path."),
    username: str = typer.Option("", "--username", help="Username to attribute workouts to."),
    begin_day: Optional[str] = typer.Option(
        None,
        "--begin-day",
        help="Start of the sync window, YYYY-MM-DD, taken as midnight UTC. Defaults to 14 days before the latest stored workout.",
    ),
    end_day: Optional[str] = typer.Option(
        None,
        "--end-day",
        help="End of the sync window, YYYY-MM-DD, taken as midnight UTC at the start of that day. Defaults to now.",
    ),
) -> None:
    """Fetch workouts for a date range and make the database match them."""
    _configure_logging()
    if not username.strip():
        raise typer.BadParameter("need --username", param_hint="--username")
    if not settings.auth_token:
        typer.echo(AUTH_TOKEN_HELP, err=True)
        raise typer.Exit(code=2)

    begin = parse_day(begin_day, "--begin-day") if begin_day else None
    end = parse_day(end_day, "--end-day") if end_day else datetime.now(timezone.utc)

    try:
        asyncio.run(_run(database_file, username.strip(), settings.auth_token, begin, end))
    except (MapMyRideError, httpx.HTTPError, SQLAlchemyError) as e:
        logger.error("sync failed: %s", e)
        raise typer.Exit(code=1)
