"""
MapMyRide web client: monthly dashboard listing, workout detail JSON and the
rendered workout page. Every request goes through _get() so auth and status
handling are the same everywhere.
"""
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from mapmyride_sync.config import DEFAULT_USER_AGENT
from mapmyride_sync.schemas.mapmyride import DashboardResponse, WorkoutDetailResponse
from mapmyride_sync.services.errors import ResponseDecodeError, ResponseStatusError
from mapmyride_sync.services.token_source import TokenSource

logger = logging.getLogger(__name__)


def _log_response_error(url: str, response: httpx.Response) -> None:
    """Log HTTP error without sensitive data."""
    body = (response.text or "")[:500]
    logger.warning("MapMyRide GET %s -> %s body=%s", url, response.status_code, body)


class MapMyRideClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        token_source: TokenSource,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        # http carries the base URL (see services.http_client); tests hand in a MockTransport client
        self.http = http
        self.token_source = token_source
        self.user_agent = user_agent

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        tok = self.token_source.token()
        r = await self.http.get(
            path,
            params=params,
            headers={
                "user-agent": self.user_agent,
                "cookie": f"auth-token={tok.token}",
            },
        )
        if r.status_code != 200:
            _log_response_error(path, r)
            raise ResponseStatusError(path, r.status_code)
        return r

    @staticmethod
    def _json(r: httpx.Response, path: str) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise ResponseDecodeError(f"GET {path}: invalid JSON: {e}") from e

    async def get_dashboard(self, year: int, month: int) -> DashboardResponse:
        """GET the workout listing MapMyRide shows for a calendar month."""
        path = "/workouts/dashboard.json"
        r = await self._get(path, params={"year": str(year), "month": str(month)})
        data = self._json(r, path)
        try:
            return DashboardResponse.model_validate(data)
        except ValidationError as e:
            raise ResponseDecodeError(f"GET {path} year={year} month={month}: {e}") from e

    async def get_workout_detail(self, workout_id: int) -> WorkoutDetailResponse:
        """GET timestamps and time series for one workout."""
        path = f"/vxproxy/v7.0/workout/{workout_id}/"
        r = await self._get(path, params={"field_set": "time_series"})
        data = self._json(r, path)
        try:
            return WorkoutDetailResponse.model_validate(data)
        except ValidationError as e:
            raise ResponseDecodeError(f"GET {path}: {e}") from e

    async def get_workout_page(self, workout_id: int) -> str:
        """GET the rendered workout page (HTML); elevation gain is only available there."""
        r = await self._get(f"/workout/{workout_id}")
        return r.text
