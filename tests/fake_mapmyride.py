"""In-memory MapMyRide serving the dashboard, detail and workout page endpoints."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

import httpx

from mapmyride_sync.schemas.workout import (
    Workout,
    WorkoutDistance,
    WorkoutPosition,
    WorkoutSpeed,
    WorkoutStep,
)
from mapmyride_sync.services.mapmyride_client import MapMyRideClient
from mapmyride_sync.services.token_source import StaticTokenSource

BASE_URL = "https://mapmyride.test"
TOKEN = "secret"

DETAIL_PATH = re.compile(r"^/vxproxy/v7\.0/workout/(\d+)/$")
PAGE_PATH = re.compile(r"^/workout/(\d+)$")

GAIN_TABLE = """
<table id="workout_elevation_data" class="mmf_workout_table">
    <thead>
        <tr>
            <th colspan="2" scope="col">Elevation</th>
        </tr>
    </thead>
    <tbody>
        <tr>
            <th scope="row">{label}</th>
            <td>
                <span class="notranslate">   {value}      <!-- ensure space trimming --></span>
                <span class="unit">m</span>
            </td>
        </tr>
        <tr>
            <th scope="row">Start</th>
            <td>
                <span class="notranslate">61</span>
                <span class="unit">m</span>
            </td>
        </tr>
    </tbody>
</table>
"""


def gain_page(value: str, label: str = "Gain") -> str:
    return f"<html><body>{GAIN_TABLE.format(label=label, value=value)}</body></html>"


def _elapsed(seconds: float) -> timedelta:
    return timedelta(milliseconds=int(seconds * 1000))


@dataclass
class FakeWorkout:
    id: int
    name: str
    kind: str
    started_at: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None
    kcal: int = 0
    distance: float = 0.0  # meters
    speed: float = 0.0
    step_count: int = 0
    duration_s: int = 0
    gain: int = 0
    # Overrides what the workout page shows in the gain cell
    gain_value: str | None = None
    gain_label: str = "Gain"
    view_url: str | None = None
    # Raw time_series block exactly as the detail endpoint returns it
    time_series: dict[str, Any] = field(default_factory=dict)
    # Raw dashboard fields replacing the ones derived above
    dashboard_overrides: dict[str, Any] = field(default_factory=dict)

    def dashboard_entry(self) -> dict[str, Any]:
        entry = {
            "activity_short_name": self.kind,
            "date": self.started_at.strftime("%m/%d/%Y"),
            "distance": self.distance / 1000.0,  # kilometers
            "energy": self.kcal,
            "name": self.name,
            "speed": self.speed,
            "steps": self.step_count if self.step_count > 0 else "",
            "time": self.duration_s if self.duration_s > 0 else "",
            "view_url": self.view_url or f"/workout/{self.id}",
        }
        entry.update(self.dashboard_overrides)
        return entry

    def to_workout(self) -> Workout:
        ts = self.time_series
        return Workout(
            id=self.id,
            name=self.name,
            kind=self.kind,
            kcal=self.kcal,
            distance=self.distance,
            speed=self.speed,
            duration=timedelta(seconds=self.duration_s),
            step_count=self.step_count,
            gain=self.gain,
            started_at=self.started_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
            distances=tuple(WorkoutDistance(elapsed=_elapsed(e), total=v) for e, v in ts.get("distance", [])),
            positions=tuple(
                WorkoutPosition(elapsed=_elapsed(e), elevation=p["elevation"], lat=p["lat"], lng=p["lng"])
                for e, p in ts.get("position", [])
            ),
            speeds=tuple(WorkoutSpeed(elapsed=_elapsed(e), meters_per_second=v) for e, v in ts.get("speed", [])),
            steps=tuple(WorkoutStep(elapsed=_elapsed(e), steps_in_period=v) for e, v in ts.get("steps", [])),
        )


class FakeMapMyRide:
    def __init__(self, *workouts: FakeWorkout):
        self.workouts: dict[int, FakeWorkout] = {w.id: w for w in workouts}
        # Extra dashboard entries per (year, month), e.g. neighbouring-month leftovers
        self.extra_entries: dict[tuple[int, int], list[dict[str, Any]]] = {}
        # Path -> status code to return instead of the normal response
        self.failures: dict[str, int] = {}
        self.requests: list[httpx.Request] = []

    def add(self, w: FakeWorkout) -> None:
        self.workouts[w.id] = w

    def remove(self, workout_id: int) -> None:
        del self.workouts[workout_id]

    def requested_paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.headers.get("cookie") != f"auth-token={TOKEN}":
            return httpx.Response(401)
        if path in self.failures:
            return httpx.Response(self.failures[path], text="failure")

        if path == "/workouts/dashboard.json":
            return self._dashboard(request)
        m = DETAIL_PATH.match(path)
        if m:
            return self._detail(request, int(m.group(1)))
        m = PAGE_PATH.match(path)
        if m:
            return self._page(int(m.group(1)))
        return httpx.Response(404)

    def _dashboard(self, request: httpx.Request) -> httpx.Response:
        year = int(request.url.params["year"])
        month = int(request.url.params["month"])
        out: dict[str, list[dict[str, Any]]] = {}
        for w in self.workouts.values():
            if (w.started_at.year, w.started_at.month) == (year, month):
                out.setdefault(w.started_at.strftime("%Y-%m-%d"), []).append(w.dashboard_entry())
        for entry in self.extra_entries.get((year, month), []):
            out.setdefault("extra", []).append(entry)
        return httpx.Response(200, json={"workout_data": {"workouts": out}})

    def _detail(self, request: httpx.Request, workout_id: int) -> httpx.Response:
        if request.url.params.get("field_set") != "time_series":
            return httpx.Response(500)
        w = self.workouts.get(workout_id)
        if w is None:
            return httpx.Response(404)
        body: dict[str, Any] = {
            "created_datetime": w.created_at.isoformat() if w.created_at else None,
            "start_datetime": w.started_at.isoformat(),
            "updated_datetime": w.updated_at.isoformat() if w.updated_at else None,
            "time_series": w.time_series or None,
        }
        return httpx.Response(200, json=body)

    def _page(self, workout_id: int) -> httpx.Response:
        w = self.workouts.get(workout_id)
        if w is None:
            return httpx.Response(404)
        if w.gain == 0 and w.gain_value is None:
            return httpx.Response(200, text="<p>hello</p>")
        value = w.gain_value if w.gain_value is not None else str(w.gain)
        return httpx.Response(200, text=gain_page(value, w.gain_label))

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler), base_url=BASE_URL)

    def client(self, token: str = TOKEN) -> MapMyRideClient:
        return MapMyRideClient(self.http_client(), StaticTokenSource(token))
