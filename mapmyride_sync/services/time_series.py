"""Decode the time_series block of a workout detail response into typed samples.

Each series is a JSON array of [elapsed_seconds, value] pairs. Elapsed seconds
are fractional and kept to whole milliseconds (truncated).
"""
from datetime import timedelta
from typing import Any

from mapmyride_sync.services.errors import ResponseDecodeError
from mapmyride_sync.schemas.workout import WorkoutDistance, WorkoutPosition, WorkoutSpeed, WorkoutStep

SERIES_NAMES = ("distance", "position", "speed", "steps")

Sample = WorkoutDistance | WorkoutPosition | WorkoutSpeed | WorkoutStep


def _number(v: Any, series: str, index: int) -> float:
    # bool is an int subclass; JSON true/false is not a measurement
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ResponseDecodeError(f"time series {series!r} point {index}: expected number, got {v!r}")
    return float(v)


def _elapsed(v: Any, series: str, index: int) -> timedelta:
    seconds = _number(v, series, index)
    return timedelta(milliseconds=int(seconds * 1000))


def _pairs(name: str, payload: Any) -> list[tuple[Any, Any]]:
    if not isinstance(payload, list):
        raise ResponseDecodeError(f"time series {name!r}: expected a list, got {type(payload).__name__}")
    out = []
    for i, pair in enumerate(payload):
        if not isinstance(pair, list) or len(pair) != 2:
            raise ResponseDecodeError(f"time series {name!r} point {i}: expected [elapsed, value], got {pair!r}")
        out.append((pair[0], pair[1]))
    return out


def _position(i: int, elapsed: Any, value: Any) -> WorkoutPosition:
    if not isinstance(value, dict):
        raise ResponseDecodeError(f"time series 'position' point {i}: expected object, got {value!r}")
    return WorkoutPosition(
        elapsed=_elapsed(elapsed, "position", i),
        elevation=_number(value.get("elevation", 0), "position", i),
        lat=_number(value.get("lat", 0), "position", i),
        lng=_number(value.get("lng", 0), "position", i),
    )


def decode_series(name: str, payload: Any) -> tuple[Sample, ...]:
    """Decode one named series. Order of points is kept as received."""
    pairs = _pairs(name, payload)
    if name == "distance":
        return tuple(
            WorkoutDistance(elapsed=_elapsed(e, name, i), total=_number(v, name, i))
            for i, (e, v) in enumerate(pairs)
        )
    if name == "speed":
        return tuple(
            WorkoutSpeed(elapsed=_elapsed(e, name, i), meters_per_second=_number(v, name, i))
            for i, (e, v) in enumerate(pairs)
        )
    if name == "steps":
        return tuple(
            WorkoutStep(elapsed=_elapsed(e, name, i), steps_in_period=_number(v, name, i))
            for i, (e, v) in enumerate(pairs)
        )
    if name == "position":
        return tuple(_position(i, e, v) for i, (e, v) in enumerate(pairs))
    raise ValueError(f"unknown time series {name!r}")


def decode_time_series(time_series: dict[str, Any] | None) -> dict[str, tuple[Sample, ...]]:
    """
    Decode every recognised series in a time_series mapping.
    Returns a dict keyed by series name; names MapMyRide adds that we do not know are skipped.
    """
    out: dict[str, tuple[Sample, ...]] = {}
    for name, payload in (time_series or {}).items():
        if name not in SERIES_NAMES:
            continue
        out[name] = decode_series(name, payload)
    return out
