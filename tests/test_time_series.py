"""Tests for decoding workout time series."""

from datetime import timedelta

import pytest

from mapmyride_sync.schemas.workout import WorkoutDistance, WorkoutPosition, WorkoutSpeed, WorkoutStep
from mapmyride_sync.services.errors import ResponseDecodeError
from mapmyride_sync.services.time_series import decode_series, decode_time_series


def test_decode_distance():
    got = decode_series("distance", [[1.024, 5.12], [8.096, 6.12]])
    assert got == (
        WorkoutDistance(elapsed=timedelta(milliseconds=1024), total=5.12),
        WorkoutDistance(elapsed=timedelta(milliseconds=8096), total=6.12),
    )


def test_decode_speed_accepts_integers():
    got = decode_series("speed", [[0, 5], [2, 7]])
    assert got == (
        WorkoutSpeed(elapsed=timedelta(0), meters_per_second=5.0),
        WorkoutSpeed(elapsed=timedelta(seconds=2), meters_per_second=7.0),
    )


def test_decode_steps_fractional():
    got = decode_series("steps", [[1.5, 2.25]])
    assert got == (WorkoutStep(elapsed=timedelta(milliseconds=1500), steps_in_period=2.25),)


def test_decode_position():
    got = decode_series("position", [[16.384, {"elevation": 6, "lat": 44.999997, "lng": -75.12343, "extra": 1}]])
    assert got == (
        WorkoutPosition(elapsed=timedelta(milliseconds=16384), elevation=6.0, lat=44.999997, lng=-75.12343),
    )


def test_decode_position_missing_keys_default_to_zero():
    (p,) = decode_series("position", [[1, {"lat": 1.5}]])
    assert p.elevation == 0.0
    assert p.lat == 1.5
    assert p.lng == 0.0


def test_elapsed_truncated_to_milliseconds():
    (d,) = decode_series("distance", [[1.0239, 1.0]])
    assert d.elapsed == timedelta(milliseconds=1023)


def test_order_and_duplicates_preserved():
    got = decode_series("speed", [[5, 1], [2, 2], [2, 3]])
    assert [s.elapsed.total_seconds() for s in got] == [5, 2, 2]
    assert [s.meters_per_second for s in got] == [1, 2, 3]


def test_empty_series():
    assert decode_series("distance", []) == ()


@pytest.mark.parametrize("name,payload", [
    ("distance", {"0": 1}),
    ("distance", [[1.0]]),
    ("speed", [[1.0, 2.0, 3.0]]),
    ("speed", [[1.0, "2.0"]]),
    ("steps", [[True, 2.0]]),
    ("steps", [[1.0, None]]),
    ("position", [[1.0, 2.0]]),
    ("position", [[1.0, {"lat": "north"}]]),
    ("position", [["1", {"lat": 1, "lng": 2, "elevation": 3}]]),
])
def test_shape_mismatch_is_decode_error(name, payload):
    with pytest.raises(ResponseDecodeError):
        decode_series(name, payload)


def test_decode_time_series_skips_unknown_names():
    got = decode_time_series({"heartrate": [[1, 140]], "speed": [[1, 2]], "power": "whatever"})
    assert set(got) == {"speed"}


def test_decode_time_series_missing_block():
    assert decode_time_series(None) == {}
