"""Errors raised while talking to MapMyRide. None of them are retried: a sync run stops on the first one."""


class MapMyRideError(RuntimeError):
    pass


class ResponseStatusError(MapMyRideError):
    def __init__(self, url: str, status_code: int):
        super().__init__(f"GET {url} -> status {status_code}")
        self.url = url
        self.status_code = status_code


class ResponseDecodeError(MapMyRideError):
    """Response body did not have the expected shape."""


class GainScrapeError(MapMyRideError):
    """Workout page has an elevation table we do not recognise."""


class WorkoutIdError(MapMyRideError):
    """Dashboard entry's view_url does not carry a workout id."""
