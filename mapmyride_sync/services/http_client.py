"""
The one httpx.AsyncClient a sync run talks to MapMyRide through.

cli._run opens it before fetching and closes it in its finally block, so the
dashboard, detail and page requests of every month bucket share one
connection pool. MapMyRideClient takes the client as an argument and never
opens its own.
"""
from __future__ import annotations

import httpx

_http_client: httpx.AsyncClient | None = None


def init_http_client(base_url: str, timeout: float = 30.0) -> httpx.AsyncClient:
    """Open the run's client for base_url; a second call returns the one already open."""
    global _http_client
    if _http_client is not None:
        return _http_client
    _http_client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
    return _http_client


async def close_http_client() -> None:
    """Close the run's client. No-op when none is open, so it is safe in a finally block."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
