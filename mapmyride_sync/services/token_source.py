"""Auth tokens for MapMyRide requests.

The service authenticates with the auth-token cookie of a logged-in browser
session. Callers only need something that can hand out the current token, so
a rotating implementation can be added later without touching them.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Token:
    token: str


class TokenSource(Protocol):
    def token(self) -> Token: ...


class StaticTokenSource:
    """TokenSource that always returns the same token."""

    def __init__(self, token: str):
        self._token = token

    def token(self) -> Token:
        return Token(token=self._token)
