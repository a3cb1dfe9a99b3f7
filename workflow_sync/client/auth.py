"""Credential acquisition seam.

The identity provider and its login/redirect flow live outside this package;
the view only asks for a token right before each request.
"""
from __future__ import annotations

from typing import Protocol


class LoginRequiredError(Exception):
    """No valid token can be obtained without sending the user through login."""


class TokenProvider(Protocol):
    async def get_token(self) -> str:
        """Return a bearer token valid for the next request."""
        ...


class StaticTokenProvider:
    """Hands out a fixed token; useful for scripts and tests."""

    def __init__(self, token: str | None) -> None:
        self._token = token

    async def get_token(self) -> str:
        if not self._token:
            raise LoginRequiredError("Login required")
        return self._token

    def sign_out(self) -> None:
        self._token = None
