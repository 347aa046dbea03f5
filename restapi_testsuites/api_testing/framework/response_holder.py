"""
Single-slot storage for the most recent API response and the path it came from.

Reading before anything has been stored raises `NoResponseError`; a holder
never hands out data from an earlier scenario.
"""

from __future__ import annotations

from typing import Optional

import httpx


class NoResponseError(Exception):
    """Raised when the holder is read before any request has been made."""
    pass


class ResponseHolder:
    """
    Holds the latest response. Not thread-safe: one request is in flight
    and inspected at a time.
    """

    def __init__(self) -> None:
        self._api_path: Optional[str] = None
        self._response: Optional[httpx.Response] = None

    @property
    def has_response(self) -> bool:
        return self._response is not None

    @property
    def response(self) -> httpx.Response:
        if self._response is None:
            raise NoResponseError("No API call has been made yet")
        return self._response

    @property
    def api_path(self) -> str:
        if self._api_path is None:
            raise NoResponseError("No API call has been made yet")
        return self._api_path

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def store(self, api_path: str, response: httpx.Response) -> None:
        """Replace the held path and response."""
        self._api_path = api_path
        self._response = response

    def clear(self) -> None:
        self._api_path = None
        self._response = None


__all__ = [
    "NoResponseError",
    "ResponseHolder",
]
