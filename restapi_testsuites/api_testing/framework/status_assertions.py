"""
Status checks over the ResponseHolder.

Read-only: they never touch the held response beyond reading its status.
"""

from __future__ import annotations

import allure

from .response_holder import ResponseHolder


HTTP_OK = 200
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404


def assert_status(holder: ResponseHolder, expected: int) -> None:
    """Assert that the held response has status `expected`."""
    actual = holder.status_code
    with allure.step(f"Verify {holder.api_path} responded with {expected}"):
        if actual != expected:
            raise AssertionError(
                f"Expected {expected} from {holder.api_path}, got {actual}"
            )


def assert_ok(holder: ResponseHolder) -> None:
    assert_status(holder, HTTP_OK)


def assert_unauthorized(holder: ResponseHolder) -> None:
    assert_status(holder, HTTP_UNAUTHORIZED)


def assert_forbidden(holder: ResponseHolder) -> None:
    assert_status(holder, HTTP_FORBIDDEN)


def assert_not_found(holder: ResponseHolder) -> None:
    assert_status(holder, HTTP_NOT_FOUND)


__all__ = [
    "HTTP_FORBIDDEN",
    "HTTP_NOT_FOUND",
    "HTTP_OK",
    "HTTP_UNAUTHORIZED",
    "assert_forbidden",
    "assert_not_found",
    "assert_ok",
    "assert_status",
    "assert_unauthorized",
]
