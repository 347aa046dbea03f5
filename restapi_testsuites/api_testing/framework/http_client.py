"""
================================================================================
Authenticated HTTP Client with Allure Integration
================================================================================

Issues GET and PUT calls against fully-qualified API paths, optionally
attaching a bearer token, and records each response in a ResponseHolder.

    - One httpx.Client per call, closed before the call returns
    - No retry, no pooling, no status interpretation
    - Allure reporting with masked headers/body and a cURL command

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Union

import allure
import httpx
from allure_commons.types import AttachmentType
from loguru import logger

from .config_loader import ConfigLoader
from .response_holder import ResponseHolder


# Maximum response length to include in Allure reports
MAX_RESPONSE_LENGTH = 3000

DEFAULT_TIMEOUT = 30.0
JSON_CONTENT_TYPE = "application/json"

SENSITIVE_HEADERS = {"authorization", "x-api-key", "cookie", "set-cookie"}
SENSITIVE_FIELDS = ["password", "secret", "token", "api_key", "authorization", "session"]


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""
    pass


class HttpClient:
    """
    Request executor for authenticated and unauthenticated API calls.

    GET attaches `Authorization: Bearer <token>` only when a token is given.
    PUT does the same unless `legacy_null_bearer` is set, in which case a
    missing token is sent as the literal `Bearer null`.

    Usage:
        >>> holder = ResponseHolder()
        >>> client = HttpClient(holder)
        >>> client.get("http://localhost:8080/api/config/engine", token)
        >>> holder.response.status_code
        200
    """

    def __init__(
        self,
        holder: ResponseHolder,
        timeout: float = DEFAULT_TIMEOUT,
        legacy_null_bearer: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Args:
            holder: Receives every response together with its path.
            timeout: Client timeout in seconds, applied to each per-call client.
            legacy_null_bearer: Send `Bearer null` on unauthenticated PUTs.
            transport: Optional httpx transport, handed to each per-call client.
        """
        self.holder = holder
        self.timeout = timeout
        self.legacy_null_bearer = legacy_null_bearer
        self.transport = transport

    @classmethod
    def from_config(
        cls,
        config: ConfigLoader,
        holder: ResponseHolder,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "HttpClient":
        return cls(
            holder,
            timeout=float(config.get("restapi.timeout", DEFAULT_TIMEOUT)),
            legacy_null_bearer=bool(config.get("restapi.legacy_null_bearer", False)),
            transport=transport,
        )

    def get(self, path: str, token: Optional[str] = None) -> httpx.Response:
        """
        Execute GET request.

        Args:
            path: Fully-qualified URL; no base path is prepended.
            token: Bearer token, or None for an unauthenticated call.

        Raises:
            httpx.TransportError: When the request cannot be completed.
        """
        headers: Dict[str, str] = {}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        return self._execute("GET", path, headers)

    def update(
        self,
        path: str,
        token: Optional[str],
        payload: Union[str, Any],
    ) -> httpx.Response:
        """
        Execute PUT request with a JSON body.

        Args:
            path: Fully-qualified URL; no base path is prepended.
            token: Bearer token, or None for an unauthenticated call.
            payload: JSON text sent verbatim, or an object to JSON-encode.

        Raises:
            HttpClientError: When payload cannot be JSON-encoded.
            httpx.TransportError: When the request cannot be completed.
        """
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        elif self.legacy_null_bearer:
            headers["Authorization"] = "Bearer null"

        if isinstance(payload, str):
            content = payload
        else:
            try:
                content = json.dumps(payload)
            except (TypeError, ValueError) as e:
                raise HttpClientError(f"Payload is not JSON serializable: {e}") from e
        return self._execute("PUT", path, headers, content)

    def get_with_token(self, path: str, token: str) -> httpx.Response:
        return self.get(path, token)

    def get_without_token(self, path: str) -> httpx.Response:
        return self.get(path, None)

    def update_with_token(self, path: str, token: str, payload: Any) -> httpx.Response:
        return self.update(path, token, payload)

    def update_without_token(self, path: str, payload: Any) -> httpx.Response:
        return self.update(path, None, payload)

    def _execute(
        self,
        method: str,
        path: str,
        headers: Dict[str, str],
        content: Optional[str] = None,
    ) -> httpx.Response:
        """Send one request on a fresh client and record the response."""
        # A failed call must not leave the previous response readable
        self.holder.clear()
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.request(method, path, headers=headers, content=content)

        logger.debug(f"{method} {path} -> {response.status_code}")
        self.holder.store(path, response)
        self._log_to_allure(method, path, headers, content, response)
        return response

    def _log_to_allure(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        content: Optional[str],
        response: httpx.Response,
    ) -> None:
        """
        Log HTTP request/response to Allure report.

        Attaches:
            - Request URL
            - Request headers (masked)
            - Request body (masked, if present)
            - cURL command for reproduction
            - Response status
            - Response body (truncated if too long)
        """
        status_mark = "PASS" if response.status_code < 400 else "FAIL"
        step_title = f"[{status_mark}] {method} {url} -> {response.status_code}"

        with allure.step(step_title):
            allure.attach(
                url,
                name="Request URL",
                attachment_type=AttachmentType.TEXT
            )

            safe_headers = self._redact_headers(headers)
            if safe_headers:
                allure.attach(
                    json.dumps(safe_headers, ensure_ascii=False, indent=2),
                    name="Request Headers",
                    attachment_type=AttachmentType.JSON
                )

            safe_body = self._redact_body(self._parse_body(content))
            if safe_body:
                allure.attach(
                    safe_body if isinstance(safe_body, str)
                    else json.dumps(safe_body, ensure_ascii=False, indent=2),
                    name="Request Body",
                    attachment_type=AttachmentType.JSON
                )

            curl_cmd = self._build_curl(method, url, safe_headers, safe_body)
            allure.attach(
                curl_cmd,
                name="cURL Command",
                attachment_type=AttachmentType.TEXT
            )

            allure.attach(
                f"{status_mark} {response.status_code}",
                name="Response Status",
                attachment_type=AttachmentType.TEXT
            )

            try:
                response_content = json.dumps(
                    response.json(), ensure_ascii=False, indent=2
                )
            except (json.JSONDecodeError, ValueError):
                response_content = response.text or "<empty>"

            if len(response_content) > MAX_RESPONSE_LENGTH:
                response_content = (
                    f"{response_content[:MAX_RESPONSE_LENGTH]}\n\n"
                    f"... [Truncated, full length: {len(response_content)} chars] ..."
                )

            allure.attach(
                response_content,
                name="Response Body",
                attachment_type=AttachmentType.JSON
            )

    @staticmethod
    def _parse_body(content: Optional[str]) -> Any:
        if not content:
            return None
        try:
            return json.loads(content)
        except (json.JSONDecodeError, ValueError):
            return content

    def _redact_headers(self, headers: Dict[str, Any]) -> Dict[str, Any]:
        """
        Mask sensitive header values before logging.
        """
        masked = {}
        for key, value in headers.items():
            if key.lower() in SENSITIVE_HEADERS:
                masked[key] = "***MASKED***"
            else:
                masked[key] = value
        return masked

    def _redact_body(self, payload: Any) -> Any:
        """
        Recursively mask sensitive fields in request bodies.
        """
        if isinstance(payload, dict):
            redacted = {}
            for key, value in payload.items():
                if any(field in key.lower() for field in SENSITIVE_FIELDS):
                    redacted[key] = "***MASKED***"
                else:
                    redacted[key] = self._redact_body(value)
            return redacted
        if isinstance(payload, list):
            return [self._redact_body(item) for item in payload]
        return payload

    def _build_curl(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any,
    ) -> str:
        """
        Build cURL command for request reproduction.

        Expects already-masked headers and body.
        """
        parts = [f"curl -X {method}"]

        for key, value in headers.items():
            parts.append(f"-H '{key}: {value}'")

        if body:
            body_json = body if isinstance(body, str) else json.dumps(body, ensure_ascii=False)
            parts.append(f"-d '{body_json}'")

        parts.append(f"'{url}'")

        return " \\\n  ".join(parts)


__all__ = [
    "HttpClient",
    "HttpClientError",
]
