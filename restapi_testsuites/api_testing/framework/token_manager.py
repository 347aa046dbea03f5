"""
================================================================================
Token Manager
================================================================================

Exchanges role credentials for a bearer token at the API's token endpoint.

    POST {base_api_path}/token
    {"username": "...", "password": "..."}  ->  {"token": "..."}

Every call opens its own HTTP client and closes it before returning. Tokens
are fetched fresh each time: there is no caching and no refresh. A non-2xx
status from the token endpoint is not an error here; the server's verdict
surfaces later, when the (missing or empty) token is used.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Optional

import httpx
from loguru import logger

from .credentials import CredentialStore, Role


TOKEN_ENDPOINT = "/token"
DEFAULT_CHARSET = "utf-8"
DEFAULT_TIMEOUT = 30.0


class TokenError(Exception):
    """Raised when token operations fail."""
    pass


class TokenDeserializationError(TokenError):
    """Raised when the token endpoint body cannot be read as an AuthResponse."""
    pass


@dataclass
class AuthRequest:
    """Login payload sent to the token endpoint."""
    username: str
    password: str = field(repr=False)

    def to_json(self) -> str:
        return json.dumps(asdict(self))


@dataclass
class AuthResponse:
    """Login result returned by the token endpoint."""
    token: Optional[str]

    @classmethod
    def from_json(cls, body: str, require_token: bool = True) -> "AuthResponse":
        """
        Parse a token endpoint body.

        Args:
            body: Decoded response body.
            require_token: When False, a missing `token` field yields None.

        Raises:
            TokenDeserializationError: If the body is not a JSON object, or
                lacks a `token` field while one is required.
        """
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, ValueError) as e:
            raise TokenDeserializationError(
                f"Token response is not valid JSON: {e}"
            ) from e

        if not isinstance(data, dict):
            raise TokenDeserializationError(
                f"Token response must be a JSON object, got {type(data).__name__}"
            )
        if "token" not in data and require_token:
            raise TokenDeserializationError(
                "Token response has no 'token' field"
            )

        return cls(token=data.get("token"))


class TokenManager:
    """
    Fetches bearer tokens for the USER and ADMIN roles.

    Usage:
        >>> store = CredentialStore.load(ConfigLoader())
        >>> tokens = TokenManager(store)
        >>> token = tokens.get_token(Role.ADMIN)
    """

    def __init__(
        self,
        store: CredentialStore,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Args:
            store: Source of the base API path and role credentials.
            timeout: Client timeout in seconds for the token call.
            transport: Optional httpx transport, handed to each per-call client.
        """
        self.store = store
        self.timeout = timeout
        self.transport = transport

    @property
    def token_url(self) -> str:
        return f"{self.store.base_api_path}{TOKEN_ENDPOINT}"

    def get_token(self, role: Role) -> Optional[str]:
        """
        Log in as `role` and return the token from the endpoint's response.

        Raises:
            httpx.TransportError: Connection refused, timeout, DNS failure.
            TokenDeserializationError: Malformed token response body.
        """
        credentials = self.store.credentials_for(role)
        auth_request = AuthRequest(
            username=credentials.username,
            password=credentials.password,
        )

        logger.debug(f"Requesting {role.name} token from {self.token_url}")

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.post(
                self.token_url,
                content=auth_request.to_json(),
                headers={"Content-Type": "application/json"},
            )
            body = self._decode_body(response)

        if not response.is_success:
            logger.warning(
                f"Token endpoint returned {response.status_code} for {role.name}; "
                f"passing the response through"
            )

        # Error replies pass through; the server rejects the missing token later
        return AuthResponse.from_json(body, require_token=response.is_success).token

    def get_user_token(self) -> Optional[str]:
        """Fetch a token for the USER role."""
        return self.get_token(Role.USER)

    def get_admin_token(self) -> Optional[str]:
        """Fetch a token for the ADMIN role."""
        return self.get_token(Role.ADMIN)

    def _decode_body(self, response: httpx.Response) -> str:
        """
        Decode the response body.

        The charset is taken from the Content-Encoding header when it names a
        text codec; UTF-8 otherwise.
        """
        content = response.content
        encoding = response.headers.get("Content-Encoding", "").strip()

        if encoding:
            try:
                return content.decode(encoding)
            except LookupError:
                logger.debug(
                    f"Content-Encoding '{encoding}' is not a charset, "
                    f"decoding as {DEFAULT_CHARSET}"
                )
            except UnicodeDecodeError as e:
                raise TokenDeserializationError(
                    f"Token response is not valid {encoding}: {e}"
                ) from e

        try:
            return content.decode(DEFAULT_CHARSET)
        except UnicodeDecodeError as e:
            raise TokenDeserializationError(
                f"Token response is not valid {DEFAULT_CHARSET}: {e}"
            ) from e


__all__ = [
    "AuthRequest",
    "AuthResponse",
    "TokenDeserializationError",
    "TokenError",
    "TokenManager",
]
