"""
================================================================================
Credential Store
================================================================================

Holds the two fixed role credentials and the base API path, loaded once from
configuration before any scenario runs.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping

from loguru import logger

from .config_loader import ConfigLoader, ConfigurationError


BASE_URI_KEY = "restapi.base_uri"
MASK = "***MASKED***"


class Role(Enum):
    """The two identities a scenario can authenticate as."""
    USER = "user"
    ADMIN = "admin"

    @property
    def username_key(self) -> str:
        return f"restapi.{self.value}.username"

    @property
    def password_key(self) -> str:
        return f"restapi.{self.value}.password"


@dataclass(frozen=True)
class Credentials:
    """Username/password pair for a single role."""
    role: Role
    username: str
    password: str = field(repr=False)


class CredentialStore:
    """
    Read-only store of role credentials and the base API path.

    Build it with `CredentialStore.load(config)`; it is never mutated
    afterwards.

    Usage:
        >>> store = CredentialStore.load(ConfigLoader())
        >>> store.base_api_path
        'http://localhost:8080/api'
        >>> store.credentials_for(Role.ADMIN).username
        'admin'
    """

    def __init__(
        self,
        base_api_path: str,
        credentials: Mapping[Role, Credentials],
    ) -> None:
        missing = [role.name for role in Role if role not in credentials]
        if missing:
            raise ConfigurationError(
                f"Credentials missing for role(s): {', '.join(missing)}"
            )
        self._base_api_path = base_api_path.rstrip("/")
        self._credentials: Mapping[Role, Credentials] = MappingProxyType(
            {role: credentials[role] for role in Role}
        )

    @classmethod
    def load(cls, config: ConfigLoader) -> "CredentialStore":
        """
        Load base path and credentials from configuration.

        Raises:
            ConfigurationError: If any required key is missing or empty.
        """
        required = [BASE_URI_KEY]
        for role in Role:
            required.extend([role.username_key, role.password_key])

        values: Dict[str, str] = {}
        missing = []
        for key in required:
            value = config.get(key)
            if value is None or str(value) == "":
                missing.append(key)
            else:
                values[key] = str(value)

        if missing:
            raise ConfigurationError(
                f"Missing required configuration key(s): {', '.join(missing)}"
            )

        base_api_path = values[BASE_URI_KEY]
        logger.info(f"[CONFIG] Base API path: {base_api_path}")

        credentials = {}
        for role in Role:
            username = values[role.username_key]
            logger.info(f"[CONFIG] {role.name.capitalize()} username: {username}")
            logger.info(f"[CONFIG] {role.name.capitalize()} password: {MASK}")
            credentials[role] = Credentials(
                role=role,
                username=username,
                password=values[role.password_key],
            )

        return cls(base_api_path, credentials)

    @property
    def base_api_path(self) -> str:
        return self._base_api_path

    def credentials_for(self, role: Role) -> Credentials:
        return self._credentials[role]


__all__ = [
    "Credentials",
    "CredentialStore",
    "Role",
]
