"""
================================================================================
REST API Security Testing Framework
================================================================================

Components for exercising a token-protected REST API.

Modules:
    - config_loader: YAML configuration management
    - log_config: Loguru setup
    - credentials: Role credentials and base API path
    - token_manager: Credential-to-token exchange
    - http_client: Authenticated GET/PUT execution with Allure logging
    - response_holder: Most recent response storage
    - status_assertions: Status code checks over the held response

Author: Automation Team
License: MIT
================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError
from .credentials import Credentials, CredentialStore, Role
from .http_client import HttpClient, HttpClientError
from .log_config import init_logger
from .response_holder import NoResponseError, ResponseHolder
from .status_assertions import (
    assert_forbidden,
    assert_not_found,
    assert_ok,
    assert_status,
    assert_unauthorized,
)
from .token_manager import (
    AuthRequest,
    AuthResponse,
    TokenDeserializationError,
    TokenError,
    TokenManager,
)

__all__ = [
    "AuthRequest",
    "AuthResponse",
    "ConfigLoader",
    "ConfigurationError",
    "Credentials",
    "CredentialStore",
    "HttpClient",
    "HttpClientError",
    "NoResponseError",
    "ResponseHolder",
    "Role",
    "TokenDeserializationError",
    "TokenError",
    "TokenManager",
    "assert_forbidden",
    "assert_not_found",
    "assert_ok",
    "assert_status",
    "assert_unauthorized",
    "init_logger",
]
