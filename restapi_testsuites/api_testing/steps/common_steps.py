"""
================================================================================
Common Step Definitions
================================================================================

Gherkin steps shared by every REST API security feature.

Paths in feature files are relative to the configured base API path; they are
joined here, before the HttpClient (which never prefixes) is called.

Required fixtures (see api_testing/conftest.py):
    - credential_store, token_manager, http_client, response_holder

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from loguru import logger
from pytest_bdd import given, parsers, then, when

from ..framework import (
    CredentialStore,
    HttpClient,
    ResponseHolder,
    Role,
    TokenManager,
    assert_forbidden,
    assert_not_found,
    assert_ok,
    assert_unauthorized,
)


def api_url(store: CredentialStore, path: str) -> str:
    """Join a feature-file path onto the base API path."""
    return f"{store.base_api_path}/{path.lstrip('/')}"


# =============================================================================
# Given
# =============================================================================

@given("the REST API is running")
def rest_api_running(credential_store: CredentialStore):
    logger.info(f"Target API: {credential_store.base_api_path}")


# =============================================================================
# When - GET
# =============================================================================

@when(parsers.parse('a user calls the API at "{path}" without a token'))
def call_api_without_token(
    http_client: HttpClient,
    credential_store: CredentialStore,
    path: str,
):
    http_client.get_without_token(api_url(credential_store, path))


@when(parsers.parse('a user calls the API at "{path}" with a user token'))
def call_api_with_user_token(
    http_client: HttpClient,
    token_manager: TokenManager,
    credential_store: CredentialStore,
    path: str,
):
    token = token_manager.get_token(Role.USER)
    http_client.get_with_token(api_url(credential_store, path), token)


@when(parsers.parse('an administrator calls the API at "{path}" with an admin token'))
def call_api_with_admin_token(
    http_client: HttpClient,
    token_manager: TokenManager,
    credential_store: CredentialStore,
    path: str,
):
    token = token_manager.get_token(Role.ADMIN)
    http_client.get_with_token(api_url(credential_store, path), token)


# =============================================================================
# When - PUT
# =============================================================================

@when(parsers.parse(
    "a user updates the API at \"{path}\" without a token with payload '{payload}'"
))
def update_api_without_token(
    http_client: HttpClient,
    credential_store: CredentialStore,
    path: str,
    payload: str,
):
    http_client.update_without_token(api_url(credential_store, path), payload)


@when(parsers.parse(
    "a user updates the API at \"{path}\" with a user token with payload '{payload}'"
))
def update_api_with_user_token(
    http_client: HttpClient,
    token_manager: TokenManager,
    credential_store: CredentialStore,
    path: str,
    payload: str,
):
    token = token_manager.get_token(Role.USER)
    http_client.update_with_token(api_url(credential_store, path), token, payload)


@when(parsers.parse(
    "an administrator updates the API at \"{path}\" with an admin token with payload '{payload}'"
))
def update_api_with_admin_token(
    http_client: HttpClient,
    token_manager: TokenManager,
    credential_store: CredentialStore,
    path: str,
    payload: str,
):
    token = token_manager.get_token(Role.ADMIN)
    http_client.update_with_token(api_url(credential_store, path), token, payload)


# =============================================================================
# Then
# =============================================================================

@then("the bot will respond with 200 OK")
def bot_responds_with_200_ok(response_holder: ResponseHolder):
    assert_ok(response_holder)


@then("the bot will respond with 401 Unauthorized")
def bot_responds_with_401_unauthorized(response_holder: ResponseHolder):
    assert_unauthorized(response_holder)


@then("the bot will respond with 403 Forbidden")
def bot_responds_with_403_forbidden(response_holder: ResponseHolder):
    assert_forbidden(response_holder)


@then("the bot will respond with 404 Not Found")
def bot_responds_with_404_not_found(response_holder: ResponseHolder):
    assert_not_found(response_holder)
