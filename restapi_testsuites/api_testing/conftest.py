"""
================================================================================
API Testing Pytest Configuration
================================================================================

Shared fixtures for REST API security scenarios.

Fixtures:
    - config: Configuration loader instance
    - credential_store: Base API path and role credentials (fatal if invalid)
    - token_manager: Credential-to-token exchange
    - response_holder: Fresh per test, so no response leaks between scenarios
    - http_client: Request executor bound to the test's response holder

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import pytest

from .framework import (
    ConfigLoader,
    ConfigurationError,
    CredentialStore,
    HttpClient,
    ResponseHolder,
    TokenManager,
    init_logger,
)


# =============================================================================
# Session-Scoped Fixtures (Shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    """
    Provide configuration loader instance.

    Session-scoped to ensure configuration is loaded only once.
    """
    try:
        loader = ConfigLoader()
    except ConfigurationError as e:
        pytest.exit(f"Configuration error: {e}", returncode=pytest.ExitCode.USAGE_ERROR)
    init_logger(loader)
    return loader


@pytest.fixture(scope="session")
def credential_store(config: ConfigLoader) -> CredentialStore:
    """
    Load credentials once per session.

    A missing key aborts the whole run before any scenario executes.
    """
    try:
        return CredentialStore.load(config)
    except ConfigurationError as e:
        pytest.exit(f"Configuration error: {e}", returncode=pytest.ExitCode.USAGE_ERROR)


@pytest.fixture(scope="session")
def token_manager(config: ConfigLoader, credential_store: CredentialStore) -> TokenManager:
    return TokenManager(
        credential_store,
        timeout=float(config.get("restapi.timeout", 30.0)),
    )


# =============================================================================
# Function-Scoped Fixtures (Fresh for each test)
# =============================================================================

@pytest.fixture
def response_holder() -> ResponseHolder:
    return ResponseHolder()


@pytest.fixture
def http_client(config: ConfigLoader, response_holder: ResponseHolder) -> HttpClient:
    """
    Provide the request executor for a scenario.

    Usage:
        def test_example(http_client, response_holder):
            http_client.get_without_token(url)
            assert response_holder.status_code == 401
    """
    return HttpClient.from_config(config, response_holder)


# =============================================================================
# Allure Reporting Hooks
# =============================================================================

def pytest_exception_interact(node, call, report):
    """Attach additional info on test failure."""
    import allure

    if report.failed:
        allure.attach(
            str(call.excinfo.value),
            name="Error Details",
            attachment_type=allure.attachment_type.TEXT
        )
