"""
================================================================================
Suite Pytest Configuration
================================================================================

Registers the project-wide markers and tags collected tests by directory.

================================================================================
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "unit: Framework unit tests"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end scenarios against the (stub or live) API"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "api: API-specific tests"
    )
    config.addinivalue_line(
        "markers", "auth: Tests related to authentication"
    )


def pytest_collection_modifyitems(config, items):
    """Tag tests by the directory they live in."""
    for item in items:
        parts = Path(str(item.fspath)).parts
        if "api_testing" in parts:
            item.add_marker(pytest.mark.api)
        if "unit" in parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "REST API Security Test Harness",
        "=" * 60,
        "",
    ]
