"""
================================================================================
Scenario Test Configuration
================================================================================

By default the scenarios run against an in-process stub of the bot's REST API
(pytest-httpx intercepts every httpx client). Pass `--live-api` to run them
against the server named in config/restapi-config.yaml instead.

Stub behaviour:
    - POST {base}/token: issues a token for known credentials, 401 otherwise
    - Missing or unknown bearer token: 401
    - Unknown resource: 404
    - PUT by a non-admin: 403

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Optional

import httpx
import pytest
import yaml

from ..framework import ConfigLoader, init_logger


STUB_BASE_URI = "http://localhost:8080/api/v1"
STUB_BASE_PATH = "/api/v1"

STUB_USERS = {
    ("admin", "admin-password"): "admin-token",
    ("user", "user-password"): "user-token",
}
STUB_ROLES = {
    "admin-token": "admin",
    "user-token": "user",
}
STUB_RESOURCES = {
    "/config/engine": {"botId": "my-bitstamp-bot", "botName": "Bitstamp Bot"},
    "/config/emailalerts": {"enabled": False},
    "/runtime/status": {"status": "RUNNING"},
}


def _bearer_token(request: httpx.Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):]


def stub_bot_api(request: httpx.Request) -> httpx.Response:
    """Minimal JWT-protected bot API."""
    path = request.url.path
    if path.startswith(STUB_BASE_PATH):
        path = path[len(STUB_BASE_PATH):]

    if path == "/token" and request.method == "POST":
        credentials = json.loads(request.content)
        token = STUB_USERS.get((credentials.get("username"), credentials.get("password")))
        if token is None:
            return httpx.Response(401, json={"error": "Bad credentials"})
        return httpx.Response(200, json={"token": token})

    role = STUB_ROLES.get(_bearer_token(request))
    if role is None:
        return httpx.Response(401, json={"error": "Unauthorized"})

    if path not in STUB_RESOURCES:
        return httpx.Response(404, json={"error": "Not Found"})

    if request.method == "PUT":
        if role != "admin":
            return httpx.Response(403, json={"error": "Forbidden"})
        return httpx.Response(200, json=json.loads(request.content))

    return httpx.Response(200, json=STUB_RESOURCES[path])


@pytest.fixture(scope="session")
def live_api(request) -> bool:
    return bool(request.config.getoption("--live-api"))


@pytest.fixture(scope="session")
def config(live_api: bool, tmp_path_factory) -> ConfigLoader:
    """Point the harness at the stub unless running against a live API."""
    if live_api:
        loader = ConfigLoader()
    else:
        config_path = tmp_path_factory.mktemp("config") / "restapi-config.yaml"
        config_path.write_text(
            yaml.dump({
                "restapi": {
                    "base_uri": STUB_BASE_URI,
                    "admin": {"username": "admin", "password": "admin-password"},
                    "user": {"username": "user", "password": "user-password"},
                },
            }),
            encoding="utf-8",
        )
        loader = ConfigLoader(config_path=config_path)
    init_logger(loader)
    return loader


@pytest.fixture(autouse=True)
def bot_api(live_api: bool, request):
    """Install the stub API for each scenario unless running live."""
    if live_api:
        yield None
        return

    httpx_mock = request.getfixturevalue("httpx_mock")
    httpx_mock.add_callback(stub_bot_api, is_reusable=True, is_optional=True)
    yield httpx_mock
