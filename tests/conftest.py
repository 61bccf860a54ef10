from __future__ import annotations

import json
import os
from typing import Any, Callable

import httpx
import pytest

from acp_bridge.config import Settings


class StaticResolver:
    def __init__(self, api_url: str = "", developer_email: str = "") -> None:
        self.api_url = api_url
        self.developer_email = developer_email

    def get_api_url(self) -> str:
        return self.api_url

    def get_developer_email(self) -> str:
        return self.developer_email

    def is_demo_mode(self) -> bool:
        return False


class RecordingTransport(httpx.MockTransport):
    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def resolver() -> StaticResolver:
    return StaticResolver("https://registry.test/api", "dev@acme.test")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_url="https://registry.test/api",
        developer_email="dev@acme.test",
        demo_mode=False,
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ("ASTRASYNC_API_URL", "DEVELOPER_EMAIL", "DEMO_MODE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ACP_BRIDGE_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setattr("acp_bridge.config.load_dotenv", lambda: False)


@pytest.fixture(scope="session")
def live_api_url() -> str:
    api_url = os.getenv("ASTRASYNC_API_URL")
    if not api_url:
        pytest.skip("ASTRASYNC_API_URL not set")
    return api_url
