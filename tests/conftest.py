from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from envsender.client import DeliveryClient
from envsender.config import SenderConfig

ENV_OVERRIDE_NAMES = (
    "ENVSENDER_BACKEND_URL",
    "ENVSENDER_AUTH_TOKEN",
    "ENVSENDER_TIMEOUT",
    "ENVSENDER_TLS_VERIFY",
    "ENVSENDER_LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ENV_OVERRIDE_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("envsender.config.DEFAULT_CONFIG_PATH", tmp_path / "no-such-dir" / "config.toml")


@pytest.fixture()
def config() -> SenderConfig:
    return SenderConfig(backend_url="https://backend.test/api/env", auth_token="test-token", timeout_seconds=5)


class RecordingBackend:
    """Answers every request with a fixed response and keeps what it received."""

    def __init__(self, status_code: int = 200, text: str = "ok") -> None:
        self.status_code = status_code
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.text)

    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture()
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture()
def make_client(config: SenderConfig) -> Callable[..., DeliveryClient]:
    created: list[DeliveryClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], cfg: SenderConfig | None = None) -> DeliveryClient:
        client = DeliveryClient(cfg or config, transport=httpx.MockTransport(handler))
        created.append(client)
        return client

    yield _make
    for client in created:
        client.close()
