from __future__ import annotations

from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from responses_proxy.app import create_app
from responses_proxy.config import Settings
from responses_proxy.schemas import PluginConfig
from responses_proxy.services import NetworkManager, UpstreamForwarder

UPSTREAM = "http://upstream.test/v1"


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        UPSTREAM_BASE_URL=UPSTREAM,
        UPSTREAM_API_KEY="test-key",
        UPSTREAM_API_KEY_HEADER="Authorization",
        UPSTREAM_HEALTH_CHECK_PATH="/models",
        PLUGINS=[PluginConfig(name="v1-responses", enabled=True)],
    )


@pytest.fixture()
def upstream_calls() -> List[httpx.Request]:
    return []


@pytest.fixture()
def make_client(settings, upstream_calls) -> Callable[..., TestClient]:
    """Build a TestClient whose upstream is the given httpx handler."""
    clients = []

    def _make(handler, app_settings: Settings = None) -> TestClient:
        def recording_handler(request: httpx.Request):
            upstream_calls.append(request)
            return handler(request)

        app = create_app(app_settings or settings, transport=httpx.MockTransport(recording_handler))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture()
def make_forwarder(settings, upstream_calls) -> Callable[..., UpstreamForwarder]:
    def _make(handler) -> UpstreamForwarder:
        def recording_handler(request: httpx.Request):
            upstream_calls.append(request)
            return handler(request)

        network_manager = NetworkManager(settings, transport=httpx.MockTransport(recording_handler))
        return UpstreamForwarder(settings, network_manager)

    return _make
