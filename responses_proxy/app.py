"""
Application factory
"""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from .config import Settings, get_settings
from .dependencies import register_exception_handlers
from .helpers import info_log
from .openai_api import router as proxy_router
from .plugins import PluginDispatcher, build_registry
from .services import HealthAggregator, NetworkManager, PassthroughProxy, UpstreamForwarder


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Wire the proxy together.

    Args:
        settings: configuration, defaults to the process-wide settings
        transport: optional httpx transport for every upstream call
    """
    settings = settings or get_settings()
    network_manager = NetworkManager(settings, transport=transport)
    forwarder = UpstreamForwarder(settings, network_manager)
    registry = build_registry(settings, forwarder)
    dispatcher = PluginDispatcher(registry, PassthroughProxy(settings, network_manager))

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        port = settings.LISTEN_PORT
        info_log(f"OpenAI proxy server started on http://localhost:{port}/v1")
        info_log(f"Upstream: {settings.UPSTREAM_BASE_URL}")
        info_log(f"Health check: http://localhost:{port}/v1/healthz")
        yield
        await network_manager.cleanup_clients()

    app = FastAPI(
        title="responses-proxy",
        description="Translates OpenAI Responses requests into chat completions for an upstream server",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.network_manager = network_manager
    app.state.registry = registry
    app.state.dispatcher = dispatcher
    app.state.health = HealthAggregator(registry, forwarder)

    register_exception_handlers(app)
    app.include_router(proxy_router)

    return app
