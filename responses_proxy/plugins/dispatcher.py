"""Route inbound requests to the first matching plugin, else to the passthrough proxy."""

from __future__ import annotations

from fastapi.responses import Response

from ..helpers import bind_request_context, debug_log, error_log, info_log
from ..schemas import InboundRequest
from ..services.passthrough import PassthroughProxy
from .base import PluginRegistry


class PluginDispatcher:
    def __init__(self, registry: PluginRegistry, fallback: PassthroughProxy) -> None:
        self.registry = registry
        self.fallback = fallback

    async def dispatch(self, request: InboundRequest) -> Response:
        debug_log(f"{request.method} {request.path}")
        handler = self.registry.find_handler(request)

        if handler is not None:
            bind_request_context(plugin=handler.name)
            try:
                response = await handler.handle(request)
                if response is not None:
                    return response
                debug_log("Plugin declined request", plugin=handler.name)
            except Exception as exc:
                error_log("Plugin error", plugin=handler.name, error=str(exc))
                info_log("Falling back to generic proxy after plugin error")

        return await self.fallback.forward(request)
