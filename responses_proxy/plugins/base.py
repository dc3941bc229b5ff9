"""Plugin interface and registry."""

from __future__ import annotations

import re
from typing import List, Optional, Protocol, runtime_checkable

from fastapi.responses import Response

from ..schemas import InboundRequest


@runtime_checkable
class Plugin(Protocol):
    """Anything that can claim, handle and health-check a request."""

    name: str
    description: str
    method: str
    path_pattern: "re.Pattern[str]"

    def can_handle(self, request: InboundRequest) -> bool: ...

    async def handle(self, request: InboundRequest) -> Optional[Response]:
        """Return the response to send, or None to decline the request."""
        ...

    async def check_health(self) -> bool: ...


class BasePlugin:
    """Default behaviour shared by plugins: exact method + full path match, always healthy."""

    name: str
    description: str = ""
    method: str = "POST"
    path_pattern: "re.Pattern[str]"

    def can_handle(self, request: InboundRequest) -> bool:
        return request.method == self.method and self.path_pattern.fullmatch(request.path) is not None

    async def handle(self, request: InboundRequest) -> Optional[Response]:
        raise NotImplementedError

    async def check_health(self) -> bool:
        return True


class PluginRegistry:
    """Ordered plugin list; registration order is dispatch priority."""

    def __init__(self) -> None:
        self._plugins: List[Plugin] = []

    def register(self, plugin: Plugin) -> None:
        self._plugins.append(plugin)

    def get_all(self) -> List[Plugin]:
        return list(self._plugins)

    def find_handler(self, request: InboundRequest) -> Optional[Plugin]:
        for plugin in self._plugins:
            if plugin.can_handle(request):
                return plugin
        return None

    def __len__(self) -> int:
        return len(self._plugins)
