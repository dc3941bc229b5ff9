"""Composite upstream health."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from ..helpers import debug_log, error_log
from .forwarder import UpstreamForwarder

if TYPE_CHECKING:
    from ..plugins.base import Plugin, PluginRegistry


class HealthAggregator:
    """Upstream is healthy when any registered plugin says so.

    With no plugins registered a bare probe of the upstream health path decides.
    """

    def __init__(self, registry: PluginRegistry, forwarder: UpstreamForwarder) -> None:
        self.registry = registry
        self.forwarder = forwarder

    async def check_upstream_health(self) -> bool:
        plugins = self.registry.get_all()

        if not plugins:
            debug_log("No plugins registered, probing upstream directly")
            healthy = await self.forwarder.probe_health()
            if not healthy:
                error_log("Basic upstream health check failed", url=self.forwarder.health_url)
            return healthy

        results = await asyncio.gather(*(self._check_plugin(plugin) for plugin in plugins))
        return any(results)

    @staticmethod
    async def _check_plugin(plugin: Plugin) -> bool:
        try:
            return await plugin.check_health() is True
        except Exception as exc:
            error_log(f"Plugin {plugin.name} health check failed", error=str(exc))
            return False
