"""Request plugins and their registry."""

from typing import Callable, Dict

from ..config import Settings
from ..helpers import info_log, warning_log
from ..services.forwarder import UpstreamForwarder
from .base import BasePlugin, Plugin, PluginRegistry
from .dispatcher import PluginDispatcher
from .v1_responses import V1ResponsesPlugin

# Plugin name -> factory. New plugins are added here.
PLUGIN_FACTORIES: Dict[str, Callable[[UpstreamForwarder], Plugin]] = {
    V1ResponsesPlugin.name: V1ResponsesPlugin,
}


def build_registry(settings: Settings, forwarder: UpstreamForwarder) -> PluginRegistry:
    """Register every enabled plugin from configuration, in configuration order."""
    registry = PluginRegistry()
    for plugin_config in settings.enabled_plugins():
        factory = PLUGIN_FACTORIES.get(plugin_config.name)
        if factory is None:
            warning_log(f"Plugin '{plugin_config.name}' not found or could not be loaded")
            continue
        plugin = factory(forwarder)
        info_log(f"Registering plugin: {plugin.name}")
        registry.register(plugin)
    return registry


__all__ = [
    "BasePlugin",
    "Plugin",
    "PluginRegistry",
    "PluginDispatcher",
    "V1ResponsesPlugin",
    "PLUGIN_FACTORIES",
    "build_registry",
]
