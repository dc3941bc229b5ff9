"""Service layer: upstream client, forwarding, passthrough and health."""

from .network_manager import NetworkManager
from .forwarder import UpstreamForwarder
from .passthrough import PassthroughProxy
from .health import HealthAggregator

__all__ = [
    "NetworkManager",
    "UpstreamForwarder",
    "PassthroughProxy",
    "HealthAggregator",
]
