import httpx

from responses_proxy.plugins import PluginRegistry
from responses_proxy.services import HealthAggregator


class HealthPlugin:
    def __init__(self, name, healthy=True, error=None):
        self.name = name
        self.healthy = healthy
        self.error = error
        self.checked = False

    async def check_health(self):
        self.checked = True
        if self.error is not None:
            raise self.error
        return self.healthy


def failing_upstream(request):
    raise httpx.ConnectError("connection refused", request=request)


async def test_no_plugins_probes_upstream_directly(make_forwarder, upstream_calls):
    aggregator = HealthAggregator(PluginRegistry(), make_forwarder(lambda request: httpx.Response(200)))

    assert await aggregator.check_upstream_health() is True
    assert str(upstream_calls[0].url) == "http://upstream.test/v1/models"


async def test_no_plugins_and_failing_probe_is_unhealthy(make_forwarder):
    aggregator = HealthAggregator(PluginRegistry(), make_forwarder(failing_upstream))

    assert await aggregator.check_upstream_health() is False


async def test_any_healthy_plugin_is_enough(make_forwarder, upstream_calls):
    registry = PluginRegistry()
    ok = HealthPlugin("ok", healthy=True)
    broken = HealthPlugin("broken", error=RuntimeError("boom"))
    registry.register(broken)
    registry.register(ok)

    aggregator = HealthAggregator(registry, make_forwarder(failing_upstream))

    assert await aggregator.check_upstream_health() is True
    assert ok.checked and broken.checked
    assert upstream_calls == []


async def test_all_plugins_unhealthy(make_forwarder):
    registry = PluginRegistry()
    registry.register(HealthPlugin("down", healthy=False))
    registry.register(HealthPlugin("broken", error=RuntimeError("boom")))

    aggregator = HealthAggregator(registry, make_forwarder(failing_upstream))

    assert await aggregator.check_upstream_health() is False
