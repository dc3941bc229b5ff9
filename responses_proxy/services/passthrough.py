"""Transparent fallback proxy for requests no plugin claimed."""

from __future__ import annotations

from typing import Dict

import httpx
from fastapi.responses import Response, StreamingResponse
from starlette.background import BackgroundTask

from ..config import Settings
from ..errors import ProxyError
from ..helpers import debug_log, error_log
from ..schemas import InboundRequest
from .network_manager import NetworkManager

# Mount prefix of the proxied API; the upstream base URL already carries its own
API_PREFIX = "/v1"

_SKIPPED_REQUEST_HEADERS = {"host", "content-length"}

HOP_BY_HOP_RESPONSE_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
    "content-length",
    "content-encoding",
}


def filter_request_headers(headers: Dict[str, str], settings: Settings) -> Dict[str, str]:
    """Drop hop headers and inject the upstream credential."""
    filtered = {k: v for k, v in headers.items() if k.lower() not in _SKIPPED_REQUEST_HEADERS}
    auth = settings.auth_headers()
    if auth:
        filtered = {
            k: v for k, v in filtered.items()
            if k.lower() != settings.UPSTREAM_API_KEY_HEADER.lower()
        }
        filtered.update(auth)
    return filtered


def filter_response_headers(headers: httpx.Headers) -> Dict[str, str]:
    return {k: v for k, v in headers.items() if k.lower() not in HOP_BY_HOP_RESPONSE_HEADERS}


class PassthroughProxy:
    """Forward a request to the upstream unchanged apart from the credential header."""

    def __init__(self, settings: Settings, network_manager: NetworkManager) -> None:
        self.settings = settings
        self.network_manager = network_manager

    def target_url(self, path: str, query: str = "") -> str:
        if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
            path = path[len(API_PREFIX):]
        url = f"{self.settings.UPSTREAM_BASE_URL}{path}"
        return f"{url}?{query}" if query else url

    async def forward(self, request: InboundRequest) -> Response:
        client = await self.network_manager.get_client()
        upstream_request = client.build_request(
            request.method,
            self.target_url(request.path, request.query),
            headers=filter_request_headers(request.headers, self.settings),
            content=request.raw_body,
        )
        try:
            upstream_response = await client.send(upstream_request, stream=True)
        except httpx.HTTPError as exc:
            message = str(exc).strip() or exc.__class__.__name__
            error_log("Proxy error", error=message)
            return ProxyError(status_code=502, message=f"Proxy error: {message}").to_response()

        debug_log(
            "Proxied response",
            status=upstream_response.status_code,
            method=request.method,
            path=request.path,
        )
        return StreamingResponse(
            self._relay(upstream_response),
            status_code=upstream_response.status_code,
            headers=filter_response_headers(upstream_response.headers),
            background=BackgroundTask(upstream_response.aclose),
        )

    @staticmethod
    async def _relay(response: httpx.Response):
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as exc:
            error_log("Proxy error", error=str(exc))
