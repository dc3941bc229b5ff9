"""Shared HTTP client management for upstream calls."""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from ..config import Settings
from ..helpers import info_log, error_log


_CONNECTION_LIMITS = httpx.Limits(
    max_keepalive_connections=20,
    max_connections=100,
    keepalive_expiry=30,
)


class NetworkManager:
    """Own the pooled httpx client used for every upstream call."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._client_lock = asyncio.Lock()

    def _build_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self._settings.REQUEST_TIMEOUT, connect=10.0)

    async def get_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                info_log("[CLIENT] Creating upstream client", upstream=self._settings.UPSTREAM_BASE_URL)
                self._client = httpx.AsyncClient(
                    timeout=self._build_timeout(),
                    limits=_CONNECTION_LIMITS,
                    transport=self._transport,
                )
            return self._client

    async def cleanup_clients(self) -> None:
        async with self._client_lock:
            client = self._client
            self._client = None

        if client:
            try:
                await client.aclose()
                info_log("[CLIENT] Upstream client closed")
            except Exception as exc:  # pragma: no cover
                error_log("[CLIENT] Failed to close upstream client", error=str(exc))
