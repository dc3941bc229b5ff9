"""Upstream forwarding for transformed chat completions requests."""

from __future__ import annotations

import time
from typing import Any, AsyncIterator, Dict

import httpx
import orjson

from ..config import Settings
from ..errors import HandlerOutcome, NetworkFailure, Success, UpstreamRejected
from ..helpers import debug_log, error_log, request_stage_log
from .network_manager import NetworkManager


def _error_message(exc: Exception) -> str:
    return str(exc).strip() or exc.__class__.__name__


class UpstreamForwarder:
    """Send one request to ``<upstream>/chat/completions`` and classify the result."""

    def __init__(self, settings: Settings, network_manager: NetworkManager) -> None:
        self.settings = settings
        self.network_manager = network_manager

    @property
    def completions_url(self) -> str:
        return f"{self.settings.UPSTREAM_BASE_URL}/chat/completions"

    @property
    def health_url(self) -> str:
        return f"{self.settings.UPSTREAM_BASE_URL}{self.settings.UPSTREAM_HEALTH_CHECK_PATH}"

    def build_headers(self, streaming: bool = False) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self.settings.auth_headers())
        if streaming:
            headers["Accept"] = "text/event-stream"
        return headers

    async def forward(self, payload: Dict[str, Any]) -> HandlerOutcome:
        """Buffered mode: wait for the whole upstream body."""
        client = await self.network_manager.get_client()
        request_stage_log("upstream_request", "Sending buffered request upstream", url=self.completions_url)
        start = time.perf_counter()
        try:
            response = await client.post(
                self.completions_url,
                content=orjson.dumps(payload),
                headers=self.build_headers(),
            )
            debug_log("Upstream responded", status_code=response.status_code,
                      elapsed_ms=f"{(time.perf_counter() - start) * 1000:.2f}ms")

            if not response.is_success:
                return self._rejected(response.status_code, response.reason_phrase, response.text)

            return Success(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            message = _error_message(exc)
            error_log("Error forwarding request", error=message)
            return NetworkFailure(message)

    async def open_stream(self, payload: Dict[str, Any]) -> HandlerOutcome:
        """
        Streaming mode: return once the upstream status line is in.

        On success the payload is an async iterator of raw upstream chunks.
        The upstream response stays open until that iterator finishes or is closed.
        """
        client = await self.network_manager.get_client()
        request_stage_log("upstream_request", "Opening upstream stream", url=self.completions_url)
        request = client.build_request(
            "POST",
            self.completions_url,
            content=orjson.dumps(payload),
            headers=self.build_headers(streaming=True),
        )
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as exc:
            message = _error_message(exc)
            error_log("Error streaming response", error=message)
            return NetworkFailure(message)

        if not response.is_success:
            try:
                await response.aread()
                return self._rejected(response.status_code, response.reason_phrase, response.text)
            except httpx.HTTPError as exc:
                message = _error_message(exc)
                error_log("Error streaming response", error=message)
                return NetworkFailure(message)
            finally:
                await response.aclose()

        request_stage_log("upstream_response", "Upstream stream opened", status_code=response.status_code)
        return Success(self._relay(response), response=response)

    async def _relay(self, response: httpx.Response) -> AsyncIterator[bytes]:
        chunks = 0
        try:
            async for chunk in response.aiter_bytes():
                chunks += 1
                yield chunk
        except httpx.HTTPError as exc:
            # Headers are already on the wire; all we can do is stop.
            error_log("Error streaming response", error=_error_message(exc), chunks=chunks)
        finally:
            await response.aclose()
            request_stage_log("stream_finished", "Upstream stream closed", chunks=chunks)

    async def probe_health(self) -> bool:
        """GET the configured health path; healthy on any 2xx."""
        client = await self.network_manager.get_client()
        try:
            response = await client.get(
                self.health_url,
                headers=self.settings.auth_headers(),
                timeout=self.settings.HEALTH_CHECK_TIMEOUT,
            )
            return response.is_success
        except httpx.HTTPError as exc:
            error_log("Health check failed", error=_error_message(exc), url=self.health_url)
            return False

    @staticmethod
    def _rejected(status_code: int, reason: str, body: str) -> UpstreamRejected:
        error_log("Upstream error", status=status_code, status_text=reason)
        error_log("Upstream error detail", error=body[:500])
        return UpstreamRejected(status_code, body)
