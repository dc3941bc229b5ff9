#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Plugin for POST /v1/responses: rewrite to chat completions and forward upstream
"""

import re
from typing import Optional

from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from ..errors import NetworkFailure, ProxyError, UpstreamRejected
from ..helpers import bind_request_context, debug_log, error_log, request_stage_log
from ..schemas import ChatCompletionRequest, InboundRequest, ResponsesRequest
from ..services.forwarder import UpstreamForwarder
from ..transformer import ResponsesTransformer
from .base import BasePlugin

STREAM_HEADERS = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


class V1ResponsesPlugin(BasePlugin):
    name = "v1-responses"
    description = "Transforms /v1/responses to /v1/chat/completions format"
    method = "POST"
    path_pattern = re.compile(r"/v1/responses")

    def __init__(self, forwarder: UpstreamForwarder, transformer: ResponsesTransformer = None):
        self.forwarder = forwarder
        self.transformer = transformer or ResponsesTransformer()

    async def handle(self, request: InboundRequest) -> Optional[Response]:
        try:
            debug_log(f"Handling {request.method} request to {request.path}")
            body = ResponsesRequest.model_validate(request.body if isinstance(request.body, dict) else {})

            transformed = self.transformer.transform_request(body)
            debug_log(
                "Transformed request body",
                original=request.body,
                transformed=transformed.to_payload(),
            )
            bind_request_context(model=transformed.model, stream=transformed.stream)

            if transformed.stream:
                return await self._handle_streaming(transformed)
            return await self._handle_buffered(transformed)
        except Exception as exc:
            error_log("Error handling request", error=str(exc))
            return ProxyError(status_code=500, message=f"Error handling request: {exc}").to_response()

    async def _handle_buffered(self, transformed: ChatCompletionRequest) -> Response:
        request_stage_log("non_stream_mode", "Forwarding buffered request")
        outcome = await self.forwarder.forward(transformed.to_payload())

        if isinstance(outcome, UpstreamRejected):
            return PlainTextResponse(outcome.body, status_code=outcome.status_code)
        if isinstance(outcome, NetworkFailure):
            return JSONResponse(
                status_code=502,
                content={"error": f"Error forwarding request: {outcome.message}"},
            )
        return JSONResponse(content=outcome.payload)

    async def _handle_streaming(self, transformed: ChatCompletionRequest) -> Response:
        request_stage_log("stream_mode", "Forwarding streaming request")
        outcome = await self.forwarder.open_stream(transformed.to_payload())

        if isinstance(outcome, UpstreamRejected):
            return PlainTextResponse(outcome.body, status_code=outcome.status_code)
        if isinstance(outcome, NetworkFailure):
            return JSONResponse(
                status_code=502,
                content={"error": f"Error streaming response: {outcome.message}"},
            )

        return StreamingResponse(
            outcome.payload,
            media_type="text/event-stream",
            headers=STREAM_HEADERS,
            background=BackgroundTask(outcome.response.aclose),
        )

    async def check_health(self) -> bool:
        return await self.forwarder.probe_health()
