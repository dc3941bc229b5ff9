"""
Proxy HTTP endpoints
"""

import orjson
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from .helpers import (
    bind_request_context,
    debug_log,
    error_log,
    request_stage_log,
    reset_request_context,
)
from .schemas import InboundRequest

router = APIRouter()

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


@router.get("/healthz")
@router.get("/v1/healthz")
async def healthz(request: Request):
    """Composite upstream health"""
    state = request.app.state
    upstream = state.settings.UPSTREAM_BASE_URL
    try:
        healthy = await state.health.check_upstream_health()
    except Exception as e:
        error_log("Health check error", error=str(e))
        return JSONResponse(status_code=500, content={"status": "error", "error": str(e)})

    if healthy:
        return JSONResponse(
            status_code=200,
            content={
                "status": "ok",
                "upstream": upstream,
                "plugins": [plugin.name for plugin in state.registry.get_all()],
            },
        )
    return JSONResponse(
        status_code=503,
        content={
            "status": "degraded",
            "upstream": upstream,
            "reason": "Upstream server is not responding",
        },
    )


async def build_inbound_request(request: Request) -> InboundRequest:
    """Snapshot a Starlette request into the immutable form plugins receive."""
    raw_body = await request.body()
    body = None
    if raw_body and "json" in request.headers.get("content-type", ""):
        try:
            body = orjson.loads(raw_body)
        except orjson.JSONDecodeError as e:
            debug_log("Request body is not valid JSON", error=str(e))

    return InboundRequest(
        method=request.method,
        path=request.url.path,
        body=body,
        raw_body=raw_body,
        headers=dict(request.headers),
        query=request.url.query,
    )


@router.api_route("/v1", methods=PROXY_METHODS)
@router.api_route("/v1/{path:path}", methods=PROXY_METHODS)
async def proxy(request: Request) -> Response:
    """Hand every /v1 request to the plugin dispatcher"""
    bind_request_context(method=request.method, path=request.url.path)
    request_stage_log("received", f"Received request: {request.method} to {request.url.path}")
    try:
        inbound = await build_inbound_request(request)
        return await request.app.state.dispatcher.dispatch(inbound)
    finally:
        reset_request_context("method", "path", "plugin", "model", "stream")
