"""
Error envelopes and handler outcomes
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from fastapi.responses import JSONResponse


@dataclass
class ProxyError:
    """Proxy-level failure rendered as an OpenAI-style error envelope."""

    status_code: int
    message: str
    error_type: str = "proxy_error"

    def to_error(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "type": self.error_type,
        }

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content={"error": self.to_error()})


@dataclass
class Success:
    """Upstream accepted the request.

    payload is the parsed body, or a byte iterator in streaming mode. In
    streaming mode response is the open upstream response the iterator reads.
    """

    payload: Any
    response: Optional[Any] = None


@dataclass
class UpstreamRejected:
    """Upstream answered with a non-2xx status."""

    status_code: int
    body: str


@dataclass
class NetworkFailure:
    """Transport-level failure talking to the upstream."""

    message: str


HandlerOutcome = Union[Success, UpstreamRejected, NetworkFailure]
