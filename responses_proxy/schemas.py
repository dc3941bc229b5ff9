"""
Application data models
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class InboundRequest:
    """A request as received by the proxy, before any plugin touches it."""
    method: str
    path: str
    body: Any = None
    raw_body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)
    query: str = ""


class PluginConfig(BaseModel):
    """Plugin toggle from configuration"""
    name: str
    enabled: bool = True


class ResponsesRequest(BaseModel):
    """Body of a POST /v1/responses request.

    Fields are untyped: values are read exactly as sent and the transformer
    decides what to keep.
    Anything else the client sends is kept as an extra and never forwarded.
    """
    model_config = ConfigDict(extra="allow")

    model: Any = None
    instructions: Any = None
    input: Any = None
    stream: Any = None
    tools: Any = None
    temperature: Any = None
    max_tokens: Any = None
    parallel_tool_calls: Any = None


class ChatMessage(BaseModel):
    """Chat message model"""
    role: str
    content: Any


class ChatCompletionRequest(BaseModel):
    """Chat completions request sent upstream.

    Overrides are copied verbatim from the client, so they are not type checked.
    """
    model: Any = None
    messages: List[ChatMessage]
    temperature: Any = 0.7
    max_tokens: Any = -1
    stream: bool = False
    tools: Optional[List[Any]] = None
    parallel_tool_calls: Any = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialise for the wire, leaving out optional fields that were never set."""
        return self.model_dump(exclude_unset=True)
