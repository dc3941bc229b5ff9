"""
responses_proxy - OpenAI Responses to chat completions proxy
"""

from .config import settings, get_settings, Settings
from .helpers import debug_log, info_log, error_log, configure_structlog
from .schemas import ChatCompletionRequest, ChatMessage, InboundRequest, PluginConfig, ResponsesRequest
from .message_processor import MessageProcessor, message_processor
from .transformer import ResponsesTransformer

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "debug_log",
    "info_log",
    "error_log",
    "configure_structlog",
    "ChatCompletionRequest",
    "ChatMessage",
    "InboundRequest",
    "PluginConfig",
    "ResponsesRequest",
    "MessageProcessor",
    "message_processor",
    "ResponsesTransformer",
]
