#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Responses -> Chat Completions request transformer
"""

from typing import Any, Dict, List

from .helpers import debug_log
from .message_processor import MessageProcessor, message_processor
from .schemas import ChatCompletionRequest, ResponsesRequest

DEFAULT_TEMPERATURE = 0.7
# -1 means "no limit" for the chat completions servers this proxy fronts
DEFAULT_MAX_TOKENS = -1

# Fields copied whenever the client sent them, even as 0 / false / null
PASSTHROUGH_FIELDS = ("temperature", "max_tokens", "parallel_tool_calls")


def is_truthy(value: Any) -> bool:
    """JSON truthiness: None, "", False, 0 and NaN are false; empty lists and objects are true."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == value and value != 0
    return True


class ResponsesTransformer:
    """Stateless converter from a Responses API body to a chat completions body."""

    def __init__(self, processor: MessageProcessor = None):
        self.processor = processor or message_processor

    def transform_request(self, request: ResponsesRequest) -> ChatCompletionRequest:
        """
        Build the chat completions request for a Responses request.

        Never raises on odd input: items that cannot become messages are
        skipped and unknown content shapes are passed through.
        """
        fields_set = request.model_fields_set
        body: Dict[str, Any] = {
            "messages": self._build_messages(request),
            "temperature": DEFAULT_TEMPERATURE,
            "max_tokens": DEFAULT_MAX_TOKENS,
            "stream": is_truthy(request.stream),
        }
        if "model" in fields_set:
            body["model"] = request.model

        if isinstance(request.tools, list) and request.tools:
            body["tools"] = request.tools

        for field in PASSTHROUGH_FIELDS:
            if field in fields_set:
                body[field] = getattr(request, field)

        return ChatCompletionRequest(**body)

    def _build_messages(self, request: ResponsesRequest) -> List[Dict[str, Any]]:
        messages = []

        if is_truthy(request.instructions):
            messages.append({"role": "system", "content": request.instructions})

        if isinstance(request.input, list):
            for idx, item in enumerate(request.input):
                if not isinstance(item, dict):
                    debug_log("Skipping non-object input item", index=idx)
                    continue

                role = item.get("role")
                content = item.get("content")
                if not is_truthy(content):
                    content = item.get("text")

                if not (isinstance(role, str) and role) or not is_truthy(content):
                    debug_log("Skipping input item without role or content", index=idx)
                    continue

                messages.append({
                    "role": role,
                    "content": self.processor.normalize_content(content),
                })

        return messages
