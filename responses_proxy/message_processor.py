#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Message content normalisation for the Chat Completions dialect
"""

from typing import Any, List, Union

import orjson

from .helpers import debug_log

# Literal backslash-n, two characters. Clients of the existing proxy depend on it.
STRING_PART_SEPARATOR = "\\n"


class MessageProcessor:
    """
    Reconcile the content shapes a Responses client may send into what a
    chat completions server accepts:
    - plain strings
    - lists of strings
    - lists of typed blocks ({"type": ..., "text": ...})
    """

    def normalize_content(self, content: Any) -> Union[str, List[Any]]:
        """
        Normalise a single message content value.

        Args:
            content: string, list of strings, list of typed blocks, or anything else

        Returns:
            A string or a list of content blocks. Nothing is ever dropped:
            unknown list shapes come back unchanged and other values are
            serialised to JSON text.
        """
        if isinstance(content, str):
            return content

        if isinstance(content, list):
            if all(isinstance(part, str) for part in content):
                return STRING_PART_SEPARATOR.join(content)

            if all(self._is_text_block(part) for part in content):
                return [self._convert_block(part) for part in content]

            debug_log("Passing through unrecognised content list", parts=len(content))
            return content

        return orjson.dumps(content).decode("utf-8")

    @staticmethod
    def _is_text_block(part: Any) -> bool:
        return isinstance(part, dict) and bool(part.get("type")) and "text" in part

    @staticmethod
    def _convert_block(part: dict) -> dict:
        if part["type"] == "input_text":
            return {"type": "text", "text": part["text"]}
        return part


# Module-level instance
message_processor = MessageProcessor()
