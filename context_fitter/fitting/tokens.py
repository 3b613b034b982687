# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Token estimation utilities.

A fixed chars/4 approximation, not a real tokenizer: it is fast and does
not depend on the provider's vocabulary. Estimation never raises; unknown
shapes are costed by their serialised JSON form.

Tool-call arguments count towards the estimate, serialised the same way
they are sent (compact JSON, strings as-is).
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Callable, Dict, Iterable

from pydantic import BaseModel

from context_fitter.models import (
    MediaPart,
    Message,
    OutputShape,
    ReasoningPart,
    TextPart,
    ToolCallPart,
    ToolResultPart,
    classify_output,
)

CHARS_PER_TOKEN = 4
MEDIA_PART_TOKENS = 1_000

logger = logging.getLogger(__name__)


def estimate_tokens(text: str) -> int:
    """Estimate token count using the character heuristic.

    Args:
        text (str): Text to estimate tokens for.

    Returns:
        int: ``ceil(len(text) / CHARS_PER_TOKEN)``.
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return str(value)


def serialize(value: Any) -> str:
    """Compact JSON form of a value, as the provider would receive it.

    Args:
        value (Any): Value to serialise. Pydantic models are dumped with
            their wire aliases.

    Returns:
        str: JSON text, or ``str(value)`` when the value cannot be encoded
            (e.g. circular references).
    """
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=_json_default)
    except (TypeError, ValueError):
        logger.debug("Unserialisable value of type %s, using str()", type(value).__name__)
        return str(value)


def _text_output_tokens(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, str):
        return estimate_tokens(value)
    return estimate_tokens(serialize(value))


def _content_output_tokens(value: Any) -> int:
    if not isinstance(value, list):
        return estimate_tokens(serialize("" if value is None else value))
    tokens = 0
    for block in value:
        if isinstance(block, dict) and block.get("type") == "text":
            tokens += _text_output_tokens(block.get("text"))
        else:
            tokens += estimate_tokens(serialize(block))
    return tokens


_OUTPUT_ESTIMATORS: Dict[OutputShape, Callable[[Any], int]] = {
    OutputShape.EMPTY: lambda output: 0,
    OutputShape.PLAIN: estimate_tokens,
    OutputShape.TEXT: lambda output: _text_output_tokens(output.value),
    OutputShape.JSON: lambda output: estimate_tokens(serialize({} if output.value is None else output.value)),
    OutputShape.CONTENT: lambda output: _content_output_tokens(output.value),
    OutputShape.UNKNOWN: lambda output: estimate_tokens(serialize(output)),
}


def estimate_tool_output_tokens(output: Any) -> int:
    """Estimate the token cost of a tool-result output.

    Args:
        output (Any): The ``output`` of a tool-result part, in any shape.

    Returns:
        int: Estimated token count; 0 for an empty output.
    """
    return _OUTPUT_ESTIMATORS[classify_output(output)](output)


def _part_tokens(part: Any) -> int:
    if part is None:
        return 0
    if isinstance(part, (TextPart, ReasoningPart)):
        # Some producers put the text under ``value``.
        text = part.text if part.text is not None else (part.model_extra or {}).get("value")
        return _text_output_tokens(text)
    if isinstance(part, ToolCallPart):
        arguments = part.input if isinstance(part.input, str) else serialize({} if part.input is None else part.input)
        return estimate_tokens(part.tool_name or "") + estimate_tokens(arguments)
    if isinstance(part, ToolResultPart):
        return estimate_tool_output_tokens(part.output)
    if isinstance(part, MediaPart):
        # Payload is base64 or a URL; its length says nothing about cost.
        return MEDIA_PART_TOKENS
    return estimate_tokens(serialize(part))


def estimate_message_tokens(msg: Message) -> int:
    """Estimate token count for a single message.

    Plain text is measured directly. Part lists are summed per part:
    text and reasoning by their text, tool calls by name plus serialised
    input, tool results by their output, media at a fixed
    ``MEDIA_PART_TOKENS``, and anything else by its serialised form.

    Args:
        msg (Message): Message to estimate tokens for.

    Returns:
        int: Estimated token count of the message content.
    """
    content = msg.content
    if isinstance(content, str):
        return estimate_tokens(content)
    if not isinstance(content, list):
        return estimate_tokens(serialize(content))
    return sum(_part_tokens(part) for part in content)


def estimate_messages_tokens(messages: Iterable[Message]) -> int:
    """Estimate total token count for a list of messages.

    Args:
        messages (Iterable[Message]): Messages to estimate tokens for.

    Returns:
        int: Sum of estimated token counts across all messages.
    """
    return sum(estimate_message_tokens(m) for m in messages)
