# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Phase 1 — Tool result shrinking.

Caps the character footprint of each tool-result payload so that a single
verbose call (a fetched page, a large JSON dump) cannot dominate the
budget. Oversized text keeps its head and tail with a marker in between:
the head usually carries structure and headers, the tail totals and
conclusions.

Per output shape:
  - plain / text / error-text  shrink the text itself
  - json / error-json          serialise, shrink, and demote to
                               text / error-text since the cut JSON is no
                               longer well-formed
  - content                    shrink oversized ``text`` sub-blocks only
  - empty / unknown            pass through

Shrinking is idempotent: a shrunk text is below the limit by construction.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Tuple

from context_fitter.fitting.settings import ToolResultLimits
from context_fitter.fitting.tokens import serialize
from context_fitter.models import (
    Message,
    OutputShape,
    ToolOutput,
    ToolOutputType,
    ToolResultPart,
    classify_output,
)
from context_fitter.prompts import TRUNCATION_MARKER

logger = logging.getLogger(__name__)

_DEFAULT_LIMITS = ToolResultLimits()

_DEMOTED_TYPES = {
    ToolOutputType.JSON: ToolOutputType.TEXT,
    ToolOutputType.ERROR_JSON: ToolOutputType.ERROR_TEXT,
}


def truncate_text(text: str, limits: ToolResultLimits = _DEFAULT_LIMITS) -> str:
    """Keep head + tail of an oversized text with an omission marker.

    Args:
        text (str): Text to shrink.
        limits (ToolResultLimits): Character limit and head/tail sizes.

    Returns:
        str: ``text`` unchanged when within ``limits.char_limit``, otherwise
            ``head + marker + tail``.
    """
    if len(text) <= limits.char_limit:
        return text
    omitted = len(text) - limits.head_chars - limits.tail_chars
    tail = text[-limits.tail_chars:] if limits.tail_chars > 0 else ""
    return text[: limits.head_chars] + TRUNCATION_MARKER.format(omitted=omitted) + tail


def _shrink_plain(output: str, limits: ToolResultLimits) -> str:
    return truncate_text(output, limits)


def _shrink_text(output: ToolOutput, limits: ToolResultLimits) -> ToolOutput:
    if not isinstance(output.value, str) or len(output.value) <= limits.char_limit:
        return output
    return output.model_copy(update={"value": truncate_text(output.value, limits)})


def _shrink_json(output: ToolOutput, limits: ToolResultLimits) -> ToolOutput:
    serialized = serialize({} if output.value is None else output.value)
    if len(serialized) <= limits.char_limit:
        return output
    return output.model_copy(
        update={
            "type": _DEMOTED_TYPES[output.type],
            "value": truncate_text(serialized, limits),
        }
    )


def _shrink_block(block: Any, limits: ToolResultLimits) -> Any:
    if not isinstance(block, dict) or block.get("type") != "text":
        return block
    text = block.get("text")
    if not isinstance(text, str) or len(text) <= limits.char_limit:
        return block
    return {**block, "text": truncate_text(text, limits)}


def _shrink_content(output: ToolOutput, limits: ToolResultLimits) -> ToolOutput:
    if not isinstance(output.value, list):
        return output
    blocks = [_shrink_block(block, limits) for block in output.value]
    if all(new is old for new, old in zip(blocks, output.value)):
        return output
    return output.model_copy(update={"value": blocks})


def _pass_through(output: Any, limits: ToolResultLimits) -> Any:
    return output


_OUTPUT_SHRINKERS: Dict[OutputShape, Callable[[Any, ToolResultLimits], Any]] = {
    OutputShape.EMPTY: _pass_through,
    OutputShape.PLAIN: _shrink_plain,
    OutputShape.TEXT: _shrink_text,
    OutputShape.JSON: _shrink_json,
    OutputShape.CONTENT: _shrink_content,
    OutputShape.UNKNOWN: _pass_through,
}


def shrink_tool_output(output: Any, limits: ToolResultLimits = _DEFAULT_LIMITS) -> Any:
    """Shrink one tool-result output.

    Args:
        output (Any): Output in any of the supported shapes.
        limits (ToolResultLimits): Character limit and head/tail sizes.

    Returns:
        Any: The same object when nothing needed shrinking, otherwise a new
            output of the same shape (json outputs become text outputs).
    """
    return _OUTPUT_SHRINKERS[classify_output(output)](output, limits)


def _shrink_part(part: Any, limits: ToolResultLimits) -> Any:
    if not isinstance(part, ToolResultPart) or part.output is None:
        return part
    shrunk = shrink_tool_output(part.output, limits)
    if shrunk is part.output:
        return part
    return part.model_copy(update={"output": shrunk})


def shrink_tool_results(
    messages: List[Message],
    limits: ToolResultLimits = _DEFAULT_LIMITS,
) -> Tuple[List[Message], int]:
    """Shrink oversized tool results in-memory (does not mutate originals).

    Args:
        messages (List[Message]): Conversation message list to process.
        limits (ToolResultLimits): Character limit and head/tail sizes.

    Returns:
        Tuple[List[Message], int]: A tuple of the new message list and the
            number of tool-result parts that were shrunk. Messages without
            oversized results are the original objects.
    """
    shrunk_count = 0
    result: List[Message] = []

    for msg in messages:
        if not isinstance(msg.content, list):
            result.append(msg)
            continue

        parts = [_shrink_part(part, limits) for part in msg.content]
        changed = 0
        for new, old in zip(parts, msg.content):
            if new is old:
                continue
            changed += 1
            logger.info(
                "Shrunk tool result %s (%s): %d chars -> %d chars",
                old.tool_call_id,
                old.tool_name,
                len(serialize(old.output)),
                len(serialize(new.output)),
            )
        if not changed:
            result.append(msg)
            continue

        shrunk_count += changed
        result.append(msg.model_copy(update={"content": parts}))

    return result, shrunk_count


def has_oversized_tool_results(
    messages: List[Message],
    limits: ToolResultLimits = _DEFAULT_LIMITS,
) -> bool:
    """Check whether any tool result would be shrunk.

    Args:
        messages (List[Message]): Conversation message list to check.
        limits (ToolResultLimits): Character limit and head/tail sizes.

    Returns:
        bool: ``True`` if at least one tool-result part exceeds the limit.
    """
    return any(
        _shrink_part(part, limits) is not part
        for msg in messages
        for part in msg.parts
    )
