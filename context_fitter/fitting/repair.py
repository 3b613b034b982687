# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Phase 1.5 — Tool call / tool result pairing repair.

Conversations reloaded from storage can contain assistant tool-call parts
whose results were never persisted as a separate message. The provider
rejects any tool call that is not answered by the immediately following
message, so for every unanswered call a placeholder result is synthesised.

The repair is additive: existing parts are never removed or edited.
Placeholders go into a new ``tool`` message right after the assistant
message, or, when the following message already answers some of the
calls, are appended to a copy of that message.

Run again after group truncation: dropping a group can strand a call at a
boundary. Grouping keeps calls and results together, so that second pass
is normally a no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from context_fitter.models import (
    Message,
    MessageRole,
    ToolCallPart,
    ToolOutput,
    ToolOutputType,
    ToolResultPart,
)
from context_fitter.prompts import PLACEHOLDER_TOOL_RESULT, UNKNOWN_TOOL_NAME

logger = logging.getLogger(__name__)

_ANSWERING_ROLES = frozenset({MessageRole.TOOL, MessageRole.USER})


@dataclass
class RepairReport:
    """Result of a repair pass.

    Attributes:
        messages (List[Message]): The repaired message list.
        inserted_placeholder_count (int): Number of placeholder tool-result
            parts synthesised during repair.
    """

    messages: List[Message]
    inserted_placeholder_count: int


def make_placeholder_result(tool_call_id: str, tool_name: Optional[str] = None) -> ToolResultPart:
    """Build the stand-in result for a tool call whose result was lost.

    Args:
        tool_call_id (str): Id of the unanswered tool call.
        tool_name (Optional[str]): Name of the called tool, if known.

    Returns:
        ToolResultPart: A text-output result carrying
            ``PLACEHOLDER_TOOL_RESULT``.
    """
    return ToolResultPart(
        tool_call_id=tool_call_id,
        tool_name=tool_name or UNKNOWN_TOOL_NAME,
        output=ToolOutput(type=ToolOutputType.TEXT, value=PLACEHOLDER_TOOL_RESULT),
    )


def _answered_ids(msg: Optional[Message]) -> set[str]:
    """Tool-call ids answered by ``msg`` if it may answer tool calls at all.

    Args:
        msg (Optional[Message]): The message following an assistant turn.

    Returns:
        set[str]: Answered ids; empty when ``msg`` is missing, has another
            role, or has plain-text content.
    """
    if msg is None or msg.role not in _ANSWERING_ROLES:
        return set()
    return set(msg.tool_result_ids())


def _unpaired_calls(calls: List[ToolCallPart], answered: set[str]) -> List[ToolCallPart]:
    unpaired: List[ToolCallPart] = []
    seen: set[str] = set()
    for call in calls:
        if call.tool_call_id in answered or call.tool_call_id in seen:
            continue
        seen.add(call.tool_call_id)
        unpaired.append(call)
    return unpaired


def repair_tool_call_result_pairing(messages: List[Message]) -> RepairReport:
    """Insert placeholder results for tool calls left without one.

    Scans assistant messages for tool-call parts, then checks the
    immediately following ``tool`` or ``user`` message for tool-result
    parts with the same ids. Every call without a result gets exactly one
    placeholder.

    Args:
        messages (List[Message]): Conversation message list to scan and repair.

    Returns:
        RepairReport: A report containing the repaired message list (the
            input list itself when nothing was missing) and the number of
            placeholders inserted.
    """
    if not messages:
        return RepairReport(messages=messages, inserted_placeholder_count=0)

    repaired: List[Message] = []
    inserted = 0
    i = 0

    while i < len(messages):
        msg = messages[i]
        repaired.append(msg)
        i += 1

        if msg.role != MessageRole.ASSISTANT:
            continue
        calls = msg.tool_calls()
        if not calls:
            continue

        following = messages[i] if i < len(messages) else None
        answered = _answered_ids(following)
        unpaired = _unpaired_calls(calls, answered)
        if not unpaired:
            continue

        placeholders = [make_placeholder_result(c.tool_call_id, c.tool_name) for c in unpaired]
        for call in unpaired:
            logger.info(
                "Inserted placeholder tool_result: tool_call_id=%s tool=%s",
                call.tool_call_id,
                call.tool_name,
            )
        inserted += len(placeholders)

        if answered:
            repaired.append(following.model_copy(update={"content": [*following.content, *placeholders]}))
            i += 1
        else:
            repaired.append(Message(role=MessageRole.TOOL, content=placeholders))

    if not inserted:
        return RepairReport(messages=messages, inserted_placeholder_count=0)

    logger.info("Repaired tool_call/tool_result pairing: inserted %d placeholders", inserted)
    return RepairReport(messages=repaired, inserted_placeholder_count=inserted)
