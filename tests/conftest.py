# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Shared test fixtures for the context-fitter test suite."""

from typing import Any, List, Optional

import pytest
from context_fitter.models import (
    Message,
    MessageRole,
    TextPart,
    ToolCallPart,
    ToolOutput,
    ToolOutputType,
    ToolResultPart,
)


# ---------------------------------------------------------------------------
# Message factories
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_message():
    """Factory fixture for creating plain-text Message instances."""

    def _factory(
        role: MessageRole = MessageRole.USER,
        content: str = "hello",
    ) -> Message:
        return Message(role=role, content=content)

    return _factory


@pytest.fixture
def tool_call_message():
    """Factory fixture for an assistant message issuing tool calls."""

    def _factory(*call_ids: str, tool_name: str = "web_fetch", text: Optional[str] = None) -> Message:
        parts: List[Any] = [TextPart(text=text)] if text else []
        parts.extend(
            ToolCallPart(tool_call_id=call_id, tool_name=tool_name, input={"url": f"https://example.com/{call_id}"})
            for call_id in call_ids
        )
        return Message(role=MessageRole.ASSISTANT, content=parts)

    return _factory


@pytest.fixture
def tool_result_message():
    """Factory fixture for a tool message answering tool calls."""

    def _factory(*call_ids: str, tool_name: str = "web_fetch", value: str = "ok") -> Message:
        return Message(
            role=MessageRole.TOOL,
            content=[
                ToolResultPart(
                    tool_call_id=call_id,
                    tool_name=tool_name,
                    output=ToolOutput(type=ToolOutputType.TEXT, value=value),
                )
                for call_id in call_ids
            ],
        )

    return _factory


@pytest.fixture
def message_group():
    """Factory fixture for a user + assistant exchange of a given token size.

    The size is split evenly between the two messages; it must be even.
    """

    def _factory(tokens: int, label: str = "g") -> List[Message]:
        half = tokens // 2
        return [
            Message(role=MessageRole.USER, content=(label + "u" * (half * 4))[: half * 4]),
            Message(role=MessageRole.ASSISTANT, content=(label + "a" * (half * 4))[: half * 4]),
        ]

    return _factory
