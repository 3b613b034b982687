# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Tests for message models, wire loading, and output classification."""

import pytest
from context_fitter.models import (
    MediaPart,
    Message,
    MessageRole,
    OutputShape,
    TextPart,
    ToolCallPart,
    ToolOutput,
    ToolOutputType,
    ToolResultPart,
    UnknownPart,
    classify_output,
    dump_messages,
    load_messages,
)
from pydantic import ValidationError


class TestLoadMessages:
    """Tests for load_messages wire-format validation."""

    def test_plain_text_content(self):
        """Verify string content is kept as a string."""
        [msg] = load_messages([{"role": "user", "content": "hi"}])
        assert msg.role == MessageRole.USER
        assert msg.content == "hi"
        assert msg.parts == []

    def test_camel_case_tool_call(self):
        """Verify camelCase tool-call fields map to snake_case attributes."""
        [msg] = load_messages(
            [
                {
                    "role": "assistant",
                    "content": [
                        {"type": "text", "text": "Let me look."},
                        {"type": "tool-call", "toolCallId": "call_1", "toolName": "search", "input": {"q": "x"}},
                    ],
                }
            ]
        )
        text, call = msg.content
        assert isinstance(text, TextPart)
        assert isinstance(call, ToolCallPart)
        assert call.tool_call_id == "call_1"
        assert call.tool_name == "search"
        assert call.input == {"q": "x"}

    def test_tool_result_output_shapes(self):
        """Verify each tool-result output shape validates to the right type."""
        [msg] = load_messages(
            [
                {
                    "role": "tool",
                    "content": [
                        {"type": "tool-result", "toolCallId": "a", "output": "plain"},
                        {"type": "tool-result", "toolCallId": "b", "output": {"type": "error-text", "value": "boom"}},
                        {"type": "tool-result", "toolCallId": "c", "output": {"type": "json", "value": {"k": 1}}},
                        {"type": "tool-result", "toolCallId": "d", "output": {"type": "mystery", "value": 1}},
                        {"type": "tool-result", "toolCallId": "e"},
                    ],
                }
            ]
        )
        outputs = [part.output for part in msg.content]
        assert outputs[0] == "plain"
        assert outputs[1] == ToolOutput(type=ToolOutputType.ERROR_TEXT, value="boom")
        assert outputs[2].type == ToolOutputType.JSON
        assert outputs[3] == {"type": "mystery", "value": 1}
        assert outputs[4] is None

    def test_media_parts(self):
        """Verify image and file parts validate to MediaPart."""
        [msg] = load_messages(
            [
                {
                    "role": "user",
                    "content": [
                        {"type": "image", "image": "iVBORw0KGgo="},
                        {"type": "file", "data": "JVBERi0=", "mediaType": "application/pdf"},
                    ],
                }
            ]
        )
        image, file = msg.content
        assert isinstance(image, MediaPart)
        assert isinstance(file, MediaPart)
        assert file.media_type == "application/pdf"

    def test_unknown_part_preserved(self):
        """Verify unrecognised part types are kept with their extra fields."""
        [msg] = load_messages([{"role": "assistant", "content": [{"type": "source", "url": "https://x"}]}])
        [part] = msg.content
        assert isinstance(part, UnknownPart)
        assert part.type == "source"
        assert part.model_extra == {"url": "https://x"}

    def test_malformed_content_kept_verbatim(self):
        """Verify content that is neither text nor parts is not rejected."""
        [msg] = load_messages([{"role": "user", "content": {"odd": True}}])
        assert msg.content == {"odd": True}
        assert msg.parts == []

    def test_malformed_items_kept_beside_valid_parts(self):
        """Verify only the bad items of a part list stay raw."""
        bad_call = {"type": "tool-call", "toolCallId": 7, "toolName": "t"}
        [msg] = load_messages(
            [
                {
                    "role": "assistant",
                    "content": [{"type": "tool-call", "toolCallId": "ok", "toolName": "t"}, None, "stray", bad_call],
                }
            ]
        )
        call, none_item, stray, raw = msg.content
        assert isinstance(call, ToolCallPart)
        assert (none_item, stray, raw) == (None, "stray", bad_call)
        assert [c.tool_call_id for c in msg.tool_calls()] == ["ok"]

    def test_unknown_role_rejected(self):
        """Verify an unknown role raises a ValidationError."""
        with pytest.raises(ValidationError):
            load_messages([{"role": "narrator", "content": "x"}])

    def test_empty(self):
        """Verify an empty iterable yields an empty list."""
        assert load_messages([]) == []


class TestDumpMessages:
    """Tests for dump_messages wire serialisation."""

    def test_camel_case_keys(self):
        """Verify dumped parts use camelCase keys and string enum values."""
        msg = Message(
            role=MessageRole.TOOL,
            content=[
                ToolResultPart(
                    tool_call_id="call_1",
                    tool_name="search",
                    output=ToolOutput(type=ToolOutputType.TEXT, value="done"),
                )
            ],
        )
        [dumped] = dump_messages([msg])
        assert dumped["role"] == "tool"
        assert dumped["content"][0] == {
            "type": "tool-result",
            "toolCallId": "call_1",
            "toolName": "search",
            "output": {"type": "text", "value": "done"},
        }

    def test_reload_equals_original(self):
        """Verify loading a dump reproduces the same messages."""
        msgs = [
            Message(role=MessageRole.USER, content="q"),
            Message(
                role=MessageRole.ASSISTANT,
                content=[ToolCallPart(tool_call_id="x", tool_name="t", input={"a": [1, 2]})],
            ),
        ]
        assert load_messages(dump_messages(msgs)) == msgs

    def test_malformed_items_dumped_verbatim(self):
        """Verify raw list items come back out unchanged next to dumped parts."""
        [msg] = load_messages([{"role": "user", "content": [{"type": "text", "text": "hi"}, None]}])
        [dumped] = dump_messages([msg])
        assert dumped["content"] == [{"type": "text", "text": "hi"}, None]


class TestMessageHelpers:
    """Tests for Message convenience accessors."""

    def test_tool_calls_skip_missing_ids(self):
        """Verify tool calls without an id are ignored."""
        msg = Message(
            role=MessageRole.ASSISTANT,
            content=[ToolCallPart(tool_call_id="a"), ToolCallPart(tool_name="no_id")],
        )
        assert [c.tool_call_id for c in msg.tool_calls()] == ["a"]

    def test_tool_result_ids(self):
        """Verify result ids are listed in order."""
        msg = Message(
            role=MessageRole.TOOL,
            content=[ToolResultPart(tool_call_id="b"), TextPart(text="x"), ToolResultPart(tool_call_id="a")],
        )
        assert msg.tool_result_ids() == ["b", "a"]

    def test_frozen(self):
        """Verify messages cannot be modified in place."""
        msg = Message(role=MessageRole.USER, content="x")
        with pytest.raises(ValidationError):
            msg.content = "y"


class TestClassifyOutput:
    """Tests for classify_output shape detection."""

    @pytest.mark.parametrize(
        "output, shape",
        [
            (None, OutputShape.EMPTY),
            ("text", OutputShape.PLAIN),
            (ToolOutput(type=ToolOutputType.TEXT, value="x"), OutputShape.TEXT),
            (ToolOutput(type=ToolOutputType.ERROR_TEXT, value="x"), OutputShape.TEXT),
            (ToolOutput(type=ToolOutputType.JSON, value={}), OutputShape.JSON),
            (ToolOutput(type=ToolOutputType.ERROR_JSON, value={}), OutputShape.JSON),
            (ToolOutput(type=ToolOutputType.CONTENT, value=[]), OutputShape.CONTENT),
            ({"type": "mystery"}, OutputShape.UNKNOWN),
            (42, OutputShape.UNKNOWN),
        ],
    )
    def test_shapes(self, output, shape):
        """Verify every output form maps to its shape."""
        assert classify_output(output) == shape
