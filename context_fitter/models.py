# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Message and content-part models for the context window pipeline.

Content parts form a closed set of variants discriminated on ``type``.
Unrecognised tags validate into :class:`UnknownPart` so that caller data
is never rejected for carrying a part kind this package does not know.
Field names accept both the camelCase wire form (``toolCallId``) and the
snake_case attribute name (``tool_call_id``).
"""

from enum import Enum
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel


class MessageRole(str, Enum):
    """Message role enumeration.

    Attributes:
        SYSTEM (str): System role.
        USER (str): User role.
        ASSISTANT (str): Assistant role.
        TOOL (str): Tool result role.
    """

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ToolOutputType(str, Enum):
    """Type tag of a wrapped tool-result output.

    Attributes:
        TEXT (str): Plain text value.
        ERROR_TEXT (str): Error message as text.
        JSON (str): Structured JSON value.
        ERROR_JSON (str): Structured error value.
        CONTENT (str): Ordered list of sub-blocks.
    """

    TEXT = "text"
    ERROR_TEXT = "error-text"
    JSON = "json"
    ERROR_JSON = "error-json"
    CONTENT = "content"


class OutputShape(str, Enum):
    """Shape of a tool-result output as seen by the estimator and shrinker.

    Attributes:
        EMPTY (str): No output at all.
        PLAIN (str): A bare string.
        TEXT (str): ``text`` / ``error-text`` wrapper.
        JSON (str): ``json`` / ``error-json`` wrapper.
        CONTENT (str): ``content`` wrapper holding sub-blocks.
        UNKNOWN (str): Anything else, kept verbatim.
    """

    EMPTY = "empty"
    PLAIN = "plain"
    TEXT = "text"
    JSON = "json"
    CONTENT = "content"
    UNKNOWN = "unknown"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ToolOutput(_WireModel):
    """Wrapped tool-result output.

    Attributes:
        type (ToolOutputType): Output kind.
        value (Any): Text, JSON value, or list of sub-blocks depending on
            ``type``.
    """

    type: ToolOutputType
    value: Any = None


class TextPart(_WireModel):
    type: Literal["text"] = "text"
    text: Optional[str] = None


class ReasoningPart(_WireModel):
    type: Literal["reasoning"] = "reasoning"
    text: Optional[str] = None


class ToolCallPart(_WireModel):
    """Model-initiated tool invocation.

    Attributes:
        type (Literal["tool-call"]): Part type discriminator.
        tool_call_id (Optional[str]): Identifier correlating call and result.
        tool_name (Optional[str]): Name of the invoked tool.
        input (Any): Tool arguments, usually a dict or a raw string.
    """

    type: Literal["tool-call"] = "tool-call"
    tool_call_id: Optional[str] = None
    tool_name: Optional[str] = None
    input: Any = None


class ToolResultPart(_WireModel):
    """Result of a tool invocation.

    Attributes:
        type (Literal["tool-result"]): Part type discriminator.
        tool_call_id (Optional[str]): Identifier of the answered tool call.
        tool_name (Optional[str]): Name of the tool that produced the result.
        output (Union[str, ToolOutput, Any]): A bare string, a wrapped
            :class:`ToolOutput`, ``None``, or any unrecognised value.
    """

    type: Literal["tool-result"] = "tool-result"
    tool_call_id: Optional[str] = None
    tool_name: Optional[str] = None
    output: Union[str, ToolOutput, Any] = Field(default=None, union_mode="left_to_right")


class MediaPart(_WireModel):
    """Image or file attachment. Costed as a fixed amount, never measured."""

    type: Literal["image", "file"] = "image"
    data: Any = None
    media_type: Optional[str] = None


class UnknownPart(_WireModel):
    type: Any = None


_KNOWN_PART_TAGS = frozenset({"text", "reasoning", "tool-call", "tool-result"})


def _part_tag(value: Any) -> str:
    """Map raw or validated part data to its union tag."""
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if kind in ("image", "file"):
        return "media"
    if kind in _KNOWN_PART_TAGS:
        return kind
    return "unknown"


ContentPart = Annotated[
    Union[
        Annotated[TextPart, Tag("text")],
        Annotated[ReasoningPart, Tag("reasoning")],
        Annotated[ToolCallPart, Tag("tool-call")],
        Annotated[ToolResultPart, Tag("tool-result")],
        Annotated[MediaPart, Tag("media")],
        Annotated[UnknownPart, Tag("unknown")],
    ],
    Discriminator(_part_tag),
]

_CONTENT_PART = TypeAdapter(ContentPart)


def _part_or_raw(value: Any) -> Any:
    """Validate one content part, keeping it verbatim when it is malformed.

    A single bad item (``None``, a bare string, a numeric ``toolCallId``)
    only affects itself; its siblings still validate into typed parts.
    """
    try:
        return _CONTENT_PART.validate_python(value)
    except ValidationError:
        return value


ContentItem = Annotated[Any, BeforeValidator(_part_or_raw)]


class Message(BaseModel):
    """Message model.

    Attributes:
        role (MessageRole): The role of the message sender.
        content (Union[str, List[ContentItem], Any]): Plain text or an
            ordered list of content parts. List items that are not valid
            parts, and content that is neither text nor a list, are kept
            verbatim.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    role: MessageRole
    content: Union[str, List[ContentItem], Any] = Field(default="", union_mode="left_to_right")

    @property
    def parts(self) -> List[Any]:
        """Content parts, or an empty list when content is plain text."""
        if isinstance(self.content, list):
            return self.content
        return []

    def tool_calls(self) -> List[ToolCallPart]:
        """Tool-call parts carrying an id, in order."""
        return [p for p in self.parts if isinstance(p, ToolCallPart) and p.tool_call_id]

    def tool_result_ids(self) -> List[str]:
        """Ids answered by this message's tool-result parts, in order."""
        return [p.tool_call_id for p in self.parts if isinstance(p, ToolResultPart) and p.tool_call_id]


_MESSAGE_LIST = TypeAdapter(List[Message])


def classify_output(output: Any) -> OutputShape:
    """Classify a tool-result output into its :class:`OutputShape`.

    Args:
        output (Any): The ``output`` of a :class:`ToolResultPart`.

    Returns:
        OutputShape: The shape used to pick the per-shape handler.
    """
    if output is None:
        return OutputShape.EMPTY
    if isinstance(output, str):
        return OutputShape.PLAIN
    if not isinstance(output, ToolOutput):
        return OutputShape.UNKNOWN
    if output.type in (ToolOutputType.TEXT, ToolOutputType.ERROR_TEXT):
        return OutputShape.TEXT
    if output.type in (ToolOutputType.JSON, ToolOutputType.ERROR_JSON):
        return OutputShape.JSON
    return OutputShape.CONTENT


def load_messages(data: Iterable[Dict[str, Any]]) -> List[Message]:
    """Validate caller-supplied dicts into messages.

    Args:
        data (Iterable[Dict[str, Any]]): Messages in wire form, e.g.
            ``{"role": "tool", "content": [{"type": "tool-result", ...}]}``.

    Returns:
        List[Message]: Validated, immutable messages.

    Raises:
        pydantic.ValidationError: If a message has an unknown role or is
            not a mapping.
    """
    return _MESSAGE_LIST.validate_python(list(data))


def dump_messages(messages: Iterable[Message]) -> List[Dict[str, Any]]:
    """Serialise messages back to camelCase wire dicts.

    Args:
        messages (Iterable[Message]): Messages to dump.

    Returns:
        List[Dict[str, Any]]: JSON-compatible message dicts.
    """
    return _MESSAGE_LIST.dump_python(list(messages), mode="json", by_alias=True, exclude_none=True)
