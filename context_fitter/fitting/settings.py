# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Context window options.

All sizes are passed explicitly; nothing in the pipeline reads module
globals, so tests can run with tiny budgets.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from context_fitter.config import Settings
from context_fitter.fitting.tokens import estimate_tokens
from context_fitter.prompts import TRUNCATION_MARKER_RESERVE


@dataclass(frozen=True)
class ToolResultLimits:
    """Head + tail shrinking of oversized tool-result text.

    Attributes:
        char_limit (int): Longest text kept intact.
        head_chars (int): Characters kept from the beginning.
        tail_chars (int): Characters kept from the end.

    Raises:
        ValueError: If head and tail do not leave room for the truncation
            marker inside ``char_limit``.
    """

    char_limit: int = 12_000
    head_chars: int = 4_000
    tail_chars: int = 2_000

    def __post_init__(self) -> None:
        if self.head_chars < 0 or self.tail_chars < 0:
            raise ValueError("head_chars and tail_chars must not be negative")
        # Leave room for the marker so a shrunk text is never shrunk again.
        if self.head_chars + self.tail_chars + TRUNCATION_MARKER_RESERVE > self.char_limit:
            raise ValueError(
                f"head_chars + tail_chars ({self.head_chars + self.tail_chars}) "
                f"must stay at least {TRUNCATION_MARKER_RESERVE} below char_limit ({self.char_limit})"
            )


@dataclass(frozen=True)
class ContextWindowOptions:
    """Budget configuration for ``fit_messages_to_context_window``.

    Attributes:
        context_window_tokens (int): Total tokens the provider accepts.
        max_output_tokens (int): Tokens reserved for the model's reply.
        safety_buffer_tokens (int): Headroom for estimation error.
        keep_first_user_message (bool): Pin the first message group when
            truncating. Only honoured when there are more than two groups.
        tool_results (ToolResultLimits): Phase 1 shrinking limits.
    """

    context_window_tokens: int = 200_000
    max_output_tokens: int = 65_536
    safety_buffer_tokens: int = 4_000
    keep_first_user_message: bool = False
    tool_results: ToolResultLimits = field(default_factory=ToolResultLimits)

    def __post_init__(self) -> None:
        for name in ("context_window_tokens", "max_output_tokens", "safety_buffer_tokens"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContextWindowOptions":
        """Build options from environment-backed settings.

        Args:
            settings (Settings): Loaded application settings.

        Returns:
            ContextWindowOptions: Options mirroring ``settings``.
        """
        return cls(
            context_window_tokens=settings.CONTEXT_WINDOW_TOKENS,
            max_output_tokens=settings.MAX_OUTPUT_TOKENS,
            safety_buffer_tokens=settings.SAFETY_BUFFER_TOKENS,
            keep_first_user_message=settings.KEEP_FIRST_USER_MESSAGE,
            tool_results=ToolResultLimits(
                char_limit=settings.TOOL_RESULT_CHAR_LIMIT,
                head_chars=settings.TOOL_RESULT_HEAD_CHARS,
                tail_chars=settings.TOOL_RESULT_TAIL_CHARS,
            ),
        )

    def token_budget(self, system_prompt: str) -> int:
        """Tokens left for conversation messages.

        = context_window - max_output - safety_buffer - system_prompt

        Args:
            system_prompt (str): The system prompt about to be sent.

        Returns:
            int: Remaining message budget. May be negative when the system
                prompt alone overflows the window.
        """
        return (
            self.context_window_tokens
            - self.max_output_tokens
            - self.safety_buffer_tokens
            - estimate_tokens(system_prompt)
        )
