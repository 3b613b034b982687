# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Application configuration using pydantic-settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed defaults for the context window pipeline.

    The pipeline itself never reads these; callers convert them with
    ``ContextWindowOptions.from_settings()`` and pass the result explicitly.

    Attributes:
        CONTEXT_WINDOW_TOKENS (int): Total tokens the provider accepts per
            request, input plus output.
        MAX_OUTPUT_TOKENS (int): Tokens reserved for the model's reply.
        SAFETY_BUFFER_TOKENS (int): Extra headroom for estimation error.
        KEEP_FIRST_USER_MESSAGE (bool): Whether to pin the first message
            group when truncating.
        TOOL_RESULT_CHAR_LIMIT (int): Longest tool-result text kept intact.
        TOOL_RESULT_HEAD_CHARS (int): Characters kept from the start of a
            shrunk tool result.
        TOOL_RESULT_TAIL_CHARS (int): Characters kept from the end of a
            shrunk tool result.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Context window
    CONTEXT_WINDOW_TOKENS: int = 200_000
    MAX_OUTPUT_TOKENS: int = 65_536
    SAFETY_BUFFER_TOKENS: int = 4_000
    KEEP_FIRST_USER_MESSAGE: bool = False

    # Tool result shrinking
    TOOL_RESULT_CHAR_LIMIT: int = 12_000
    TOOL_RESULT_HEAD_CHARS: int = 4_000
    TOOL_RESULT_TAIL_CHARS: int = 2_000


settings = Settings()
