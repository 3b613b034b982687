# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Context Fitter - fit chat conversations into an LLM context window."""

from context_fitter.fitting import ContextWindowOptions, fit_messages_to_context_window
from context_fitter.models import Message, MessageRole, dump_messages, load_messages

__all__ = [
    "ContextWindowOptions",
    "Message",
    "MessageRole",
    "dump_messages",
    "fit_messages_to_context_window",
    "load_messages",
]
