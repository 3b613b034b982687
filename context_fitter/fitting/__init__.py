# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Context window fitting.

Keeps a growing conversation inside the provider's context window while
preserving the structure the provider requires:

  Phase 1   — Tool result shrinking  (shrinking.py)
      Cap each tool-result payload to head + tail of its text.

  Phase 1.5 — Pairing repair  (repair.py)
      Give every tool call a result in the following message.

  Phase 2   — Group truncation  (grouping.py, truncation.py)
      Drop whole oldest user-anchored groups until the rest fits.

Usage:

    options = ContextWindowOptions(context_window_tokens=200_000)
    messages = fit_messages_to_context_window(messages, system_prompt, options)
"""

from context_fitter.fitting.grouping import MessageGroup, identify_message_groups
from context_fitter.fitting.pipeline import fit_messages_to_context_window
from context_fitter.fitting.repair import (
    RepairReport,
    make_placeholder_result,
    repair_tool_call_result_pairing,
)
from context_fitter.fitting.settings import ContextWindowOptions, ToolResultLimits
from context_fitter.fitting.shrinking import (
    has_oversized_tool_results,
    shrink_tool_output,
    shrink_tool_results,
    truncate_text,
)
from context_fitter.fitting.tokens import (
    estimate_message_tokens,
    estimate_messages_tokens,
    estimate_tokens,
    estimate_tool_output_tokens,
    serialize,
)
from context_fitter.fitting.truncation import make_gap_notice, truncate_message_groups

__all__ = [
    "ContextWindowOptions",
    "ToolResultLimits",
    "estimate_tokens",
    "estimate_message_tokens",
    "estimate_messages_tokens",
    "estimate_tool_output_tokens",
    "serialize",
    "truncate_text",
    "shrink_tool_output",
    "shrink_tool_results",
    "has_oversized_tool_results",
    "repair_tool_call_result_pairing",
    "make_placeholder_result",
    "RepairReport",
    "MessageGroup",
    "identify_message_groups",
    "truncate_message_groups",
    "make_gap_notice",
    "fit_messages_to_context_window",
]
