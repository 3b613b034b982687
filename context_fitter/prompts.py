# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Fixed texts the pipeline writes into the conversation.

These strings are seen by the model, so they are kept short and factual.
"""

TRUNCATION_MARKER = "\n\n[...truncated {omitted} characters...]\n\n"
# Characters kept free under the shrinking limit for TRUNCATION_MARKER;
# covers the marker with a count of up to 60 digits.
TRUNCATION_MARKER_RESERVE = 100
PLACEHOLDER_TOOL_RESULT = "[Tool result from previous session]"
UNKNOWN_TOOL_NAME = "unknown"
GAP_NOTICE = (
    "[Note: {dropped} earlier message group(s) were omitted to fit within the "
    "context window. The conversation continues below.]"
)
GAP_ACKNOWLEDGEMENT = "Understood, continuing from the available context."
