# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Fit a conversation into the provider's context window.

  1. budget = context_window - max_output - safety_buffer - system_prompt
  2. Phase 1    shrink oversized tool results
  3. Phase 1.5  repair tool call / tool result pairing
  4. return if within budget
  5. Phase 2    drop oldest message groups, then repair pairing again
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from context_fitter.fitting.repair import repair_tool_call_result_pairing
from context_fitter.fitting.settings import ContextWindowOptions
from context_fitter.fitting.shrinking import shrink_tool_results
from context_fitter.fitting.tokens import estimate_messages_tokens, estimate_tokens
from context_fitter.fitting.truncation import truncate_message_groups
from context_fitter.models import Message

logger = logging.getLogger(__name__)


def fit_messages_to_context_window(
    messages: Sequence[Message],
    system_prompt: str,
    options: Optional[ContextWindowOptions] = None,
) -> List[Message]:
    """Return a message list that fits the context window and is well-paired.

    The result always satisfies the tool call / tool result pairing rule.
    It fits the budget on a best-effort basis: the most recent group is
    kept even when it alone is larger than the budget.

    Args:
        messages (Sequence[Message]): Full conversation, oldest first. Not
            mutated.
        system_prompt (str): The system prompt that will accompany the
            messages; its estimated size is subtracted from the budget.
        options (Optional[ContextWindowOptions]): Budget configuration.
            Defaults to ``ContextWindowOptions()``.

    Returns:
        List[Message]: The fitted conversation.
    """
    options = options or ContextWindowOptions()
    system_prompt_tokens = estimate_tokens(system_prompt)
    token_budget = options.token_budget(system_prompt)
    logger.info(
        "Budget calculation: %d - %d - %d - %d (system) = %d tokens for messages",
        options.context_window_tokens,
        options.max_output_tokens,
        options.safety_buffer_tokens,
        system_prompt_tokens,
        token_budget,
    )

    shrunk, _ = shrink_tool_results(list(messages), options.tool_results)
    paired = repair_tool_call_result_pairing(shrunk).messages

    total = estimate_messages_tokens(paired)
    logger.info(
        "After tool result shrinking and pairing: ~%d tokens across %d messages",
        total,
        len(paired),
    )
    if total <= token_budget:
        return paired

    logger.info("Messages exceed budget by ~%d tokens, truncating", total - token_budget)
    truncated = truncate_message_groups(paired, token_budget, options.keep_first_user_message)
    fitted = repair_tool_call_result_pairing(truncated).messages

    logger.info(
        "After group truncation: ~%d tokens across %d messages",
        estimate_messages_tokens(fitted),
        len(fitted),
    )
    return fitted
