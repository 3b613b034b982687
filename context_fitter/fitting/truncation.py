# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Phase 2 — Group-based truncation.

Drops whole message groups, oldest first, until the conversation fits the
token budget. Groups are never split.

  - The last group (the exchange being answered) is always kept, even if
    it alone exceeds the budget.
  - With ``keep_first_user_message`` and more than two groups, the first
    group is kept as well and counted before anything else.
  - Walking backwards from the second-to-last group, groups are added
    while they fit; the first one that does not fit ends the walk, which
    yields the longest contiguous suffix within budget.
  - When anything was dropped, a user notice + assistant acknowledgement
    pair is inserted before the kept suffix so two assistant turns never
    become adjacent.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from context_fitter.fitting.grouping import identify_message_groups
from context_fitter.models import Message, MessageRole, TextPart
from context_fitter.prompts import GAP_ACKNOWLEDGEMENT, GAP_NOTICE

logger = logging.getLogger(__name__)


def make_gap_notice(dropped_count: int) -> Tuple[Message, Message]:
    """Build the user/assistant pair that marks omitted history.

    Args:
        dropped_count (int): Number of message groups that were dropped.

    Returns:
        Tuple[Message, Message]: A ``user`` notice naming the count and an
            ``assistant`` acknowledgement.
    """
    notice = Message(role=MessageRole.USER, content=GAP_NOTICE.format(dropped=dropped_count))
    ack = Message(role=MessageRole.ASSISTANT, content=[TextPart(text=GAP_ACKNOWLEDGEMENT)])
    return notice, ack


def truncate_message_groups(
    messages: List[Message],
    token_budget: int,
    keep_first_user_message: bool = False,
) -> List[Message]:
    """Drop oldest message groups until the total fits ``token_budget``.

    Args:
        messages (List[Message]): Conversation message list to truncate.
        token_budget (int): Tokens available for messages.
        keep_first_user_message (bool): Also keep the first group when
            there are more than two groups. Defaults to ``False``.

    Returns:
        List[Message]: The input list when it already fits, otherwise
            [first group if kept] + [gap notice pair if anything was
            dropped] + [kept suffix groups in order].
    """
    groups = identify_message_groups(messages)
    if not groups:
        return messages

    total_tokens = sum(g.tokens for g in groups)
    if total_tokens <= token_budget:
        return messages

    kept_tokens = groups[-1].tokens
    first_kept = len(groups) - 1

    keep_first = keep_first_user_message and len(groups) > 2
    if keep_first:
        kept_tokens += groups[0].tokens

    stop = 1 if keep_first else 0
    for i in range(len(groups) - 2, stop - 1, -1):
        if kept_tokens + groups[i].tokens > token_budget:
            break
        kept_tokens += groups[i].tokens
        first_kept = i

    result: List[Message] = []
    if keep_first and first_kept > 0:
        result.extend(groups[0].slice(messages))

    dropped = first_kept - 1 if keep_first else first_kept
    if dropped > 0:
        result.extend(make_gap_notice(dropped))

    for group in groups[first_kept:]:
        result.extend(group.slice(messages))

    logger.info(
        "Truncated %d of %d message groups: ~%d -> ~%d tokens (budget %d)",
        dropped,
        len(groups),
        total_tokens,
        kept_tokens,
        token_budget,
    )
    return result
