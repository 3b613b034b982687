# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Message grouping for group-based truncation.

Each group starts at a ``user`` or ``system`` message and runs through the
assistant/tool messages that follow it, so tool calls stay with their
results and dropping whole groups keeps role alternation intact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from context_fitter.fitting.tokens import estimate_message_tokens
from context_fitter.models import Message, MessageRole

_ANCHOR_ROLES = frozenset({MessageRole.USER, MessageRole.SYSTEM})


@dataclass
class MessageGroup:
    """Contiguous span of messages, both ends inclusive.

    Attributes:
        start_index (int): Index of the first message in the group.
        end_index (int): Index of the last message in the group.
        tokens (int): Estimated token count of all messages in the group.
    """

    start_index: int
    end_index: int
    tokens: int = 0

    def slice(self, messages: List[Message]) -> List[Message]:
        """Messages covered by this group."""
        return messages[self.start_index : self.end_index + 1]


def identify_message_groups(messages: List[Message]) -> List[MessageGroup]:
    """Partition messages into user/system-anchored groups.

    Assistant/tool messages that precede any user message form the first
    group on their own.

    Args:
        messages (List[Message]): Conversation message list to group.

    Returns:
        List[MessageGroup]: Groups in input order, covering every index
            exactly once.
    """
    groups: List[MessageGroup] = []
    current: Optional[MessageGroup] = None

    for i, msg in enumerate(messages):
        if msg.role in _ANCHOR_ROLES or current is None:
            if current is not None:
                groups.append(current)
            current = MessageGroup(start_index=i, end_index=i)
        current.end_index = i
        current.tokens += estimate_message_tokens(msg)

    if current is not None:
        groups.append(current)
    return groups
