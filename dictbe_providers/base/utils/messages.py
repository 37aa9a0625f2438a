"""Message helpers shared across providers.

This module provides small utilities that normalize chat message sequences
for downstream provider adapters. Helpers here must be side-effect free
and operate on provider-agnostic DTOs only.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..models import Message


def split_system_message(messages: Sequence[Message]) -> Tuple[Optional[str], List[Message]]:
    """Separate a leading system message from the rest of the conversation.

    Summary
    - Only the *first* message is considered. When its role is ``system`` its
      content is returned as the system instruction and the remaining messages
      are returned in their original order.
    - Otherwise ``(None, messages)`` is returned with every message kept,
      including any later system messages.

    Parameters
    - messages: Ordered sequence of ``Message`` DTOs.

    Returns
    - Tuple[Optional[str], List[Message]]: ``(system_text_or_None, rest)``.

    Failure modes
    - None; the function is pure and never raises for well-formed DTOs.
    """
    items = list(messages)
    if items and items[0].role == "system":
        return items[0].content, items[1:]
    return None, items


def build_messages(system: Optional[str], prompt: str) -> List[Message]:
    """Return ``[system?, user]`` for a single-prompt exchange.

    The system message is included only when ``system`` is non-blank.
    """
    out: List[Message] = []
    if system and system.strip():
        out.append(Message(role="system", content=system))
    out.append(Message(role="user", content=prompt))
    return out


__all__ = ["split_system_message", "build_messages"]
