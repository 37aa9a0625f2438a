"""Convenience helpers for simple provider interactions.

This module provides a small utility to send a plain text prompt through a
provider without manually constructing a full ``ChatRequest``.
"""
from __future__ import annotations

from typing import Optional

from ..cancellation import CancellationToken
from ..interfaces import ChatClient
from ..models import ChatRequest, ChatResponse
from ..streaming import StreamHandler
from .messages import build_messages


def simple(
    client: ChatClient,
    text: str,
    *,
    system: Optional[str] = None,
    model: Optional[str] = None,
    handler: Optional[StreamHandler] = None,
    stream: bool = False,
    cancel: Optional[CancellationToken] = None,
) -> ChatResponse:
    """Send a plain text prompt to a provider with minimal ceremony.

    This helper builds a ``ChatRequest`` holding an optional ``system``
    message followed by one ``user`` message with ``text``. With
    ``stream=True`` (or when a ``handler`` is given) the call goes through
    ``chat_stream`` and ``handler`` receives each delta; otherwise ``chat`` is
    used.

    Failure modes:
        Errors from the client propagate unchanged (``ProviderError`` or the
        handler's own exception).
    """
    request = ChatRequest(messages=build_messages(system, text), model=model)
    if stream or handler is not None:
        return client.chat_stream(request, handler, cancel=cancel)
    return client.chat(request, cancel=cancel)


__all__ = ["simple"]
