"""ChatClient Protocol (single-class module).

Defines the capability contract every provider adapter satisfies. Callers
depend only on this Protocol, never on a concrete adapter or its wire format.
"""

from __future__ import annotations

from typing import Iterator, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import ChatRequest, ChatResponse
from ..streaming import ChatStreamEvent, StreamHandler


@runtime_checkable
class ChatClient(Protocol):
    """Provider-agnostic chat client.

    Implementations map ``ChatRequest`` to their wire schema and normalize
    results to ``ChatResponse``; provider field names never leak upstream.
    Every failure is raised as ``ProviderError`` except handler failures,
    which propagate unchanged. No operation retries.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g., ``"openai"`` or ``"gemini"``."""
        ...

    def chat(self, request: ChatRequest, *, cancel: Optional[CancellationToken] = None) -> ChatResponse:
        """Perform exactly one blocking request/response cycle."""
        ...

    def chat_stream(
        self,
        request: ChatRequest,
        handler: Optional[StreamHandler] = None,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ChatResponse:
        """Stream a completion, calling ``handler`` once per non-empty delta.

        Returns the accumulated response once the stream ends.
        """
        ...

    def stream_events(
        self,
        request: ChatRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> Iterator[ChatStreamEvent]:
        """Lazily yield one event per decoded chunk (finite, not restartable)."""
        ...
