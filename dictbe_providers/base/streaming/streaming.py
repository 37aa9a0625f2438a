"""Streaming primitives for provider layer.

Keeps streaming concerns separate from core request/response DTOs.

A provider stream decoder turns each wire chunk into one ``ChatStreamEvent``.
Events carry the *sticky* model and finish reason observed so far, so the last
event of a stream always holds the final values. ``StreamAccumulator`` folds
events into the blocking-equivalent ``ChatResponse``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from ..models import ChatResponse

# Caller-supplied delta callback. It signals failure by raising.
StreamHandler = Callable[[str], None]


@dataclass(frozen=True)
class ChatStreamEvent:
    """Represents one decoded chunk from a streaming provider.

    Fields:
      provider: canonical provider name
      model: last non-empty model id observed so far (may be empty)
      delta: textual delta carried by this chunk (empty for control events)
      finish_reason: last non-empty finish reason observed so far (may be empty)
      raw: decoded provider chunk (optional for debugging)
    """

    provider: str
    model: str
    delta: str
    finish_reason: str = ""
    raw: Any | None = None

    def has_delta(self) -> bool:
        return bool(self.delta)


class StreamAccumulator:
    """Accumulate stream events into a :class:`ChatResponse`.

    - Concatenates non-empty deltas in arrival order.
    - Keeps the last non-empty model and finish reason.
    - Forwards every non-empty delta to ``handler`` (when given) after it was
      appended. A handler exception propagates unchanged to the caller.
    """

    def __init__(self, handler: Optional[StreamHandler] = None) -> None:
        self._handler = handler
        self._parts: List[str] = []
        self.model = ""
        self.finish_reason = ""

    def add(self, event: ChatStreamEvent) -> None:
        if event.model:
            self.model = event.model
        if event.finish_reason:
            self.finish_reason = event.finish_reason
        if not event.delta:
            return
        self._parts.append(event.delta)
        if self._handler is not None:
            self._handler(event.delta)

    @property
    def content(self) -> str:
        return "".join(self._parts)

    def response(self) -> ChatResponse:
        return ChatResponse(content=self.content, model=self.model, finish_reason=self.finish_reason)


def accumulate_events(
    events: Iterable[ChatStreamEvent],
    handler: Optional[StreamHandler] = None,
) -> ChatResponse:
    """Consume ``events`` and return the accumulated :class:`ChatResponse`.

    When ``handler`` raises, iteration stops immediately: the exception
    propagates and ``events`` (if it is a generator) is closed, releasing the
    underlying connection. No later event is pulled.
    """
    acc = StreamAccumulator(handler)
    iterator = iter(events)
    try:
        for event in iterator:
            acc.add(event)
    finally:
        close = getattr(iterator, "close", None)
        if close is not None:
            close()
    return acc.response()


__all__ = [
    "ChatStreamEvent",
    "StreamHandler",
    "StreamAccumulator",
    "accumulate_events",
]
