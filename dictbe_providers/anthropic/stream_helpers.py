"""Anthropic streaming helpers.

Purpose:
- Hold streaming-specific decoding to keep `helpers.py` focused on the
  blocking path.

Event mapping (``data:`` payloads of the event stream):
- ``message_start``: ``message.model`` sets the model.
- ``content_block_delta``: ``delta.text`` carries the text delta.
- ``message_delta``: ``delta.stop_reason`` (or a top-level ``stop_reason``)
  sets the finish reason.
- ``error``: fatal; the error message is surfaced verbatim.
Every other event type (``ping``, ``content_block_start`` ...) decodes to an
empty chunk.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from ..base.http_style_parts import ChunkFields


class _EventMessage(BaseModel):
    model: Optional[str] = None


class _EventDelta(BaseModel):
    type: Optional[str] = None
    text: Optional[str] = None
    stop_reason: Optional[str] = None


class _EventError(BaseModel):
    type: Optional[str] = None
    message: Optional[str] = None


class _StreamEvent(BaseModel):
    type: Optional[str] = None
    message: Optional[_EventMessage] = None
    delta: Optional[_EventDelta] = None
    stop_reason: Optional[str] = None
    error: Optional[_EventError] = None


def stream_event_error(data: Any) -> Optional[str]:
    """Return the error message of an ``error`` event, else ``None``."""
    event = _StreamEvent.model_validate(data)
    if event.type == "error" and event.error is not None:
        return event.error.message or ""
    return None


def translate_stream_event(data: Any) -> ChunkFields:
    """Map one decoded stream event to ``ChunkFields``."""
    event = _StreamEvent.model_validate(data)
    if event.type == "message_start" and event.message is not None:
        return ChunkFields(model=event.message.model or "")
    if event.type == "message_delta":
        stop = (event.delta.stop_reason if event.delta is not None else None) or event.stop_reason
        return ChunkFields(finish_reason=stop or "")
    if event.type == "content_block_delta" and event.delta is not None:
        return ChunkFields(delta=event.delta.text or "")
    return ChunkFields()


__all__ = ["stream_event_error", "translate_stream_event"]
