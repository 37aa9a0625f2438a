"""OpenAI Chat Completions wire helpers.

Purpose:
- Build the endpoint and request payload for ``/chat/completions``.
- Decode blocking responses and stream chunks into provider-neutral values.

Wire DTOs are private to this adapter; nothing here leaks OpenAI field names
beyond ``ChatResponse``/``ChunkFields``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from ..base.http_style_parts import ChunkFields
from ..base.models import ChatRequest, ChatResponse
from ..base.utils.endpoints import build_versioned_endpoint

CHAT_COMPLETIONS_PATH = "/chat/completions"


class _Message(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class _Choice(BaseModel):
    message: Optional[_Message] = None
    delta: Optional[_Message] = None
    finish_reason: Optional[str] = None


class _ChatCompletion(BaseModel):
    """Shared shape of ``chat.completion`` bodies and ``chat.completion.chunk`` events."""

    id: Optional[str] = None
    model: Optional[str] = None
    choices: Optional[List[_Choice]] = None


def _text(message: Optional[_Message]) -> str:
    return (message.content or "") if message is not None else ""


def build_chat_endpoint(base_url: str) -> str:
    """Return the Chat Completions URL for ``base_url``."""
    return build_versioned_endpoint(base_url, CHAT_COMPLETIONS_PATH)


def build_chat_payload(request: ChatRequest, model: str, stream: bool) -> Dict[str, Any]:
    """Messages pass through unchanged, system message included, in order."""
    payload: Dict[str, Any] = {
        "model": model,
        "messages": [m.to_dict() for m in request.messages],
    }
    if stream:
        payload["stream"] = True
    return payload


def decode_chat_response(data: Any) -> Optional[ChatResponse]:
    """Map a blocking response body; ``None`` when it holds no choices."""
    body = _ChatCompletion.model_validate(data)
    if not body.choices:
        return None
    first = body.choices[0]
    return ChatResponse(
        content=_text(first.message),
        model=body.model or "",
        finish_reason=first.finish_reason or "",
    )


def decode_chat_chunk(data: Any) -> ChunkFields:
    """Map one ``chat.completion.chunk``; only the first choice is read."""
    chunk = _ChatCompletion.model_validate(data)
    if not chunk.choices:
        return ChunkFields(model=chunk.model or "")
    first = chunk.choices[0]
    return ChunkFields(
        model=chunk.model or "",
        finish_reason=first.finish_reason or "",
        delta=_text(first.delta),
    )


__all__ = [
    "CHAT_COMPLETIONS_PATH",
    "build_chat_endpoint",
    "build_chat_payload",
    "decode_chat_response",
    "decode_chat_chunk",
]
