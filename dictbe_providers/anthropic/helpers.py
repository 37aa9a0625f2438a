"""Anthropic Messages API helpers.

Purpose:
- Provide reusable, side-effect-free utilities for the Anthropic provider
  (endpoint and payload building, blocking response decoding) to keep
  `client.py` lean.

Wire notes:
- A leading system message moves to the top-level ``system`` field; the field
  is omitted when there is none.
- ``max_tokens`` is mandatory on this protocol and always sent.
- Response text is the concatenation of every ``text`` content block; other
  block types are ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from ..base.models import ChatRequest, ChatResponse
from ..base.utils.endpoints import build_versioned_endpoint
from ..base.utils.messages import split_system_message

MESSAGES_PATH = "/messages"


class _ContentBlock(BaseModel):
    type: Optional[str] = None
    text: Optional[str] = None


class _MessageResponse(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    content: Optional[List[_ContentBlock]] = None
    stop_reason: Optional[str] = None


def build_messages_endpoint(base_url: str) -> str:
    """Return the Messages API URL for ``base_url``."""
    return build_versioned_endpoint(base_url, MESSAGES_PATH)


def build_params(request: ChatRequest, model: str, max_tokens: int, stream: bool) -> Dict[str, Any]:
    """Build the ``/messages`` request body.

    Parameters:
        request: Normalized chat request object.
        model: Resolved model name.
        max_tokens: Output token limit (already defaulted by the client).
        stream: Whether ``"stream": true`` is sent.
    """
    system, rest = split_system_message(request.messages)
    params: Dict[str, Any] = {
        "model": model,
        "messages": [m.to_dict() for m in rest],
        "max_tokens": max_tokens,
    }
    if system:
        params["system"] = system
    if stream:
        params["stream"] = True
    return params


def flatten_content(blocks: Optional[List[_ContentBlock]]) -> str:
    return "".join(b.text or "" for b in blocks or [] if b.type == "text")


def decode_message_response(data: Any) -> Optional[ChatResponse]:
    """Map a blocking ``message`` body; ``None`` when it has no content blocks."""
    body = _MessageResponse.model_validate(data)
    if not body.content:
        return None
    return ChatResponse(
        content=flatten_content(body.content),
        model=body.model or "",
        finish_reason=body.stop_reason or "",
    )


__all__ = [
    "MESSAGES_PATH",
    "build_messages_endpoint",
    "build_params",
    "flatten_content",
    "decode_message_response",
]
