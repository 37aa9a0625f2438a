"""
ChatRequest DTO for provider-agnostic chat invocations.

Adapters map this normalized request shape to their wire schema. Message order
is the conversation order and is preserved end-to-end.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .message import Message


@dataclass
class ChatRequest:
    """Normalized chat request sent to provider adapters.

    Attributes:
        messages: Ordered list of chat `Message` instances. When the first
            message has role ``"system"`` every adapter lifts it into the
            provider's native system instruction slot.
        model: Optional per-call model override. Blank values (after trimming)
            fall back to the adapter's default model.
    """

    messages: List[Message] = field(default_factory=list)
    model: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
        }


__all__ = [
    "ChatRequest",
]
