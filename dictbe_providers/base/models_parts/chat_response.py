"""
ChatResponse DTO representing normalized provider responses.

Streaming calls produce the same shape: ``content`` is the concatenation of all
emitted deltas while ``model`` and ``finish_reason`` hold the last non-empty
values observed across chunks.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ChatResponse:
    """Provider-agnostic response from an LLM chat invocation.

    Attributes:
        content: Full completion text.
        model: Model identifier resolved by the provider.
        finish_reason: Provider-reported terminal state; opaque to this layer.
    """

    content: str = ""
    model: str = ""
    finish_reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the response."""
        return asdict(self)


__all__ = [
    "ChatResponse",
]
