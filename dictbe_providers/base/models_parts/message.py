"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. The role vocabulary is closed: adapters translate it to their own wire
vocabulary (Gemini says ``"model"`` for ``"assistant"``) and never see anything
outside of it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple


# Message roles used across providers.
Role = Literal["system", "user", "assistant"]

ROLES: Tuple[str, ...] = ("system", "user", "assistant")


@dataclass(frozen=True)
class Message:
    """A chat message used by provider-agnostic DTOs.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``).
        content: Plain text content of the message.

    Raises:
        ValueError: When ``role`` is outside the closed role vocabulary. An
            unknown role is a caller error, not something adapters recover from.
    """

    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"unsupported message role: {self.role!r}")

    def to_dict(self) -> dict:
        """Return the ``{"role", "content"}`` mapping shared by most wire formats."""
        return {"role": self.role, "content": self.content}


__all__ = [
    "Message",
    "Role",
    "ROLES",
]
