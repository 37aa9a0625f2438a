"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``dictbe_providers.base.models_parts`` to keep a single stable import path.
"""

from .models_parts.message import Message, Role, ROLES
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse

__all__ = [
    "Message",
    "Role",
    "ROLES",
    "ChatRequest",
    "ChatResponse",
]
