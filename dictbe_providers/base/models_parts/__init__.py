"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`dictbe_providers.base.models_parts` if needed, while `dictbe_providers.base.models`
remains the primary stable import path.
"""

from .message import Message, Role, ROLES
from .chat_request import ChatRequest
from .chat_response import ChatResponse

__all__ = ["Message", "Role", "ROLES", "ChatRequest", "ChatResponse"]
