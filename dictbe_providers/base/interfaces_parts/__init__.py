"""Interfaces (Protocols) split into single-class modules.

This package provides one Protocol per file while allowing
``dictbe_providers.base.interfaces`` to re-export a stable API.
"""

from .chat_client import ChatClient
from .supports_streaming import SupportsStreaming
from .has_default_model import HasDefaultModel

__all__ = [
    "ChatClient",
    "SupportsStreaming",
    "HasDefaultModel",
]
