"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports Protocols split into single-class modules under
``dictbe_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import (
    ChatClient,
    HasDefaultModel,
    SupportsStreaming,
)

__all__ = [
    "ChatClient",
    "SupportsStreaming",
    "HasDefaultModel",
]
