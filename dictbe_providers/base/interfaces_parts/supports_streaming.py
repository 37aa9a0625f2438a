"""SupportsStreaming Protocol (single-class module).

Capability marker for providers that can stream incremental deltas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SupportsStreaming(Protocol):
    """Capability marker for providers that can stream incremental deltas."""

    def supports_streaming(self) -> bool:  # pragma: no cover - trivial
        """Return True if the provider can stream chat responses."""
        ...
