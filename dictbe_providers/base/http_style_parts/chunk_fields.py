"""Per-chunk decode result shared by the stream decoders."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkFields:
    """Normalized fields carried by one decoded stream chunk.

    Empty strings mean "not present in this chunk"; the provider base applies
    the sticky rules before emitting a ``ChatStreamEvent``.
    """

    model: str = ""
    finish_reason: str = ""
    delta: str = ""


__all__ = ["ChunkFields"]
