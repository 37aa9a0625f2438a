"""Streaming metrics data structures.

Isolated within the streaming package to keep orchestration code small and cohesive.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Collected streaming metrics for a single provider invocation.

    Attributes:
        emitted: Number of non-empty deltas delivered to the caller.
        chunks: Number of decoded chunks (including those without text).
        time_to_first_token_ms: Latency until the first non-empty delta.
        total_duration_ms: Latency until the stream finished (any outcome).
    """

    emitted: int = 0
    chunks: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    _t0: float = field(default_factory=time.perf_counter, repr=False)

    def record_chunk(self, has_delta: bool) -> None:
        self.chunks += 1
        if not has_delta:
            return
        self.emitted += 1
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = (time.perf_counter() - self._t0) * 1000.0

    def finish(self) -> "StreamMetrics":
        self.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emitted_count": self.emitted,
            "chunk_count": self.chunks,
            "time_to_first_token_ms": self.time_to_first_token_ms,
            "total_duration_ms": self.total_duration_ms,
        }


__all__ = ["StreamMetrics"]
