"""Streaming package for provider layer.

Exposes streaming primitives, line framing and metrics under a single
namespace to keep the base package organized.
"""

from .streaming import ChatStreamEvent, StreamAccumulator, StreamHandler, accumulate_events
from .streaming_metrics import StreamMetrics
from .line_reader import LineTooLongError, iter_bounded_lines
from .sse import iter_json_lines, iter_sse_data

__all__ = [
    "ChatStreamEvent",
    "StreamAccumulator",
    "StreamHandler",
    "accumulate_events",
    "StreamMetrics",
    "LineTooLongError",
    "iter_bounded_lines",
    "iter_json_lines",
    "iter_sse_data",
]
