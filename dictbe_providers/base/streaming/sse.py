"""Event-stream framing helpers.

Turns the lines of a streamed body into JSON payload strings following one of
two framing policies:

- strict (OpenAI-style, Anthropic-style): only ``data:`` lines carry payloads,
  everything else (``event:`` lines, comments, keep-alives) is skipped, and a
  ``[DONE]`` payload ends the stream.
- lenient (Gemini-style): the ``data:`` prefix is optional and anything that
  does not start with ``{`` is skipped (array brackets, separators). There is
  no sentinel; the stream ends when the body ends.
"""
from __future__ import annotations

from typing import Iterable, Iterator

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL


def iter_sse_data(lines: Iterable[str]) -> Iterator[str]:
    """Yield payloads of ``data:`` lines until the ``[DONE]`` sentinel."""
    for line in lines:
        line = line.strip()
        if not line or not line.startswith(SSE_DATA_PREFIX):
            continue
        data = line[len(SSE_DATA_PREFIX):].strip()
        if data == SSE_DONE_SENTINEL:
            return
        yield data


def iter_json_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield JSON object payloads, accepting an optional ``data:`` prefix."""
    for line in lines:
        line = line.strip()
        if not line:
            continue
        data = line
        if line.startswith(SSE_DATA_PREFIX):
            data = line[len(SSE_DATA_PREFIX):].strip()
        if not data.startswith("{"):
            continue
        yield data


__all__ = ["iter_sse_data", "iter_json_lines"]
