"""Gemini streaming helpers.

``streamGenerateContent`` bodies carry one JSON object per line, with or
without a ``data:`` prefix depending on the requested encoding. Lines that do
not start with ``{`` (array brackets, separators) are skipped and there is no
terminal sentinel: the stream ends when the body ends.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from ..base.streaming import iter_json_lines


def iter_stream_payloads(lines: Iterable[str]) -> Iterator[str]:
    """Yield the JSON chunk payloads of a streamed body."""
    return iter_json_lines(lines)


__all__ = ["iter_stream_payloads"]
