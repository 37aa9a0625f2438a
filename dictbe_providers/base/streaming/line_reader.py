"""Bounded line splitting for streamed response bodies.

Event-stream payloads may put a whole JSON document on a single line, so lines
are buffered up to ``STREAM_LINE_BUFFER_MAX`` bytes. Transport chunks are
consumed as they arrive.
"""
from __future__ import annotations

from typing import Iterable, Iterator

from ..constants import STREAM_LINE_BUFFER_MAX


class LineTooLongError(ValueError):
    """Raised when a single line exceeds the configured maximum length."""


def iter_bounded_lines(
    chunks: Iterable[bytes],
    *,
    max_line_bytes: int = STREAM_LINE_BUFFER_MAX,
) -> Iterator[str]:
    """Yield decoded text lines from an iterable of byte chunks.

    Lines are split on ``\\n``; a trailing ``\\r`` is dropped. A final line
    without a terminating newline is still yielded. Bytes are decoded as UTF-8
    per line, so multi-byte characters split across chunks are handled;
    invalid sequences become U+FFFD.

    Raises:
        LineTooLongError: when a line grows beyond ``max_line_bytes``.
    """
    buf = bytearray()
    for chunk in chunks:
        if not chunk:
            continue
        buf.extend(chunk)
        start = 0
        while True:
            idx = buf.find(b"\n", start)
            if idx < 0:
                break
            if idx - start > max_line_bytes:
                raise LineTooLongError(f"line exceeds {max_line_bytes} bytes")
            yield _decode_line(buf[start:idx])
            start = idx + 1
        if start:
            del buf[:start]
        if len(buf) > max_line_bytes:
            raise LineTooLongError(f"line exceeds {max_line_bytes} bytes")
    if buf:
        yield _decode_line(buf)


def _decode_line(raw: bytes | bytearray) -> str:
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return bytes(raw).decode("utf-8", errors="replace")


__all__ = ["LineTooLongError", "iter_bounded_lines"]
