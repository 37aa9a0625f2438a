"""Shared testing utilities for provider adapter tests.

Purpose:
    Build canned provider bodies (JSON documents, event streams) and record
    the requests an adapter sends, so individual test modules stay focused on
    protocol scenarios.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable, List, Optional

import httpx


class RecordingServer:
    """Mock provider endpoint that remembers every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: List[httpx.Request] = []
        self.client = httpx.Client(transport=httpx.MockTransport(self._dispatch))

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def json_response(body: Any, status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Handler returning ``body`` encoded as JSON."""

    def _handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body)

    return _handler


def raw_response(content: bytes, status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def _handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=content)

    return _handler


def sse_lines(*payloads: Any, done: bool = True, event: Optional[str] = None) -> List[str]:
    """Render payloads as ``data:`` lines (dicts are JSON encoded)."""

    lines: List[str] = []
    for p in payloads:
        if event:
            lines.append(f"event: {event}")
        lines.append("data: " + (p if isinstance(p, str) else json.dumps(p)))
        lines.append("")
    if done:
        lines.append("data: [DONE]")
    return lines


def stream_response(lines: Iterable[str], *, chunk_size: Optional[int] = None) -> Callable[[httpx.Request], httpx.Response]:
    """Handler streaming ``lines`` joined by ``\\n``, optionally re-chunked."""

    def _handler(_: httpx.Request) -> httpx.Response:
        body = ("\n".join(lines) + "\n").encode("utf-8")
        if chunk_size is None:
            return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})
        chunks = [body[i : i + chunk_size] for i in range(0, len(body), chunk_size)]
        return httpx.Response(200, content=iter(chunks), headers={"content-type": "text/event-stream"})

    return _handler


def openai_chunk(content: str = "", *, model: str = "gpt-test", finish: Optional[str] = None) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "model": model,
        "choices": [{"index": 0, "delta": {"content": content}, "finish_reason": finish}],
    }


def anthropic_stream(*texts: str, model: str = "claude-test", stop: str = "end_turn") -> List[str]:
    """Typical Messages API event stream (``event:`` + ``data:`` lines)."""

    events: List[dict] = [{"type": "message_start", "message": {"id": "msg_1", "model": model, "content": []}}]
    events.append({"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}})
    events.append({"type": "ping"})
    events.extend(
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": t}} for t in texts
    )
    events.append({"type": "content_block_stop", "index": 0})
    events.append({"type": "message_delta", "delta": {"stop_reason": stop}, "usage": {"output_tokens": 2}})
    events.append({"type": "message_stop"})
    lines: List[str] = []
    for ev in events:
        lines.append(f"event: {ev['type']}")
        lines.append("data: " + json.dumps(ev))
        lines.append("")
    return lines


def gemini_chunk(text: str = "", *, model: str = "gemini-test", finish: Optional[str] = None) -> dict:
    candidate: dict = {"content": {"role": "model", "parts": [{"text": text}]}}
    if finish:
        candidate["finishReason"] = finish
    return {"candidates": [candidate], "modelVersion": model}


class DeltaRecorder:
    """Stream handler collecting deltas; optionally raises on the Nth delta."""

    def __init__(self, fail_on: Optional[int] = None, exc: Optional[BaseException] = None) -> None:
        self.deltas: List[str] = []
        self._fail_on = fail_on
        self._exc = exc or RuntimeError("handler failed")

    def __call__(self, delta: str) -> None:
        self.deltas.append(delta)
        if self._fail_on is not None and len(self.deltas) == self._fail_on:
            raise self._exc


__all__ = [
    "RecordingServer",
    "json_response",
    "raw_response",
    "sse_lines",
    "stream_response",
    "openai_chunk",
    "anthropic_stream",
    "gemini_chunk",
    "DeltaRecorder",
]
