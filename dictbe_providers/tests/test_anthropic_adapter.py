"""Anthropic Messages adapter against a mock HTTP server."""

from __future__ import annotations

import pytest

from dictbe_providers.anthropic import AnthropicProvider
from dictbe_providers.base.constants import ANTHROPIC_DEFAULT_MAX_TOKENS, ANTHROPIC_DEFAULT_VERSION
from dictbe_providers.base.errors import ErrorCode, ProviderError
from dictbe_providers.base.models import ChatRequest, ChatResponse, Message

from .utils import DeltaRecorder, anthropic_stream, json_response, sse_lines, stream_response


def _provider(srv, **kwargs) -> AnthropicProvider:
    opts = {"api_key": "ak-test", "base_url": "https://api.example.com", "model": "claude-default"}
    opts.update(kwargs)
    return AnthropicProvider(http_client=srv.client, **opts)


def _message(*blocks, model="claude-test", stop="end_turn") -> dict:
    return {"id": "msg_1", "type": "message", "role": "assistant", "model": model, "content": list(blocks), "stop_reason": stop}


def test_blocking_chat_headers_and_payload(server):
    srv = server(json_response(_message({"type": "text", "text": "hello"})))
    resp = _provider(srv).chat(ChatRequest(messages=[Message("system", "be terse"), Message("user", "hi")]))

    assert resp == ChatResponse(content="hello", model="claude-test", finish_reason="end_turn")
    req = srv.last
    assert str(req.url) == "https://api.example.com/v1/messages"
    assert req.headers["x-api-key"] == "ak-test"
    assert req.headers["anthropic-version"] == ANTHROPIC_DEFAULT_VERSION
    assert "authorization" not in req.headers
    assert srv.last_json() == {
        "model": "claude-default",
        "messages": [{"role": "user", "content": "hi"}],
        "max_tokens": ANTHROPIC_DEFAULT_MAX_TOKENS,
        "system": "be terse",
    }


def test_system_field_omitted_without_leading_system(server):
    srv = server(json_response(_message({"type": "text", "text": "x"})))
    msgs = [Message("user", "hi"), Message("system", "late"), Message("assistant", "ok")]
    _provider(srv).chat(ChatRequest(messages=msgs))
    body = srv.last_json()
    assert "system" not in body
    assert body["messages"] == [m.to_dict() for m in msgs]


@pytest.mark.parametrize("max_tokens, expected", [(None, ANTHROPIC_DEFAULT_MAX_TOKENS), (0, ANTHROPIC_DEFAULT_MAX_TOKENS), (-5, ANTHROPIC_DEFAULT_MAX_TOKENS), (256, 256)])
def test_max_tokens_defaulting(server, max_tokens, expected):
    srv = server(json_response(_message({"type": "text", "text": "x"})))
    _provider(srv, max_tokens=max_tokens).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert srv.last_json()["max_tokens"] == expected


def test_custom_version_header(server):
    srv = server(json_response(_message({"type": "text", "text": "x"})))
    _provider(srv, version=" 2024-01-01 ").chat(ChatRequest(messages=[Message("user", "hi")]))
    assert srv.last.headers["anthropic-version"] == "2024-01-01"


def test_content_blocks_are_flattened_text_only(server):
    srv = server(
        json_response(
            _message(
                {"type": "text", "text": "hel"},
                {"type": "tool_use", "id": "t1", "name": "lookup", "input": {}},
                {"type": "text", "text": "lo"},
            )
        )
    )
    resp = _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert resp.content == "hello"


def test_empty_content_is_protocol_error(server):
    srv = server(json_response(_message()))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.code is ErrorCode.PROTOCOL
    assert ei.value.message == "anthropic response has no content"


def test_error_body_with_2xx_status(server):
    srv = server(json_response({"type": "error", "error": {"type": "rate_limit_error", "message": "rate limited"}}))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.code is ErrorCode.PROVIDER
    assert "rate limited" in ei.value.message


def test_streaming_scenario(server):
    srv = server(stream_response(anthropic_stream("he", "llo")))
    rec = DeltaRecorder()
    resp = _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]), rec)

    assert "".join(rec.deltas) == "hello"
    assert rec.deltas == ["he", "llo"]
    assert resp == ChatResponse(content="hello", model="claude-test", finish_reason="end_turn")
    body = srv.last_json()
    assert body["stream"] is True
    assert srv.last.headers["Accept"] == "text/event-stream"


def test_stream_top_level_stop_reason_fallback(server):
    lines = sse_lines(
        {"type": "message_start", "message": {"model": "claude-test"}},
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "x"}},
        {"type": "message_delta", "stop_reason": "max_tokens"},
        done=False,
    )
    srv = server(stream_response(lines))
    resp = _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]))
    assert resp.finish_reason == "max_tokens"


def test_stream_error_event_is_fatal(server):
    lines = anthropic_stream("he")[:6] + sse_lines(
        {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}},
        done=False,
    ) + anthropic_stream("never")
    srv = server(stream_response(lines))
    rec = DeltaRecorder()
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]), rec)
    assert ei.value.code is ErrorCode.PROVIDER
    assert ei.value.message == "anthropic error: Overloaded"
    assert "never" not in rec.deltas


def test_stream_done_sentinel_ends_stream(server):
    lines = sse_lines({"type": "content_block_delta", "delta": {"text": "a"}}) + sse_lines(
        {"type": "content_block_delta", "delta": {"text": "b"}}, done=False
    )
    srv = server(stream_response(lines))
    resp = _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]))
    assert resp.content == "a"


def test_non_2xx_stream_error(server):
    srv = server(json_response({"type": "error", "error": {"message": "invalid x-api-key"}}, status=401))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.message == "anthropic request failed: invalid x-api-key (status 401)"
