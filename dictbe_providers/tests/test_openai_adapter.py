"""OpenAI Chat Completions adapter against a mock HTTP server."""

from __future__ import annotations

import json

import httpx
import pytest

from dictbe_providers.base.errors import ErrorCode, ProviderError
from dictbe_providers.base.models import ChatRequest, ChatResponse, Message
from dictbe_providers.openai import OpenAIProvider

from .utils import DeltaRecorder, json_response, openai_chunk, raw_response, sse_lines, stream_response


def _provider(srv, **kwargs) -> OpenAIProvider:
    opts = {"api_key": "sk-test", "base_url": "https://api.example.com/v1", "model": "gpt-default"}
    opts.update(kwargs)
    return OpenAIProvider(http_client=srv.client, **opts)


def _completion(content="hello", *, model="gpt-test", finish="stop") -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "model": model,
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": finish}],
    }


def test_blocking_chat_scenario(server):
    srv = server(json_response(_completion()))
    resp = _provider(srv).chat(ChatRequest(model="gpt-test", messages=[Message("user", "hi")]))

    assert resp == ChatResponse(content="hello", model="gpt-test", finish_reason="stop")
    assert str(srv.last.url) == "https://api.example.com/v1/chat/completions"
    assert srv.last.headers["Authorization"] == "Bearer sk-test"
    assert srv.last.headers["Content-Type"] == "application/json"
    assert srv.last.headers.get("Accept") != "text/event-stream"
    assert srv.last_json() == {"model": "gpt-test", "messages": [{"role": "user", "content": "hi"}]}


def test_messages_pass_through_including_system(server):
    srv = server(json_response(_completion()))
    msgs = [Message("system", "be brief"), Message("user", "hi"), Message("assistant", "yo"), Message("user", "again")]
    _provider(srv).chat(ChatRequest(messages=msgs))

    body = srv.last_json()
    assert body["messages"] == [m.to_dict() for m in msgs]
    assert body["model"] == "gpt-default"
    assert "stream" not in body


def test_blank_override_uses_default_model(server):
    srv = server(json_response(_completion()))
    _provider(srv).chat(ChatRequest(model="   ", messages=[Message("user", "hi")]))
    assert srv.last_json()["model"] == "gpt-default"


def test_zero_choices_is_protocol_error(server):
    srv = server(json_response({"id": "x", "model": "gpt-test", "choices": []}))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.code is ErrorCode.PROTOCOL
    assert "no choices" in ei.value.message


def test_error_object_in_2xx_body_is_provider_error(server):
    srv = server(json_response({"error": {"message": "rate limited", "type": "rate_limit"}}))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.code is ErrorCode.PROVIDER
    assert ei.value.message == "openai error: rate limited"
    assert "rate limited" in str(ei.value)


def test_non_2xx_with_error_message(server):
    srv = server(json_response({"error": {"message": "bad key"}}, status=401))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.code is ErrorCode.PROVIDER
    assert ei.value.http_status == 401
    assert ei.value.message == "openai request failed: bad key (status 401)"


def test_non_2xx_without_decodable_body(server):
    srv = server(raw_response(b"<html>gateway</html>", status=502))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.message == "openai request failed with status 502"


def test_malformed_body_is_decode_error(server):
    srv = server(raw_response(b"{not json"))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.code is ErrorCode.DECODE
    assert ei.value.message.startswith("decode response:")


def test_wrong_schema_is_decode_error(server):
    srv = server(json_response({"choices": "nope"}))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.code is ErrorCode.DECODE


def test_null_content_maps_to_empty_string(server):
    body = _completion()
    body["choices"][0]["message"]["content"] = None
    srv = server(json_response(body))
    resp = _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert resp.content == ""
    assert resp.finish_reason == "stop"


def test_transport_failure_is_transport_error(server):
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    srv = server(_boom)
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.code is ErrorCode.TRANSPORT
    assert ei.value.message.startswith("openai request:")
    assert isinstance(ei.value.__cause__, httpx.ConnectError)


def test_stream_accumulates_and_tracks_sticky_fields(server):
    lines = (
        sse_lines(openai_chunk("", model=""), openai_chunk("he", model="gpt-test"), done=False)
        + [": keep-alive"]
        + sse_lines(openai_chunk("llo", model=""), openai_chunk("", finish="stop", model=""))
    )
    srv = server(stream_response(lines))
    rec = DeltaRecorder()
    resp = _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]), rec)

    assert rec.deltas == ["he", "llo"]
    assert resp == ChatResponse(content="hello", model="gpt-test", finish_reason="stop")
    assert srv.last_json()["stream"] is True
    assert srv.last.headers["Accept"] == "text/event-stream"


def test_stream_stops_at_done_sentinel(server):
    lines = sse_lines(openai_chunk("a")) + ["data: " + json.dumps(openai_chunk("never"))]
    srv = server(stream_response(lines))
    resp = _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]))
    assert resp.content == "a"


def test_stream_skips_non_data_lines_and_empty_choices(server):
    lines = ["event: message", ": comment", "id: 7"] + sse_lines(
        {"id": "x", "model": "gpt-test", "choices": []},
        openai_chunk("ok"),
    )
    srv = server(stream_response(lines))
    resp = _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]))
    assert resp.content == "ok"


def test_stream_decode_error_is_fatal(server):
    lines = sse_lines(openai_chunk("a"), "{broken", openai_chunk("b"))
    srv = server(stream_response(lines))
    rec = DeltaRecorder()
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]), rec)
    assert ei.value.code is ErrorCode.DECODE
    assert ei.value.message.startswith("decode stream chunk:")
    assert rec.deltas == ["a"]


def test_stream_error_chunk_is_fatal(server):
    lines = sse_lines(openai_chunk("a"), {"error": {"message": "overloaded"}}, openai_chunk("b"))
    srv = server(stream_response(lines))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.code is ErrorCode.PROVIDER
    assert ei.value.message == "openai error: overloaded"


def test_stream_non_2xx(server):
    srv = server(json_response({"error": {"message": "quota"}}, status=429))
    with pytest.raises(ProviderError) as ei:
        _provider(srv).chat_stream(ChatRequest(messages=[Message("user", "hi")]))
    assert ei.value.http_status == 429
    assert ei.value.message == "openai request failed: quota (status 429)"
