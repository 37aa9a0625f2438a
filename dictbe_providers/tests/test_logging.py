"""Structured log events emitted by adapters and the logging helpers."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from dictbe_providers.base.cancellation import CancellationToken
from dictbe_providers.base.errors import ProviderError
from dictbe_providers.base.logging import (
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from dictbe_providers.base.models import ChatRequest, Message
from dictbe_providers.gemini import GeminiProvider
from dictbe_providers.openai import OpenAIProvider

from .utils import gemini_chunk, json_response, openai_chunk, sse_lines, stream_response

REQUEST = ChatRequest(messages=[Message("user", "hi")])


def _events(records):
    return [json.loads(r.getMessage()) for r in records]


def _by_name(records, name):
    return [e for e in _events(records) if e["event"] == name]


def _openai(srv):
    return OpenAIProvider(api_key="sk-secret", base_url="https://o.example.com", model="gpt-default", http_client=srv.client)


def test_chat_start_and_end(server, log_records):
    srv = server(json_response({"model": "gpt-test", "choices": [{"message": {"content": "ok"}, "finish_reason": "stop"}]}))
    _openai(srv).chat(REQUEST)

    start, = _by_name(log_records, "chat.start")
    end, = _by_name(log_records, "chat.end")
    assert start["provider"] == "openai"
    assert start["model"] == "gpt-default"
    assert start["operation"] == "chat"
    assert start["endpoint"] == "https://o.example.com/v1/chat/completions"
    assert start["phase"] == "start"
    assert start["messages"] == 1
    assert end["phase"] == "finalize"
    assert end["emitted"] is True
    assert end["finish_reason"] == "stop"
    assert "error_code" not in end
    assert all("sk-secret" not in r.getMessage() for r in log_records)


def test_chat_error_is_logged_at_warning(server, log_records):
    srv = server(json_response({"error": {"message": "nope"}}, status=429))
    with pytest.raises(ProviderError):
        _openai(srv).chat(REQUEST)

    rec = next(r for r in log_records if '"chat.error"' in r.getMessage())
    assert rec.levelno == logging.WARNING
    payload = json.loads(rec.getMessage())
    assert payload["error_code"] == "provider"
    assert payload["http_status"] == 429
    assert payload["phase"] == "error"
    assert payload["error"] == "openai request failed: nope (status 429)"


def test_cancelled_call_logs_cancelled_event(server, log_records):
    srv = server(json_response({}))
    tok = CancellationToken()
    tok.cancel()
    with pytest.raises(ProviderError):
        _openai(srv).chat(REQUEST, cancel=tok)
    ev, = _by_name(log_records, "chat.cancelled")
    assert ev["error_code"] == "cancelled"


def test_stream_end_carries_metrics(server, log_records):
    srv = server(stream_response(sse_lines(openai_chunk("a"), openai_chunk(""), openai_chunk("b", finish="stop"))))
    _openai(srv).chat_stream(REQUEST)

    end, = _by_name(log_records, "stream.end")
    assert end["phase"] == "finalize"
    assert end["emitted"] == 2
    assert end["emitted_count"] == 2
    assert end["chunk_count"] == 3
    assert end["finish_reason"] == "stop"
    assert end["time_to_first_token_ms"] is not None
    assert end["total_duration_ms"] >= end["time_to_first_token_ms"]


def test_stream_error_carries_partial_metrics(server, log_records):
    srv = server(stream_response(sse_lines(openai_chunk("a"), "{broken")))
    with pytest.raises(ProviderError):
        _openai(srv).chat_stream(REQUEST)
    err, = _by_name(log_records, "stream.error")
    assert err["error_code"] == "decode"
    assert err["emitted"] == 1


def test_gemini_endpoint_is_redacted(server, log_records):
    srv = server(json_response(gemini_chunk("x")))
    GeminiProvider(api_key="g-secret", base_url="https://g.example.com", model="m", http_client=srv.client).chat(REQUEST)
    start, = _by_name(log_records, "chat.start")
    assert start["endpoint"].endswith("key=REDACTED")
    assert all("g-secret" not in r.getMessage() for r in log_records)


def test_normalized_event_keeps_required_keys(log_records):
    logger = get_logger("providers.test")
    normalized_log_event(logger, "custom", LogContext(provider="p"), phase="x", error_code=None, note="n")
    ev, = _by_name(log_records, "custom")
    assert ev == {"event": "custom", "provider": "p", "phase": "x", "emitted": None, "note": "n"}


def test_normalized_event_extra_fields_do_not_override(log_records):
    logger = get_logger("providers.test")
    normalized_log_event(logger, "custom", None, phase="x", emitted=3, error_code="transport", **{"emitted_by": "me"})
    ev, = _by_name(log_records, "custom")
    assert ev["emitted"] == 3
    assert ev["error_code"] == "transport"
    assert ev["emitted_by"] == "me"


def test_log_event_drops_none_unless_kept(log_records):
    logger = get_logger("providers.test")
    log_event(logger, "a", None, x=None, y=1)
    log_event(logger, "b", None, keep_none=True, x=None)
    a, = _by_name(log_records, "a")
    b, = _by_name(log_records, "b")
    assert a == {"event": "a", "y": 1}
    assert b == {"event": "b", "x": None}


def test_child_loggers_propagate_to_shared_logger():
    child = get_logger("providers.openai")
    assert child.propagate is True
    assert not child.handlers
    base = get_logger()
    assert base.propagate is False
    assert len([h for h in base.handlers if isinstance(h, logging.StreamHandler)]) >= 1


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "providers.log"
    logger = configure_logger(level="DEBUG", file_path=str(target))
    try:
        log_event(get_logger("providers.test"), "to.file", None, n=1)
        for h in logger.handlers:
            h.flush()
        line = target.read_text(encoding="utf-8").strip().splitlines()[-1]
        data = json.loads(line)
        assert data["event"] == "to.file"
        assert data["n"] == 1
        assert data["logger"] == "providers.test"
        assert data["level"] == "INFO"
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
