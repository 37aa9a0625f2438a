"""BaseHTTPChatProvider implementation shared by the three wire adapters.

Purpose:
- Provide a reusable base class for providers speaking a JSON-over-HTTPS chat
  protocol. Concrete adapters own the wire schema (payload, endpoint, auth
  headers, response and chunk decoding); this class owns the request cycle.

External dependencies:
- ``httpx`` for transport. Responses are always opened in streaming mode so
  the owning call (or a cancellation callback) can close them.

Failure semantics:
- Every failure is raised as ``ProviderError``. Transport failures are
  ``transport``, malformed JSON or schema mismatches are ``decode``, error
  objects and non-2xx statuses are ``provider``, bodies without a result are
  ``protocol``. A cancelled token wins over any other classification.
- Exceptions raised by a caller's stream handler propagate unchanged.
- Nothing is retried.

Timeout strategy:
- Connect/read timeouts come from the client (``get_timeout_config()`` for the
  pooled client). ``timeout_seconds`` overrides them per request.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..constants import EVENT_STREAM_CONTENT_TYPE, JSON_CONTENT_TYPE
from ..errors import ErrorCode, ProviderError, wrap_exception
from ..http import ConnectionAbort, get_httpx_client
from ..interfaces import ChatClient, HasDefaultModel, SupportsStreaming
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ChatRequest, ChatResponse
from ..streaming import (
    ChatStreamEvent,
    StreamHandler,
    StreamMetrics,
    accumulate_events,
    iter_bounded_lines,
    iter_sse_data,
)
from .chunk_fields import ChunkFields
from .provider_init import _ProviderInit
from .response_helpers import is_success, provider_reported_error, reported_error, status_error
from .settings_helpers import require_setting, resolve_model


class BaseHTTPChatProvider(ChatClient, HasDefaultModel, SupportsStreaming):
    """Reusable base class for JSON-over-HTTP chat providers.

    Subclasses must implement:
    - ``provider_name``: canonical provider identifier.
    - ``_endpoint(model, stream)``: absolute request URL.
    - ``_build_payload(request, model, stream)``: wire request body.
    - ``_decode_response(data)``: blocking body to ``ChatResponse`` (``None``
      when the body holds no result).
    - ``_decode_chunk(data)``: one stream chunk to ``ChunkFields``.

    They may also override ``_auth_headers``, ``_iter_payloads`` (stream
    framing), ``_chunk_error`` and ``_redact_endpoint``.
    """

    # Name of the result collection used in "has no ..." protocol errors.
    _result_label = "choices"

    def __init__(self, init: _ProviderInit) -> None:
        """Validate settings and bind the transport.

        Raises:
            ProviderError: ``configuration`` when base URL, API key or model is
                blank after trimming.
        """
        name = self.provider_name
        self._base_url = require_setting(init.base_url, provider=name, field="base url")
        self._api_key = require_setting(init.api_key, provider=name, field="api key")
        self._model = require_setting(init.model, provider=name, field="model")
        self._http = init.http_client if init.http_client is not None else get_httpx_client(None, purpose=name)
        # Cancellable calls on the shared pool use a sibling pool whose
        # connections are never reused, so every such call opens its own socket.
        self._cancel_http = (
            init.http_client if init.http_client is not None else get_httpx_client(None, purpose=f"{name}.cancellable")
        )
        self._timeout: Any = (
            httpx.Timeout(init.timeout_seconds) if init.timeout_seconds else httpx.USE_CLIENT_DEFAULT
        )
        self._logger = get_logger(f"providers.{name}")

    # ----- Abstract surface -----
    @property
    def provider_name(self) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    def _endpoint(self, model: str, stream: bool) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    def _build_payload(self, request: ChatRequest, model: str, stream: bool) -> Dict[str, Any]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _decode_response(self, data: Any) -> Optional[ChatResponse]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _decode_chunk(self, data: Any) -> ChunkFields:  # pragma: no cover - abstract
        raise NotImplementedError

    # ----- Overridable hooks -----
    def _auth_headers(self) -> Dict[str, str]:
        return {}

    def _iter_payloads(self, lines: Iterable[str]) -> Iterator[str]:
        """Frame body lines into JSON payload strings (strict ``data:`` framing)."""
        return iter_sse_data(lines)

    def _chunk_error(self, data: Any) -> Optional[str]:
        return reported_error(data)

    def _redact_endpoint(self, url: str) -> str:
        return url

    # ----- Capability & basic info -----
    def default_model(self) -> str:
        """Return the default model name configured for this provider."""
        return self._model

    def supports_streaming(self) -> bool:
        return True

    def resolve_model(self, override: Optional[str]) -> str:
        """Return the model used for a call with the given per-request override."""
        return resolve_model(override, self._model)

    # ----- Chat -----
    def chat(self, request: ChatRequest, *, cancel: Optional[CancellationToken] = None) -> ChatResponse:
        """Perform one blocking request/response cycle.

        Raises:
            ProviderError: on any failure (see module docstring).
        """
        model = self.resolve_model(request.model)
        ctx = self._log_context(model, "chat", stream=False)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", messages=len(request.messages))
        try:
            with self._open(request, model, stream=False, cancel=cancel, operation="chat") as resp:
                try:
                    body = resp.read()
                except Exception as exc:  # noqa: BLE001 - classified below
                    raise self._failure(exc, model, "chat", "read response", cancel) from exc
            self._raise_if_cancelled(cancel, model, "chat")
            result = self._decode_body(body, model)
        except ProviderError as err:
            self._log_failure(ctx, "chat", err)
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=bool(result.content),
            finish_reason=result.finish_reason or None,
        )
        return result

    # ----- Streaming -----
    def chat_stream(
        self,
        request: ChatRequest,
        handler: Optional[StreamHandler] = None,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ChatResponse:
        """Stream a completion and return the accumulated response.

        ``handler`` receives every non-empty delta in arrival order; an
        exception it raises stops the stream and propagates unchanged.
        """
        return accumulate_events(self.stream_events(request, cancel=cancel), handler)

    def stream_events(
        self,
        request: ChatRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> Iterator[ChatStreamEvent]:
        """Yield one ``ChatStreamEvent`` per decoded chunk.

        Events carry the sticky model and finish reason observed so far. The
        stream ends on end of input or the protocol's terminal sentinel.
        Closing the iterator early releases the connection.
        """
        model = self.resolve_model(request.model)
        ctx = self._log_context(model, "stream", stream=True)
        metrics = StreamMetrics()
        sticky_model = ""
        sticky_finish = ""
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", messages=len(request.messages))
        try:
            with self._open(request, model, stream=True, cancel=cancel, operation="stream") as resp:
                lines = iter_bounded_lines(resp.iter_bytes())
                payloads = self._iter_payloads(lines)
                while True:
                    try:
                        payload = next(payloads)
                    except StopIteration:
                        break
                    except Exception as exc:  # noqa: BLE001 - classified below
                        raise self._failure(exc, model, "stream", "read stream", cancel) from exc
                    self._raise_if_cancelled(cancel, model, "stream")
                    fields = self._decode_stream_payload(payload, model)
                    if fields.model:
                        sticky_model = fields.model
                    if fields.finish_reason:
                        sticky_finish = fields.finish_reason
                    metrics.record_chunk(bool(fields.delta))
                    yield ChatStreamEvent(
                        provider=self.provider_name,
                        model=sticky_model,
                        delta=fields.delta,
                        finish_reason=sticky_finish,
                        raw=payload,
                    )
            self._raise_if_cancelled(cancel, model, "stream")
        except ProviderError as err:
            self._log_failure(ctx, "stream", err, metrics)
            raise
        except GeneratorExit:
            normalized_log_event(
                self._logger,
                "stream.end",
                ctx,
                phase="aborted",
                emitted=metrics.emitted,
                **metrics.finish().to_dict(),
            )
            raise
        normalized_log_event(
            self._logger,
            "stream.end",
            ctx,
            phase="finalize",
            emitted=metrics.emitted,
            finish_reason=sticky_finish or None,
            **metrics.finish().to_dict(),
        )

    # ----- request cycle -----
    @contextmanager
    def _open(
        self,
        request: ChatRequest,
        model: str,
        *,
        stream: bool,
        cancel: Optional[CancellationToken],
        operation: str,
    ) -> Iterator[httpx.Response]:
        """Send the request and yield a 2xx response, closing it on exit.

        With a token, cancelling shuts down the request's socket from the
        cancelling thread: a new connection is known from the moment it is
        opened, so even the wait for response headers is interrupted. Such
        requests send ``Connection: close`` so their sockets never return to a
        pool. A keep-alive socket reused from a caller-supplied client is only
        known once headers arrive.
        """
        self._raise_if_cancelled(cancel, model, operation)
        payload = self._build_payload(request, model, stream)
        url = self._endpoint(model, stream)
        headers = self._headers(stream)
        abort: Optional[ConnectionAbort] = None
        extensions: Dict[str, Any] = {}
        unregister = None
        if cancel is not None:
            abort = ConnectionAbort()
            extensions["trace"] = abort.trace
            headers["Connection"] = "close"
            unregister = cancel.register(abort.abort)
        try:
            try:
                client = self._cancel_http if cancel is not None else self._http
                req = client.build_request(
                    "POST",
                    url,
                    content=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                    headers=headers,
                    timeout=self._timeout,
                    extensions=extensions,
                )
                resp = client.send(req, stream=True)
            except Exception as exc:  # noqa: BLE001 - classified below
                raise self._failure(exc, model, operation, f"{self.provider_name} request", cancel) from exc
            try:
                if abort is not None:
                    abort.attach_response(resp)
                self._raise_if_cancelled(cancel, model, operation)
                if not is_success(resp.status_code):
                    raise status_error(resp, provider=self.provider_name, model=model, operation=operation)
                yield resp
            finally:
                resp.close()
        finally:
            if unregister is not None:
                unregister()

    def _headers(self, stream: bool) -> Dict[str, str]:
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if stream:
            headers["Accept"] = EVENT_STREAM_CONTENT_TYPE
        headers.update(self._auth_headers())
        return headers

    def _decode_body(self, body: bytes, model: str) -> ChatResponse:
        try:
            data = json.loads(body)
            message = reported_error(data)
            result = None if message is not None else self._decode_response(data)
        except Exception as exc:  # noqa: BLE001 - classified below
            raise self._failure(exc, model, "chat", "decode response", None) from exc
        if message is not None:
            raise provider_reported_error(message, provider=self.provider_name, model=model, operation="chat")
        if result is None:
            raise ProviderError(
                code=ErrorCode.PROTOCOL,
                message=f"{self.provider_name} response has no {self._result_label}",
                provider=self.provider_name,
                model=model,
                operation="chat",
            )
        return result

    def _decode_stream_payload(self, payload: str, model: str) -> ChunkFields:
        try:
            data = json.loads(payload)
            message = self._chunk_error(data)
            fields = None if message is not None else self._decode_chunk(data)
        except Exception as exc:  # noqa: BLE001 - classified below
            raise self._failure(exc, model, "stream", "decode stream chunk", None) from exc
        if message is not None:
            raise provider_reported_error(message, provider=self.provider_name, model=model, operation="stream")
        return fields

    # ----- error & logging helpers -----
    def _failure(
        self,
        exc: BaseException,
        model: str,
        operation: str,
        context: str,
        cancel: Optional[CancellationToken],
    ) -> ProviderError:
        if cancel is not None and cancel.cancelled:
            return self._cancelled(cancel, model, operation)
        return wrap_exception(exc, provider=self.provider_name, model=model, operation=operation, context=context)

    def _cancelled(self, cancel: CancellationToken, model: str, operation: str) -> ProviderError:
        return wrap_exception(
            CancelledError(cancel.reason or "operation cancelled"),
            provider=self.provider_name,
            model=model,
            operation=operation,
            context="cancelled",
        )

    def _raise_if_cancelled(self, cancel: Optional[CancellationToken], model: str, operation: str) -> None:
        if cancel is not None and cancel.cancelled:
            raise self._cancelled(cancel, model, operation)

    def _log_context(self, model: str, operation: str, *, stream: bool) -> LogContext:
        try:
            endpoint = self._redact_endpoint(self._endpoint(model, stream))
        except ProviderError:
            endpoint = None
        return LogContext(provider=self.provider_name, model=model, operation=operation, endpoint=endpoint)

    def _log_failure(
        self,
        ctx: LogContext,
        operation: str,
        err: ProviderError,
        metrics: Optional[StreamMetrics] = None,
    ) -> None:
        event = f"{operation}.cancelled" if err.code is ErrorCode.CANCELLED else f"{operation}.error"
        extra = metrics.finish().to_dict() if metrics is not None else {}
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="error",
            emitted=metrics.emitted if metrics is not None else None,
            error_code=err.code.value,
            http_status=err.http_status,
            error=err.message,
            **extra,
        )


__all__ = ["BaseHTTPChatProvider"]
