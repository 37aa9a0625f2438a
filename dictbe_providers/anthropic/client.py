"""Anthropic provider adapter built on BaseHTTPChatProvider.

Speaks the Messages API directly over ``httpx``:
- ``POST <base>[/v1]/messages`` with ``x-api-key`` and ``anthropic-version``
- a leading system message becomes the top-level ``system`` field
- ``max_tokens`` defaults to ``ANTHROPIC_DEFAULT_MAX_TOKENS`` when unset or
  non-positive; the version header defaults to ``ANTHROPIC_DEFAULT_VERSION``

Streaming decode lives in ``stream_helpers``; request cycle, cancellation,
error classification and logging are inherited from the base class.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..base.constants import ANTHROPIC_DEFAULT_MAX_TOKENS, ANTHROPIC_DEFAULT_VERSION
from ..base.http_style_parts import BaseHTTPChatProvider, ChunkFields, _ProviderInit
from ..base.models import ChatRequest, ChatResponse
from .helpers import build_messages_endpoint, build_params, decode_message_response
from .stream_helpers import stream_event_error, translate_stream_event

__all__ = ["AnthropicProvider"]


class AnthropicProvider(BaseHTTPChatProvider):
    """Anthropic provider for blocking and streaming chat over the Messages API."""

    _result_label = "content"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        *,
        version: Optional[str] = None,
        max_tokens: Optional[int] = None,
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """Initialize the AnthropicProvider.

        Args:
            api_key: Value of the ``x-api-key`` header.
            base_url: API root, with or without a trailing ``/v1``.
            model: Default model for requests without an override.
            version: ``anthropic-version`` header value; blank means default.
            max_tokens: Output token limit; ``None`` or ``<= 0`` means default.
            http_client: Optional ``httpx.Client``; the pooled client otherwise.
            timeout_seconds: Optional per-request timeout.

        Raises:
            ProviderError: ``configuration`` when a required value is blank.
        """
        super().__init__(
            _ProviderInit(
                base_url=base_url,
                api_key=api_key,
                model=model,
                http_client=http_client,
                timeout_seconds=timeout_seconds,
            )
        )
        self._version = (version or "").strip() or ANTHROPIC_DEFAULT_VERSION
        self._max_tokens = max_tokens if max_tokens and max_tokens > 0 else ANTHROPIC_DEFAULT_MAX_TOKENS

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def version(self) -> str:
        return self._version

    @property
    def max_tokens(self) -> int:
        return self._max_tokens

    def _endpoint(self, model: str, stream: bool) -> str:
        return build_messages_endpoint(self._base_url)

    def _auth_headers(self) -> Dict[str, str]:
        return {"x-api-key": self._api_key, "anthropic-version": self._version}

    def _build_payload(self, request: ChatRequest, model: str, stream: bool) -> Dict[str, Any]:
        return build_params(request, model, self._max_tokens, stream)

    def _decode_response(self, data: Any) -> Optional[ChatResponse]:
        return decode_message_response(data)

    def _chunk_error(self, data: Any) -> Optional[str]:
        return stream_event_error(data)

    def _decode_chunk(self, data: Any) -> ChunkFields:
        return translate_stream_event(data)
