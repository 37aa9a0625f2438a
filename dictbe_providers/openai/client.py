"""OpenAI provider adapter built on BaseHTTPChatProvider.

Speaks the Chat Completions protocol directly over ``httpx``:
- ``POST <base>[/v1]/chat/completions`` with ``Authorization: Bearer <key>``
- messages pass through unchanged, ``"stream": true`` only when streaming
- streamed chunks arrive as ``data:`` lines terminated by ``data: [DONE]``

Request cycle, cancellation, error classification and logging are inherited
from the base class. See base module docstring for details.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..base.http_style_parts import BaseHTTPChatProvider, ChunkFields, _ProviderInit
from ..base.models import ChatRequest, ChatResponse
from .helpers import build_chat_endpoint, build_chat_payload, decode_chat_chunk, decode_chat_response

__all__ = ["OpenAIProvider"]


class OpenAIProvider(BaseHTTPChatProvider):
    """OpenAI adapter using the shared HTTP chat base provider."""

    _result_label = "choices"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """Initialize an OpenAIProvider.

        Args:
            api_key: Bearer token.
            base_url: API root, with or without a trailing ``/v1``.
            model: Default model for requests without an override.
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

    @property
    def provider_name(self) -> str:
        """Return the canonical provider name."""
        return "openai"

    def _endpoint(self, model: str, stream: bool) -> str:
        return build_chat_endpoint(self._base_url)

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _build_payload(self, request: ChatRequest, model: str, stream: bool) -> Dict[str, Any]:
        return build_chat_payload(request, model, stream)

    def _decode_response(self, data: Any) -> Optional[ChatResponse]:
        return decode_chat_response(data)

    def _decode_chunk(self, data: Any) -> ChunkFields:
        return decode_chat_chunk(data)
