"""GeminiProvider adapter.

Speaks the Generative Language REST API directly over ``httpx``:
- ``POST <base>/v1beta/models/<model>:generateContent?key=<key>`` for blocking
  calls and ``:streamGenerateContent`` for streaming calls
- a leading system message becomes ``systemInstruction``; ``assistant`` turns
  are sent with the ``model`` role
- the resolved model reported back is the response ``modelVersion``

The credential travels in the query string only; logged endpoints carry a
redacted ``key``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Optional

import httpx

from ..base.http_style_parts import BaseHTTPChatProvider, ChunkFields, _ProviderInit
from ..base.models import ChatRequest, ChatResponse
from .helpers import (
    build_contents_payload,
    build_gemini_endpoint,
    decode_generate_chunk,
    decode_generate_response,
    redact_key,
)
from .stream_helpers import iter_stream_payloads

__all__ = ["GeminiProvider"]


class GeminiProvider(BaseHTTPChatProvider):
    """Gemini provider for blocking and streaming chat over the REST API.

    Endpoint construction validates the base URL on every call, so an
    unparsable URL fails the call (not the constructor) with a
    configuration error.
    """

    _result_label = "candidates"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """Initialize the GeminiProvider.

        Args:
            api_key: Value of the ``key`` query parameter.
            base_url: API root; ``/v1beta`` is appended unless it already ends
                in ``/v1`` or ``/v1beta``.
            model: Default model for requests without an override.
            http_client: Optional ``httpx.Client``; the pooled client otherwise.
            timeout_seconds: Optional per-request timeout.
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
        """Return the name of the provider."""
        return "gemini"

    def _endpoint(self, model: str, stream: bool) -> str:
        return build_gemini_endpoint(self._base_url, model, stream, self._api_key)

    def _redact_endpoint(self, url: str) -> str:
        return redact_key(url)

    def _build_payload(self, request: ChatRequest, model: str, stream: bool) -> Dict[str, Any]:
        return build_contents_payload(request)

    def _iter_payloads(self, lines: Iterable[str]) -> Iterator[str]:
        return iter_stream_payloads(lines)

    def _decode_response(self, data: Any) -> Optional[ChatResponse]:
        return decode_generate_response(data)

    def _decode_chunk(self, data: Any) -> ChunkFields:
        return decode_generate_chunk(data)
