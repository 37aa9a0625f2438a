"""Gemini ``generateContent`` wire helpers.

Purpose:
- Build the model-scoped endpoint (credential in the ``key`` query parameter).
- Map the common message list to ``contents`` plus ``systemInstruction``.
- Decode blocking responses and stream chunks.

Endpoint rules:
- The base URL must parse with an ``http``/``https`` scheme and a host.
- The path is normalized to end in ``/v1`` or ``/v1beta`` (``/v1beta`` is
  appended otherwise), then ``/models/<model>:<verb>`` is added.
- Existing query parameters are kept, ``key`` is set (replacing any previous
  value), and parameters are encoded sorted by name.

Failure modes:
- ``ProviderError(configuration)`` for a blank base URL, model or key and for
  an unparsable base URL.
"""

from __future__ import annotations

import posixpath
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from pydantic import BaseModel

from ..base.constants import GEMINI_VERB_BLOCKING, GEMINI_VERB_STREAMING
from ..base.errors import ErrorCode, ProviderError
from ..base.http_style_parts import ChunkFields
from ..base.models import ChatRequest, ChatResponse
from ..base.utils.messages import split_system_message

PROVIDER = "gemini"
API_VERSION_SUFFIXES = ("/v1", "/v1beta")
DEFAULT_API_VERSION = "v1beta"
KEY_PARAM = "key"
REDACTED = "REDACTED"
# Characters left unescaped in a URL path segment (sub-delims, ":", "@", "/").
_PATH_SAFE = "/:@!$&'()*+,;="


class _Part(BaseModel):
    text: Optional[str] = None


class _Content(BaseModel):
    role: Optional[str] = None
    parts: Optional[List[_Part]] = None


class _Candidate(BaseModel):
    content: Optional[_Content] = None
    finishReason: Optional[str] = None


class _GenerateContentResponse(BaseModel):
    candidates: Optional[List[_Candidate]] = None
    modelVersion: Optional[str] = None


def _config_error(message: str) -> ProviderError:
    return ProviderError(code=ErrorCode.CONFIGURATION, message=message, provider=PROVIDER, operation="config")


def _join_path(*segments: str) -> str:
    """Join and clean URL path segments into an absolute path."""
    joined = posixpath.normpath("/" + "/".join(s for s in segments if s))
    # normpath keeps a leading "//"; URL paths must not start with one.
    return "/" + joined.lstrip("/")


def build_gemini_endpoint(base_url: str, model: str, stream: bool, api_key: str) -> str:
    """Return the ``generateContent``/``streamGenerateContent`` URL.

    >>> build_gemini_endpoint("https://example.com/", "m", False, "k")
    'https://example.com/v1beta/models/m:generateContent?key=k'
    """
    base_url = (base_url or "").strip()
    if not base_url:
        raise _config_error("gemini base url is required")
    model = (model or "").strip()
    if not model:
        raise _config_error("gemini model is required")
    if not (api_key or "").strip():
        raise _config_error("gemini api key is required")
    try:
        parts = urlsplit(base_url)
    except ValueError as exc:
        raise _config_error(f"invalid base url: {exc}") from exc
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise _config_error(f"invalid base url: {base_url}")

    api_path = parts.path[:-1] if parts.path.endswith("/") else parts.path
    if not api_path.endswith(API_VERSION_SUFFIXES):
        api_path = _join_path(api_path, DEFAULT_API_VERSION)
    verb = GEMINI_VERB_STREAMING if stream else GEMINI_VERB_BLOCKING
    path = _join_path(api_path, "models", quote(f"{model}:{verb}", safe=_PATH_SAFE))

    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != KEY_PARAM]
    query.append((KEY_PARAM, api_key))
    query.sort(key=lambda kv: kv[0])
    return urlunsplit((parts.scheme, parts.netloc, path, urlencode(query), parts.fragment))


def redact_key(url: str) -> str:
    """Return ``url`` with the ``key`` query value replaced, for logging."""
    parts = urlsplit(url)
    query = [(k, REDACTED if k == KEY_PARAM else v) for k, v in parse_qsl(parts.query, keep_blank_values=True)]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


def to_wire_role(role: str) -> str:
    return "model" if role == "assistant" else role


def build_contents_payload(request: ChatRequest) -> Dict[str, Any]:
    """Map messages to ``contents`` (one text part each) and ``systemInstruction``.

    ``systemInstruction`` is present only when the first message is a system
    message; it is not repeated in ``contents``.
    """
    system, rest = split_system_message(request.messages)
    payload: Dict[str, Any] = {
        "contents": [
            {"role": to_wire_role(m.role), "parts": [{"text": m.content}]}
            for m in rest
        ],
    }
    if system is not None:
        payload["systemInstruction"] = {"parts": [{"text": system}]}
    return payload


def flatten_content(content: Optional[_Content]) -> str:
    if content is None or not content.parts:
        return ""
    return "".join(p.text for p in content.parts if p.text)


def decode_generate_response(data: Any) -> Optional[ChatResponse]:
    """Map a blocking body; ``None`` when it has no candidates."""
    body = _GenerateContentResponse.model_validate(data)
    if not body.candidates:
        return None
    first = body.candidates[0]
    return ChatResponse(
        content=flatten_content(first.content),
        model=body.modelVersion or "",
        finish_reason=first.finishReason or "",
    )


def decode_generate_chunk(data: Any) -> ChunkFields:
    """Map one streamed ``GenerateContentResponse``; only the first candidate is read."""
    chunk = _GenerateContentResponse.model_validate(data)
    if not chunk.candidates:
        return ChunkFields(model=chunk.modelVersion or "")
    first = chunk.candidates[0]
    return ChunkFields(
        model=chunk.modelVersion or "",
        finish_reason=first.finishReason or "",
        delta=flatten_content(first.content),
    )


__all__ = [
    "build_gemini_endpoint",
    "redact_key",
    "to_wire_role",
    "build_contents_payload",
    "flatten_content",
    "decode_generate_response",
    "decode_generate_chunk",
]
