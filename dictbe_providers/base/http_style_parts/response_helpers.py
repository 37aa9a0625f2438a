"""Helpers for HTTP status handling and provider error bodies.

All three wire protocols report failures as ``{"error": {"message": ...}}``
(in a non-2xx body, a 2xx body, or a stream chunk), so extraction is shared.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from ..errors import ErrorCode, ProviderError


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def error_message(data: Any) -> Optional[str]:
    """Return ``data["error"]["message"]`` when present and non-empty."""
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if not isinstance(err, dict):
        return None
    msg = err.get("message")
    if isinstance(msg, str) and msg:
        return msg
    return None


def reported_error(data: Any) -> Optional[str]:
    """Return the message of an error object in a decoded 2xx body or chunk.

    ``None`` means no error object; an error object without a message yields
    an empty string, which still fails the call.
    """
    if not isinstance(data, dict) or data.get("error") is None:
        return None
    err = data["error"]
    if isinstance(err, dict):
        msg = err.get("message")
        return msg if isinstance(msg, str) else ""
    return str(err)


def status_error(
    response: httpx.Response,
    *,
    provider: str,
    model: Optional[str],
    operation: str,
) -> ProviderError:
    """Build the provider error for a non-2xx response.

    The body is decoded best-effort: unreadable or malformed bodies simply
    yield the status-only message.
    """
    status = response.status_code
    msg: Optional[str] = None
    try:
        msg = error_message(json.loads(response.read()))
    except (httpx.HTTPError, httpx.StreamError, ValueError):
        msg = None
    if msg:
        text = f"{provider} request failed: {msg} (status {status})"
    else:
        text = f"{provider} request failed with status {status}"
    return ProviderError(
        code=ErrorCode.PROVIDER,
        message=text,
        provider=provider,
        model=model,
        operation=operation,
        http_status=status,
    )


def provider_reported_error(
    message: str,
    *,
    provider: str,
    model: Optional[str],
    operation: str,
) -> ProviderError:
    """Error for an error object found inside a decoded body or chunk."""
    return ProviderError(
        code=ErrorCode.PROVIDER,
        message=f"{provider} error: {message}",
        provider=provider,
        model=model,
        operation=operation,
    )


__all__ = [
    "is_success",
    "error_message",
    "reported_error",
    "status_error",
    "provider_reported_error",
]
