"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Adapters call :func:`classify_exception` for anything raised by the transport,
the JSON decoder, or the wire DTO validation, and :func:`wrap_exception` to
build the matching :class:`ProviderError`.
"""
from __future__ import annotations

import json
from typing import Optional

import httpx
from pydantic import ValidationError

from ..cancellation_parts.cancelled_error import CancelledError
from ..streaming.line_reader import LineTooLongError
from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    val = getattr(exc, "status_code", None)
    if isinstance(val, int) and 100 <= val < 600:
        return val
    try:
        resp = getattr(exc, "response", None)
    except RuntimeError:
        # httpx raises when .response is read on a request-only error
        return None
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Cooperative cancellation.
        3. Read and network failures (httpx transport errors, timeouts, OS
           errors, over-long stream lines).
        4. Malformed payloads (JSON, text decoding, DTO validation).
        5. ``PROVIDER`` for anything else the provider call surfaced.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (httpx.TransportError, httpx.StreamError, TimeoutError, OSError, LineTooLongError)):
        return ErrorCode.TRANSPORT
    if isinstance(exc, (json.JSONDecodeError, UnicodeDecodeError, ValidationError)):
        return ErrorCode.DECODE
    return ErrorCode.PROVIDER


def wrap_exception(
    exc: BaseException,
    *,
    provider: str,
    model: Optional[str],
    operation: str,
    context: str,
) -> ProviderError:
    """Return ``exc`` as a :class:`ProviderError`, prefixing ``context``.

    ``ProviderError`` instances are returned unchanged so an error is never
    classified twice.
    """
    if isinstance(exc, ProviderError):
        return exc
    return ProviderError(
        code=classify_exception(exc),
        message=f"{context}: {exc}",
        provider=provider,
        model=model,
        operation=operation,
        http_status=_extract_status(exc),
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "wrap_exception",
    "_extract_status",
]
