"""Cancellation error type.

Defines ``CancelledError``, raised by ``CancellationToken.raise_if_cancelled``.
Adapters translate it into ``ProviderError(code=ErrorCode.CANCELLED)`` before
it reaches callers.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request."""

__all__ = ["CancelledError"]
