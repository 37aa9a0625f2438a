"""Cooperative cancellation primitives (public API facade).

Expose stable, provider-agnostic cancellation constructs via the canonical
``dictbe_providers.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

- ``CancellationToken`` is passed to ``chat``/``chat_stream``/``stream_events``;
  cancelling it closes the in-flight response of every call it was given to.
- ``CancelledError`` is the internal signal; adapters surface it to callers as
  ``ProviderError(code=ErrorCode.CANCELLED)``.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
