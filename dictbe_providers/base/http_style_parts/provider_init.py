"""Initialization dataclass for HTTP chat providers.

Encapsulates common constructor parameters used by ``BaseHTTPChatProvider``.

Docstring policy: Describes purpose, parameters, and external dependencies. No
I/O occurs here; this is a pure data container.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass(frozen=True)
class _ProviderInit:
    """Initialization bundle for ``BaseHTTPChatProvider``.

    Attributes:
        base_url: Provider API base URL (validated and trimmed by the provider).
        api_key: Static credential string.
        model: Default model used when a request carries no override.
        http_client: Optional caller-owned ``httpx.Client``; the shared pooled
            client is used when omitted.
        timeout_seconds: Optional per-request timeout overriding the client's.
    """

    base_url: Optional[str]
    api_key: Optional[str]
    model: Optional[str]
    http_client: Optional[httpx.Client] = None
    timeout_seconds: Optional[float] = None


__all__ = ["_ProviderInit"]
