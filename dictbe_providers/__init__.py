"""dictbe_providers package

One chat-completion client surface over the OpenAI-style, Anthropic-style and
Gemini-style wire protocols.

Purpose:
    Provide a minimal, stable API for external consumption (packaging is
    configured via the repository root ``pyproject.toml``). Callers are
    expected to use provider instances directly, for example
    ``create("openai", api_key=..., base_url=..., model=...).chat(request)``.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - DTOs: :class:`Message`, :class:`ChatRequest`, :class:`ChatResponse`
    - Factory: :func:`create`, :func:`create_client`, ``ProviderFactory``
    - Convenience: :func:`simple`
"""

from typing import Any, Optional

from .base.errors import ProviderError, ErrorCode
from .base.factory import ProviderFactory, UnknownProviderError, create_client
from .base.dto import ProviderSettings
from .base.interfaces import ChatClient, HasDefaultModel, SupportsStreaming
from .base.models import ChatRequest, ChatResponse, Message
from .base.cancellation import CancellationToken
from .base.streaming import ChatStreamEvent
from .base.utils.simple import simple

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "UnknownProviderError",
    # DTOs
    "Message",
    "ChatRequest",
    "ChatResponse",
    "ChatStreamEvent",
    "ProviderSettings",
    "CancellationToken",
    # Core helpers
    "create",
    "create_client",
    # Convenience
    "simple",
    # Base abstractions
    "ProviderFactory",
    "ChatClient",
    "HasDefaultModel",
    "SupportsStreaming",
]


def create(provider_name: str, *, params: Optional[ProviderSettings] = None, **kwargs: Any) -> ChatClient:
    """Instantiate a provider adapter via ``ProviderFactory``.

    Parameters
    ----------
    provider_name:
        Provider name (``"openai"``, ``"anthropic"``/``"anthropics"``,
        ``"gemini"``).
    params:
        Optional :class:`ProviderSettings` carrying construction fields.
    **kwargs:
        Adapter constructor keyword arguments. When both ``params`` and
        ``kwargs`` provide the same field, ``kwargs`` take precedence.

    Raises
    ------
    ProviderError
        ``configuration`` when the provider is unknown or rejects its
        configuration.
    """
    try:
        return ProviderFactory.create(provider_name, params=params, **kwargs)
    except UnknownProviderError as e:
        raise ProviderError(
            code=ErrorCode.CONFIGURATION,
            message=f"Failed to create provider '{provider_name}': {e}",
            provider=provider_name,
            operation="config",
        ) from e
