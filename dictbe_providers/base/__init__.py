"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, the shared HTTP provider base and
the provider factory for use within the providers layer.

- Interfaces: normalized provider boundary (``ChatClient``)
- Models (DTOs): serialization-friendly request/response objects
- Errors: ``ProviderError`` with a normalized ``ErrorCode``
- Factory: lazy creation of provider adapters by canonical name
"""

from .factory import ProviderFactory, UnknownProviderError, create_client, create_provider
from .interfaces import ChatClient, HasDefaultModel, SupportsStreaming
from .models import ChatRequest, ChatResponse, Message, Role
from .errors import ErrorCode, ProviderError, classify_exception
from .dto import ProviderSettings
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .streaming import ChatStreamEvent, StreamHandler, StreamMetrics, accumulate_events
from .utils.messages import build_messages, split_system_message

__all__ = [
    # Models
    "Role",
    "Message",
    "ChatRequest",
    "ChatResponse",
    "build_messages",
    "split_system_message",
    # Interfaces
    "ChatClient",
    "HasDefaultModel",
    "SupportsStreaming",
    # Errors
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    "ProviderSettings",
    "create_client",
    "create_provider",
    # Timeouts & Cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "ChatStreamEvent",
    "StreamHandler",
    "StreamMetrics",
    "accumulate_events",
]
