"""Split modules for the shared HTTP chat provider base.

One class or helper group per file; re-exports provide a stable import surface
for the adapters.
"""

from .base import BaseHTTPChatProvider
from .chunk_fields import ChunkFields
from .provider_init import _ProviderInit

__all__ = [
    "BaseHTTPChatProvider",
    "ChunkFields",
    "_ProviderInit",
]
