"""HTTP utilities package for providers.

Exposes pooled httpx clients used by adapters built without an explicit client
and the socket-level abort used for cancellation.
"""

from .abort import ConnectionAbort
from .client import get_httpx_client, close_all_clients

__all__ = ["ConnectionAbort", "get_httpx_client", "close_all_clients"]
