"""Socket-level abort for one in-flight request.

Closing an ``httpx.Response`` from another thread does not wake a thread
blocked in ``recv`` on that connection. :class:`ConnectionAbort` keeps the
socket carrying the request and shuts it down (``SHUT_RDWR``), which makes the
blocked read return at once so the owning call can report cancellation.

The socket is learned in two ways:
    - the httpcore ``trace`` request extension reports the stream of a newly
      opened connection (``connect_tcp`` then ``start_tls``) before the
      response headers arrive;
    - the ``network_stream`` response extension covers every connection once
      headers are in, including reused keep-alive ones.

Transports without sockets (``httpx.MockTransport``) report neither; aborting
is then a no-op and callers rely on polling the token.
"""

from __future__ import annotations

import socket
import threading
from contextlib import suppress
from typing import Any, Dict, Optional

import httpx

_STREAM_EVENTS = ("connection.connect_tcp.complete", "connection.start_tls.complete")


class ConnectionAbort:
    """Shut down the socket of one request on demand (thread-safe)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sock: Optional[socket.socket] = None
        self._aborted = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    def trace(self, event_name: str, info: Dict[str, Any]) -> None:
        """httpcore ``trace`` extension callback."""
        if event_name in _STREAM_EVENTS:
            self._attach(info.get("return_value"))

    def attach_response(self, response: httpx.Response) -> None:
        self._attach(response.extensions.get("network_stream"))

    def abort(self) -> None:
        """Shut down the known socket now, or as soon as one is attached."""
        with self._lock:
            self._aborted = True
            sock = self._sock
        if sock is not None:
            _shutdown(sock)

    def _attach(self, stream: Any) -> None:
        if stream is None or not hasattr(stream, "get_extra_info"):
            return
        sock = stream.get_extra_info("socket")
        if sock is None:
            return
        with self._lock:
            self._sock = sock
            aborted = self._aborted
        if aborted:
            _shutdown(sock)


def _shutdown(sock: socket.socket) -> None:
    # A socket already closed or detached by the TLS wrap raises OSError.
    with suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


__all__ = ["ConnectionAbort"]
