"""Pytest configuration for providers test suite.

Fixtures simulate provider HTTP servers with ``httpx.MockTransport`` (no
network access) and capture structured log records from the shared
``providers`` logger, which does not propagate to the root logger.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List

import httpx
import pytest

from dictbe_providers.base.http import close_all_clients
from dictbe_providers.base.logging import get_logger
from dictbe_providers.config import reset_config_cache

from .utils import RecordingServer

_ENV_PREFIXES = ("OPENAI_", "ANTHROPIC_", "GEMINI_", "GOOGLE_API_KEY", "PT_TIMEOUT_", "PROVIDERS_")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip provider env vars and point the .env loader at an empty path."""

    import os

    for key in list(os.environ):
        if key.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def server() -> Callable[..., RecordingServer]:
    """Return a factory for recording mock servers.

    ``server(handler)`` wraps a ``request -> httpx.Response`` callable;
    ``server.client`` is an ``httpx.Client`` routed to it.
    """

    created: List[RecordingServer] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> RecordingServer:
        srv = RecordingServer(handler)
        created.append(srv)
        return srv

    yield _make
    for srv in created:
        srv.client.close()


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def log_records() -> Iterator[List[logging.LogRecord]]:
    """Collect records emitted through the shared ``providers`` logger."""

    base = get_logger()
    handler = _ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    yield handler.records
    base.removeHandler(handler)
    base.setLevel(previous)
