"""Unified timeout values for provider HTTP traffic.

Centralizes the timeout values used by the shared ``httpx`` client so no
adapter carries ad-hoc numeric literals.

get_timeout_config()
    Returns a process-cached configuration, re-parsed whenever the
    environment overrides change. Supported environment variables (all optional):
        PT_TIMEOUT_START_SECONDS
        PT_TIMEOUT_STREAM_SECONDS
        PT_TIMEOUT_HTTP_SECONDS

to_httpx_timeout()
    Maps a ``TimeoutConfig`` onto ``httpx.Timeout``: the start timeout bounds
    connection setup, the stream timeout bounds the wait for the next line of
    a response body, and the HTTP timeout covers writes and pool waits.

Timeouts surface as ``httpx.TimeoutException`` which adapters classify as
transport errors. Nothing here retries.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Timeout for establishing the connection.
        stream_timeout_seconds: Idle timeout while waiting for the next chunk
            of a response body (blocking bodies included).
        http_timeout_seconds: Baseline timeout for writes and pool acquisition.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0


_CACHED: TimeoutConfig | None = None
# Track the last seen env overrides so tests can adjust them at runtime
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:  # pragma: no cover - defensive
        return default


def get_timeout_config() -> TimeoutConfig:
    """Return process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    cur_guard = "/".join(
        [
            os.getenv("PT_TIMEOUT_START_SECONDS", ""),
            os.getenv("PT_TIMEOUT_STREAM_SECONDS", ""),
            os.getenv("PT_TIMEOUT_HTTP_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        start_timeout_seconds=_parse_env_float("PT_TIMEOUT_START_SECONDS", 30.0),
        stream_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", 60.0),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", 30.0),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


def to_httpx_timeout(cfg: TimeoutConfig | None = None) -> httpx.Timeout:
    """Return the ``httpx.Timeout`` matching ``cfg`` (defaults to the cached config)."""
    cfg = cfg or get_timeout_config()
    return httpx.Timeout(
        cfg.http_timeout_seconds,
        connect=cfg.start_timeout_seconds,
        read=cfg.stream_timeout_seconds,
    )


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "to_httpx_timeout",
]
