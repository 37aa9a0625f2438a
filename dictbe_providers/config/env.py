"""dictbe_providers.config.env
===========================

Process-environment sources for provider settings.

Purpose
-------
- Map settings fields to ``<PROVIDER>_<SUFFIX>`` variables (``OPENAI_MODEL``,
  ``ANTHROPIC_VERSION`` ...).
- Resolve the credential for a provider, honoring historical variable names
  (Gemini accepts ``GOOGLE_API_KEY`` after ``GEMINI_API_KEY``).
- Load a ``.env`` file once per process.

Failure Modes
-------------
- Nothing here raises for unknown providers or unset variables; empty results
  let the caller fall back to other sources.
"""
from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# settings field -> variable suffix
ENV_FIELD_SUFFIXES: Dict[str, str] = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "anthropic_version": "VERSION",
    "max_tokens": "MAX_TOKENS",
    "timeout_seconds": "TIMEOUT_SECONDS",
}

# provider -> credential variables in priority order
CREDENTIAL_VARS: Dict[str, Tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example")

_dotenv_loaded = False


def looks_like_placeholder(val: Optional[str]) -> bool:
    """Return True for template values such as ``sk-placeholder`` or ``test_key``."""
    if val is None:
        return False
    v = str(val).strip().lower()
    return v.startswith("test_") or any(m in v for m in _PLACEHOLDER_MARKERS)


def credential_env_vars(provider: str) -> Tuple[str, ...]:
    return CREDENTIAL_VARS.get((provider or "").lower(), ())


def read_credential(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, variable)`` for the first non-empty credential variable.

    ``(None, None)`` when none is set.
    """
    for name in credential_env_vars(provider):
        if val := os.environ.get(name):
            return val, name
    return None, None


def env_settings(provider: str) -> Dict[str, str]:
    """Return the settings fields set through ``<PROVIDER>_*`` variables."""
    prefix = provider.upper()
    out: Dict[str, str] = {}
    for field, suffix in ENV_FIELD_SUFFIXES.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    return out


def load_dotenv_once() -> None:
    """Apply ``KEY=VALUE`` lines from ``$DOTENV_FILE`` (default ``.env``).

    Runs once per process (until :func:`forget_dotenv`). A variable is written
    only when it is unset or holds a placeholder; comments, blank lines and
    lines without ``=`` are ignored and surrounding quotes are stripped.
    """
    global _dotenv_loaded
    if _dotenv_loaded:
        return
    _dotenv_loaded = True
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for raw in fh:
            line = raw.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = (part.strip() for part in line.split("=", 1))
            if not key:
                continue
            current = os.environ.get(key)
            if current is None or looks_like_placeholder(current):
                os.environ[key] = value.strip("\"'")


def forget_dotenv() -> None:
    global _dotenv_loaded
    _dotenv_loaded = False


__all__ = [
    "ENV_FIELD_SUFFIXES",
    "CREDENTIAL_VARS",
    "looks_like_placeholder",
    "credential_env_vars",
    "read_credential",
    "env_settings",
    "load_dotenv_once",
    "forget_dotenv",
]
