"""Layered provider configuration.

Settings for one provider are merged from these sources, later wins:

1. Built-in defaults (``config.defaults``)
2. The optional JSON or YAML file named by ``PROVIDERS_CONFIG_FILE``: first its
   ``llm`` section (when its ``type`` names the provider), then the section
   named after the provider
3. ``<PROVIDER>_*`` environment variables, after a one-time ``.env`` load
4. Credential aliases (``GOOGLE_API_KEY``) when no key is set yet
5. Explicit overrides passed by the caller (``None`` values are skipped)

Adapters never import this package; callers turn the merged mapping into a
``ProviderSettings`` and hand it to the factory.

Config file example::

    llm:
      type: anthropics
      url: https://api.anthropic.com
      token: sk-...
      model: claude-3-5-haiku-latest
    gemini:
      model: gemini-2.0-flash
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..base.dto.provider_settings import ProviderSettings, normalize_provider_name
from ..base.logging import get_logger
from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)
from .env import env_settings, forget_dotenv, load_dotenv_once, read_credential

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "gemini": {"model": GEMINI_DEFAULT_MODEL, "base_url": GEMINI_DEFAULT_BASE_URL},
}

# ``llm`` section key -> settings field
LLM_SECTION_FIELDS = {
    "url": "base_url",
    "token": "api_key",  # pragma: allowlist secret - field name, not a secret
    "model": "model",
}

CONFIG_FILE_ENV = "PROVIDERS_CONFIG_FILE"

_parsed_files: Dict[str, Dict[str, Any]] = {}

_logger = get_logger("providers.config")


def _parse_config_text(text: str, path: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            _logger.warning("config file %s is neither JSON nor YAML: %s", path, exc)
            return {}
    if not isinstance(data, dict):
        _logger.warning("config file %s must hold a mapping; ignoring it", path)
        return {}
    return data


def load_config_file() -> Dict[str, Any]:
    """Return the mapping stored in ``$PROVIDERS_CONFIG_FILE`` (``{}`` when unset).

    Each path is parsed once; :func:`reset_config_cache` forgets parsed files.
    A missing or unparsable file is logged and treated as empty.
    """
    key = os.environ.get(CONFIG_FILE_ENV)
    if not key:
        return {}
    target = Path(key)
    if key not in _parsed_files:
        if target.is_file():
            _parsed_files[key] = _parse_config_text(target.read_text(encoding="utf-8"), key)
        else:
            _logger.warning("config file not found: %s", key)
            _parsed_files[key] = {}
    return _parsed_files[key]


def reset_config_cache() -> None:
    """Forget parsed config files and allow the ``.env`` file to load again."""
    _parsed_files.clear()
    forget_dotenv()


def _llm_section() -> Dict[str, Any]:
    section = load_config_file().get("llm")
    return section if isinstance(section, dict) else {}


def _file_settings(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    llm = _llm_section()
    if llm and normalize_provider_name(llm.get("type") or DEFAULT_PROVIDER) == provider:
        out.update({field: llm[key] for key, field in LLM_SECTION_FIELDS.items() if llm.get(key) not in (None, "")})
    section = load_config_file().get(provider)
    if isinstance(section, dict):
        out.update(section)
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged settings mapping for ``provider`` (aliases accepted)."""
    load_dotenv_once()
    name = normalize_provider_name(provider)
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    cfg.update(_file_settings(name))
    cfg.update(env_settings(name))
    if not cfg.get("api_key"):
        key, _ = read_credential(name)
        if key:
            cfg["api_key"] = key
    if overrides:
        cfg.update({k: v for k, v in overrides.items() if v is not None})
    return cfg


def load_settings(provider: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> ProviderSettings:
    """Return validated ``ProviderSettings`` for ``provider``.

    Without ``provider`` the config file's ``llm.type`` decides, then
    ``DEFAULT_PROVIDER``.

    Raises
    ------
    pydantic.ValidationError
        If the provider is unsupported or a value has the wrong type.
    """
    load_dotenv_once()
    name = provider or _llm_section().get("type") or DEFAULT_PROVIDER
    cfg = get_provider_config(name, overrides)
    cfg.pop("provider", None)
    return ProviderSettings(provider=name, **cfg)


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "load_settings",
    "load_config_file",
    "get_model",
    "reset_config_cache",
]
