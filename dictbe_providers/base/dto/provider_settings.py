"""Typed settings object for provider adapter construction.

Purpose
-------
Provide a small, provider-agnostic DTO that captures the values an adapter is
constructed from. The configuration layer produces it; the factory turns it
into constructor keyword arguments. Adapters themselves never read process
environment or files.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and `.model_dump()` convenience.

Failure modes & side effects
----------------------------
- Pure data container: no I/O side effects. ``pydantic.ValidationError`` is
  raised for an unsupported provider name or values of the wrong type.
- Blank ``base_url``/``api_key``/``model`` are accepted here; adapters reject
  them at construction with a configuration error.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..constants import PROVIDER_ALIASES, SUPPORTED_PROVIDERS


def normalize_provider_name(name: Optional[str]) -> str:
    """Lowercase, trim and de-alias a provider name (``anthropics`` -> ``anthropic``)."""
    key = (name or "").strip().lower()
    return PROVIDER_ALIASES.get(key, key)


class ProviderSettings(BaseModel):
    """Provider adapter construction settings.

    Attributes
    ----------
    provider:
        Canonical provider name (``"openai"``, ``"anthropic"`` or
        ``"gemini"``). ``"anthropics"`` is accepted as an alias.
    base_url:
        API base URL (for example ``https://api.openai.com/v1``).
    api_key:
        Static credential: bearer token, ``x-api-key`` value or ``key`` query
        parameter depending on the provider.
    model:
        Default model identifier used when a request carries no override.
    anthropic_version:
        Value of the ``anthropic-version`` header (Anthropic only).
    max_tokens:
        Output token limit sent to Anthropic; non-positive means default.
    timeout_seconds:
        Optional per-request timeout applied on top of the shared client
        timeouts.
    """

    model_config = ConfigDict(extra="ignore")

    provider: str = "openai"
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: Optional[str] = None
    anthropic_version: Optional[str] = None
    max_tokens: Optional[int] = None
    timeout_seconds: Optional[float] = None

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: Any) -> str:
        name = normalize_provider_name(value if value is not None else "openai")
        if name not in SUPPORTED_PROVIDERS:
            raise ValueError(f"unsupported provider '{value}'; expected one of {', '.join(SUPPORTED_PROVIDERS)}")
        return name

    def adapter_kwargs(self) -> Dict[str, Any]:
        """Return constructor kwargs for the selected adapter.

        ``None`` values are dropped so adapter defaults apply. Anthropic-only
        fields are passed to the Anthropic adapter only.
        """
        out: Dict[str, Any] = {
            "base_url": self.base_url,
            "api_key": self.api_key,
            "model": self.model,
            "timeout_seconds": self.timeout_seconds,
        }
        if self.provider == "anthropic":
            out["version"] = self.anthropic_version
            out["max_tokens"] = self.max_tokens
        return {k: v for k, v in out.items() if v is not None}


__all__ = ["ProviderSettings", "normalize_provider_name"]
