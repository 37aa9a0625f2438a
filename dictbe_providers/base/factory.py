"""Adapter selection by provider name.

Maps the canonical names ``openai``, ``anthropic`` and ``gemini`` (plus the
``anthropics`` alias) to adapter classes. Adapter modules are imported on
first use with ``importlib`` so this layer holds no adapter imports.

The factory neither retries nor falls back to another provider: it returns a
constructed adapter or raises.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import PROVIDER_ALIASES
from .dto.provider_settings import ProviderSettings, normalize_provider_name
from .errors import ProviderError
from .interfaces import ChatClient


class UnknownProviderError(Exception):
    """No adapter could be built for the requested provider.

    Raised for a name outside the supported set, an adapter module or class
    that cannot be loaded, and constructor keyword arguments the adapter does
    not accept. Blank settings are not reported here: adapters raise
    ``ProviderError`` with code ``configuration`` and it propagates as is.
    """


def create_provider(provider: str, **kwargs: Any) -> ChatClient:
    """Shorthand for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


def create_client(settings: ProviderSettings, **kwargs: Any) -> ChatClient:
    """Build the adapter named by ``settings.provider``.

    ``kwargs`` (for example ``http_client``) win over values from ``settings``.
    """
    return ProviderFactory.create(settings.provider, params=settings, **kwargs)


class ProviderFactory:
    """Registry of adapter classes keyed by canonical provider name."""

    # canonical name -> (module path, class name)
    _PROVIDERS: Dict[str, Tuple[str, str]] = {
        "openai": ("dictbe_providers.openai.client", "OpenAIProvider"),
        "anthropic": ("dictbe_providers.anthropic.client", "AnthropicProvider"),
        "gemini": ("dictbe_providers.gemini.client", "GeminiProvider"),
    }

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        params: Optional[ProviderSettings] = None,
        **kwargs: Any,
    ) -> ChatClient:
        """Construct the adapter for ``provider``.

        Parameters
        ----------
        provider:
            Provider name; case and surrounding whitespace are ignored and
            aliases are resolved.
        params:
            Optional settings turned into constructor kwargs.
        **kwargs:
            Constructor kwargs (``api_key``, ``base_url``, ``model``,
            ``http_client`` ...); they win over ``params``.

        Raises
        ------
        UnknownProviderError
            Unsupported name, unloadable adapter or rejected kwargs.
        ProviderError
            The adapter rejected its settings (code ``configuration``).
        """
        ctor_kwargs = cls._coerce_params(params, kwargs)
        name = normalize_provider_name(provider)
        entry = cls._PROVIDERS.get(name)
        if entry is None:
            raise UnknownProviderError(
                f"Unknown provider '{provider}'; supported: {', '.join(cls._PROVIDERS)}"
            )
        module_path, class_name = entry

        try:
            adapter_cls = getattr(import_module(module_path), class_name)
        except (ImportError, AttributeError) as exc:  # pragma: no cover - packaging error
            raise UnknownProviderError(f"Cannot load adapter {module_path}.{class_name}: {exc}") from exc

        try:
            return adapter_cls(**ctor_kwargs)
        except ProviderError:
            raise
        except TypeError as exc:
            raise UnknownProviderError(f"Invalid arguments for '{name}' adapter: {exc}") from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        return tuple(cls._PROVIDERS)

    @classmethod
    def aliases(cls) -> Dict[str, str]:
        return dict(PROVIDER_ALIASES)

    @staticmethod
    def _coerce_params(params: Optional[ProviderSettings], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        merged = params.adapter_kwargs() if params is not None else {}
        merged.update(kwargs)
        return merged


__all__ = [
    "ProviderFactory",
    "UnknownProviderError",
    "create_provider",
    "create_client",
]
