"""DTO validation package for providers."""

from .provider_settings import ProviderSettings, normalize_provider_name

__all__ = [
    "ProviderSettings",
    "normalize_provider_name",
]
