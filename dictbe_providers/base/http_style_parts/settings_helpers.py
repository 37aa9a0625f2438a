"""Construction-time validation helpers for HTTP chat providers."""

from __future__ import annotations

from typing import Optional

from ..errors import ErrorCode, ProviderError


def require_setting(value: Optional[str], *, provider: str, field: str) -> str:
    """Return ``value`` trimmed, raising a configuration error when blank.

    The message reads ``"<provider> <field> is required"``.
    """
    trimmed = (value or "").strip()
    if not trimmed:
        raise ProviderError(
            code=ErrorCode.CONFIGURATION,
            message=f"{provider} {field} is required",
            provider=provider,
            operation="config",
        )
    return trimmed


def resolve_model(override: Optional[str], default: str) -> str:
    """Use ``override`` unless it is blank after trimming.

    A non-blank override is returned as given, without trimming.
    """
    if override is None or not override.strip():
        return default
    return override


__all__ = ["require_setting", "resolve_model"]
