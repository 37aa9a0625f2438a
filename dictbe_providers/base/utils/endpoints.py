"""Endpoint helpers for providers with a versioned REST root."""
from __future__ import annotations


def build_versioned_endpoint(base_url: str, path: str) -> str:
    """Join ``base_url`` and ``path`` under a ``/v1`` root.

    Trailing slashes are stripped from ``base_url``; ``/v1`` is inserted
    unless the base already ends with it.

    >>> build_versioned_endpoint("https://api.example.com/", "/messages")
    'https://api.example.com/v1/messages'
    >>> build_versioned_endpoint("https://api.example.com/v1", "/messages")
    'https://api.example.com/v1/messages'
    """
    base = base_url.rstrip("/")
    if base.endswith("/v1"):
        return base + path
    return base + "/v1" + path


__all__ = ["build_versioned_endpoint"]
