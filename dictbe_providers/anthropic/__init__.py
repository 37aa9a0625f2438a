"""
Anthropic provider package.

Exports:
- AnthropicProvider: Adapter implementing ChatClient for the Messages API
"""

from .client import AnthropicProvider

__all__ = ["AnthropicProvider"]
