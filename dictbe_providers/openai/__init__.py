"""
OpenAI provider package.

Exports:
- OpenAIProvider: Adapter implementing ChatClient for the Chat Completions API
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
