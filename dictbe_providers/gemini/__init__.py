"""
Gemini provider package.

Exports:
- GeminiProvider: Adapter implementing ChatClient for generateContent
"""

from .client import GeminiProvider

__all__ = ["GeminiProvider"]
