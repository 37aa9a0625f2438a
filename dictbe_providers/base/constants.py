"""Base shared constants for provider adapters.

Central location to avoid scattering magic strings and default numbers across
the three wire adapters.

# pragma: allowlist secret
"""
from __future__ import annotations

# Canonical provider names and accepted aliases.
SUPPORTED_PROVIDERS = ("openai", "anthropic", "gemini")
PROVIDER_ALIASES = {"anthropics": "anthropic"}

# Event-stream framing shared by the OpenAI-style and Anthropic-style protocols.
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

# Hard cap for a single streamed line.
STREAM_LINE_BUFFER_MAX = 1024 * 1024

# Header values
JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

# Anthropic protocol defaults
ANTHROPIC_DEFAULT_VERSION = "2023-06-01"
ANTHROPIC_DEFAULT_MAX_TOKENS = 1024

# Gemini endpoint verbs
GEMINI_VERB_BLOCKING = "generateContent"
GEMINI_VERB_STREAMING = "streamGenerateContent"

__all__ = [
    "SUPPORTED_PROVIDERS",
    "PROVIDER_ALIASES",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "STREAM_LINE_BUFFER_MAX",
    "JSON_CONTENT_TYPE",
    "EVENT_STREAM_CONTENT_TYPE",
    "ANTHROPIC_DEFAULT_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "GEMINI_VERB_BLOCKING",
    "GEMINI_VERB_STREAMING",
]
