"""dictbe_providers.config.defaults
================================

Central place for small, stable default values used by the configuration
layer. These defaults can be overridden via an external config file,
environment variables or explicit overrides, but provide sensible fallbacks
for local development and tests.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).

This module intentionally avoids importing from other provider packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# Provider used when neither the caller nor the config file names one.
DEFAULT_PROVIDER = "openai"

# OpenAI defaults
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

# Anthropic defaults
ANTHROPIC_DEFAULT_MODEL = "claude-3-5-haiku-latest"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"

# Gemini defaults
GEMINI_DEFAULT_MODEL = "gemini-2.0-flash"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


__all__ = [
    "DEFAULT_PROVIDER",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_BASE_URL",
]
