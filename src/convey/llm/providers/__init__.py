"""Package for LLM providers."""

from .gemini import GeminiProviderPlugin

__all__ = [
    "GeminiProviderPlugin",
]
