"""Package for LLM provider Gemini."""

from .models import ModelDescriptor, find_model, list_models, make_model
from .provider import GeminiProvider
from .plugin import GeminiProviderPlugin
from .settings import GeminiSettings

__all__ = [
    "GeminiProvider",
    "GeminiProviderPlugin",
    "GeminiSettings",
    "ModelDescriptor",
    "find_model",
    "list_models",
    "make_model",
]
