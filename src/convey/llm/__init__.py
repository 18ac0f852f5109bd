"""
LLM providers for Convey.

Exposes the provider factory, the provider interface and the structured
context items providers exchange with the host.
"""

from .context import ContextItem, StructType, get_content, get_type, make_typed_struct
from .errors import (
    ConfigurationError,
    LLMError,
    MalformedResponseError,
    ProviderError,
    TransportError,
)
from .factory import get_llm_provider
from .provider import BaseLLMProvider

__all__ = [
    "get_llm_provider",
    "BaseLLMProvider",
    "ContextItem",
    "StructType",
    "get_content",
    "get_type",
    "make_typed_struct",
    "ConfigurationError",
    "LLMError",
    "MalformedResponseError",
    "ProviderError",
    "TransportError",
]
