"""LLM Provider Factory

Resolves a provider name to a configured provider instance through the
plugin registry, so external packages can contribute providers.
"""

from convey.core import conf
from convey.plugins import get_plugin_registry

from .provider import BaseLLMProvider


def get_llm_provider(provider_name: str) -> BaseLLMProvider:
    """
    Factory function to create LLM provider based on configuration.

    The provider is built once from the "llm.<provider_name>" section of the
    Convey configuration and shared afterwards.

    Args:
        provider_name: Name of the provider to load (e.g. 'gemini')

    Returns:
        Instance of BaseLLMProvider

    Raises:
        ValueError: If provider is not found or its configuration is invalid

    Example:
        >>> provider = get_llm_provider("gemini")
        >>> models = provider.list_models()
    """
    return get_plugin_registry().provider(
        provider_name, conf.get(f"llm.{provider_name}")
    )
