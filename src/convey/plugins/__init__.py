"""Package for Convey plugins.

LLM providers are installed as plugins: classes advertised in the
"convey.llm.providers" entry point group and loaded by the registry.
"""

from .plugin import LLMProviderPlugin
from .registry import LLM_PROVIDERS_GROUP, PluginRegistry, get_plugin_registry

__all__ = [
    "LLM_PROVIDERS_GROUP",
    "LLMProviderPlugin",
    "PluginRegistry",
    "get_plugin_registry",
]
