"""Registry of the LLM provider plugins installed alongside Convey.

Plugins advertise themselves in the "convey.llm.providers" entry point
group. The registry loads them once, checks each provider configuration
against its plugin's schema and keeps one provider instance per name.
"""

from functools import lru_cache
from importlib.metadata import entry_points
from typing import Any, Dict, List, Optional
import logging

from .plugin import LLMProviderPlugin

LLM_PROVIDERS_GROUP = "convey.llm.providers"

_logger = logging.getLogger("convey.console")


class PluginRegistry:
    """LLM provider plugins by name, and the providers built from them."""

    def __init__(self, group: str = LLM_PROVIDERS_GROUP):
        self.group = group
        self._plugins: Dict[str, LLMProviderPlugin] = {}
        self._providers: Dict[str, Any] = {}
        self._discovered = False

    def discover(self) -> None:
        """Load the plugins of the entry point group, once.

        Entry points that fail to load or do not provide an LLMProviderPlugin
        are logged and skipped. Plugins registered by hand keep precedence.
        """
        if self._discovered:
            return
        self._discovered = True
        _logger.debug("Discovering plugins in group: %s", self.group)

        for ep in entry_points(group=self.group):
            try:
                plugin = ep.load()()
            # pylint: disable=broad-except
            except Exception as e:
                _logger.error(
                    "Failed to load plugin '%s', error: %s", ep.name, e, exc_info=True
                )
                continue

            if not isinstance(plugin, LLMProviderPlugin):
                _logger.warning(
                    "Entry point '%s' is not an LLM provider plugin, skipping.", ep.name
                )
                continue
            if plugin.name in self._plugins:
                _logger.debug("Plugin '%s' already registered, keeping it.", plugin.name)
                continue
            self.register(plugin)

    def register(self, plugin: LLMProviderPlugin) -> None:
        """Add a plugin, replacing any plugin and provider of the same name.

        Raises:
            TypeError: If `plugin` is not an LLMProviderPlugin
        """
        if not isinstance(plugin, LLMProviderPlugin):
            raise TypeError(f"{plugin!r} is not an LLM provider plugin.")
        if plugin.name in self._plugins:
            _logger.warning("Plugin '%s' already registered, overwriting", plugin.name)

        self._plugins[plugin.name] = plugin
        self._providers.pop(plugin.name, None)
        _logger.debug("Registered plugin: '%s' %s", plugin.name, plugin.version)

    def get(self, name: str) -> Optional[LLMProviderPlugin]:
        """Plugin registered under `name`, or None."""
        self.discover()
        return self._plugins.get(name)

    def plugins(self) -> List[LLMProviderPlugin]:
        """All plugins, in registration order."""
        self.discover()
        return list(self._plugins.values())

    def provider(self, name: str, config: Optional[Dict[str, Any]] = None):
        """
        Provider built by the plugin `name`, created on first use.

        Args:
            name: Plugin name (e.g. 'gemini')
            config: The "llm.<name>" configuration section

        Returns:
            The provider instance, shared by later calls

        Raises:
            ValueError: If the plugin is unknown or the configuration invalid
        """
        if name in self._providers:
            return self._providers[name]

        plugin = self.get(name)
        if plugin is None:
            _logger.error("LLM provider plugin '%s' not found", name)
            raise ValueError(f"LLM provider '{name}' not found.")

        errors = plugin.config_errors(config)
        if errors:
            raise ValueError(
                f"Invalid configuration for plugin '{name}': {'; '.join(errors)}"
            )

        provider = plugin.create_provider(config or {})
        self._providers[name] = provider
        _logger.debug("Initialized provider from plugin '%s'.", name)
        return provider


@lru_cache(maxsize=None)
def get_plugin_registry() -> PluginRegistry:
    """Shared registry; `get_plugin_registry.cache_clear()` starts afresh."""
    return PluginRegistry()
