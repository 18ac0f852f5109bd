"""
Interface of installable LLM provider plugins.

A plugin is a small factory: it names a backend, publishes the JSON schema of
its "llm.<name>" configuration section and builds the provider from it.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from jsonschema import Draft7Validator

if TYPE_CHECKING:
    from convey.llm.provider import BaseLLMProvider


class LLMProviderPlugin(ABC):
    """
    Base class for LLM provider plugins.

    Subclasses set `name`, `version`, `description` and `config_schema` as
    class attributes and implement `create_provider`.
    """

    name: str = ""
    version: str = "0.0.0"
    description: str = ""
    config_schema: Optional[Dict[str, Any]] = None

    def config_errors(self, config: Optional[Dict[str, Any]]) -> List[str]:
        """
        Describe every way the configuration violates `config_schema`.

        Returns:
            Messages formatted as "<field path>: <problem>", empty when valid
        """
        if self.config_schema is None:
            return []

        validator = Draft7Validator(self.config_schema)
        return [
            f"{'.'.join(str(p) for p in error.absolute_path) or '<root>'}: {error.message}"
            for error in validator.iter_errors(config)
        ]

    @abstractmethod
    def create_provider(self, config: Dict[str, Any]) -> "BaseLLMProvider":
        """
        Build a provider from a validated configuration section.

        Args:
            config: The "llm.<name>" section of convey.json
        """
