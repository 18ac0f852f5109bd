"""
Abstract base class for LLM providers.
Defines the interface that all providers must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence
import asyncio

from .context import ContextItem

ItemsCallback = Callable[[List[ContextItem]], Any]


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers (Gemini, etc.)."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the provider with configuration.

        Args:
            config: Provider section of the Convey configuration
        """
        self.config = config or {}

    @abstractmethod
    def list_models(self) -> List[Any]:
        """
        List the model variants this provider can invoke.

        Returns:
            Ordered list of model descriptors
        """

    @abstractmethod
    def send_context(
        self,
        context: Sequence[Any],
        model: Any,
        on_success: ItemsCallback,
        on_failure: ItemsCallback,
    ) -> "asyncio.Task":
        """
        Send a conversation to a model without blocking the caller.

        Exactly one of the callbacks is invoked, exactly once: `on_success`
        with the generated assistant-response items, or `on_failure` with a
        list holding one error item.

        Args:
            context: Ordered structured context items
            model: Model descriptor from `list_models`
            on_success: Callback receiving the response items
            on_failure: Callback receiving the error items

        Returns:
            The scheduled task; its result is the list handed to the callback

        Raises:
            ConfigurationError: If the provider is not configured to send
        """

    @abstractmethod
    async def generate(self, context: Sequence[Any], model: Any) -> List[ContextItem]:
        """
        Send a conversation to a model and wait for the reply.

        Args:
            context: Ordered structured context items
            model: Model descriptor from `list_models`

        Returns:
            The assistant-response items

        Raises:
            ConfigurationError: If the provider is not configured to send
            ProviderError: If the exchange ended on the failure path
        """
