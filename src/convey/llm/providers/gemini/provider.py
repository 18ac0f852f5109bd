"""
Google Gemini LLM Provider

Implements the BaseLLMProvider interface for Google's Gemini models on top of
the generateContent REST endpoint.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence
import asyncio
import logging

import httpx

from convey.llm.context import ContextItem
from convey.llm.errors import (
    ConfigurationError,
    MalformedResponseError,
    ProviderError,
    TransportError,
)
from convey.llm.provider import BaseLLMProvider, ItemsCallback
from convey.llm.transport import async_request
from convey.utils import truncate

from .messages import build_request
from .models import ModelDescriptor, list_models
from .responses import error_item, translate_response
from .settings import DEFAULT_API_KEY_ENV, GeminiSettings

_logger = logging.getLogger("convey.console")


def _invoke(callback: Callable[..., Any], *args: Any) -> Any:
    """Run a completion callback; its failure must not trigger another callback."""
    try:
        return callback(*args)
    # pylint: disable=broad-except
    except Exception:
        _logger.error("Completion callback %r raised", callback, exc_info=True)
        return None


class GeminiProvider(BaseLLMProvider):
    """LLM provider for Google Gemini models."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            config: The "llm.gemini" configuration section
            transport: Optional httpx transport used for every request
        """
        super().__init__(config)
        self.settings = GeminiSettings.from_config(self.config)
        self.transport = transport

    def _require_api_key(self) -> str:
        if not self.settings.api_key:
            api_key_env = self.config.get("api_key", DEFAULT_API_KEY_ENV)
            raise ConfigurationError(f"{api_key_env} environment variable not set")
        return self.settings.api_key

    def list_models(self) -> List[ModelDescriptor]:
        """List Gemini model variants using the configured defaults."""
        return list_models(self.settings)

    def send_request(
        self,
        url: str,
        payload: Dict[str, Any],
        on_success: Callable[[Any], Any],
        on_failure: Callable[[TransportError], Any],
        timeout: Optional[float] = None,
    ) -> "asyncio.Task":
        """
        POST a payload to a Gemini endpoint without blocking the caller.

        The API key is appended as the "key" query parameter. Exactly one
        callback runs, exactly once: `on_success` with the decoded JSON body,
        or `on_failure` with the TransportError.

        Args:
            url: Endpoint URL
            payload: JSON-serializable request body
            on_success: Callback receiving the decoded response
            on_failure: Callback receiving the transport error
            timeout: Request timeout in seconds, defaults to the configured one

        Returns:
            The scheduled task; its result is the return value of the callback

        Raises:
            ConfigurationError: If no API key is configured
            RuntimeError: If called outside a running event loop
        """
        api_key = self._require_api_key()
        loop = asyncio.get_running_loop()
        timeout = self.settings.timeout if timeout is None else timeout

        return loop.create_task(
            self._request(url, payload, api_key, timeout, on_success, on_failure)
        )

    async def _request(
        self,
        url: str,
        payload: Dict[str, Any],
        api_key: str,
        timeout: float,
        on_success: Callable[[Any], Any],
        on_failure: Callable[[TransportError], Any],
    ) -> Any:
        try:
            data = await async_request(
                url,
                "POST",
                body=payload,
                headers={"Content-Type": "application/json"},
                timeout=timeout,
                params={"key": api_key},
                transport=self.transport,
            )
        except TransportError as e:
            _logger.error("Gemini request failed: %s", e)
            return _invoke(on_failure, e)
        # pylint: disable=broad-except
        except Exception as e:
            _logger.error("Gemini request could not be sent: %s", e, exc_info=True)
            error = TransportError(f"Request failed: {e}", status="REQUEST_ERROR")
            error.__cause__ = e
            return _invoke(on_failure, error)
        return _invoke(on_success, data)

    def send_context(
        self,
        context: Sequence[Any],
        model: ModelDescriptor,
        on_success: ItemsCallback,
        on_failure: ItemsCallback,
    ) -> "asyncio.Task":
        """
        Send a conversation to a Gemini model without blocking the caller.

        Provider errors, transport errors and malformed responses all reach
        `on_failure` as a list holding one error item.

        Returns:
            The scheduled task; its result is the list handed to the callback
        """
        payload = build_request(context, model)
        _logger.debug(
            "Sending %d message(s) to %s", len(payload["contents"]), model.version
        )

        def handle_response(data: Any) -> List[ContextItem]:
            try:
                translation = translate_response(data)
            except MalformedResponseError as e:
                _logger.error("Malformed Gemini response: %s", e)
                return fail([error_item(str(e), None, "MALFORMED_RESPONSE")])

            if translation.failed:
                _logger.warning(
                    "Gemini returned an error: %s", truncate(translation.items[0].content)
                )
                return fail(translation.items)

            _invoke(on_success, translation.items)
            return translation.items

        def handle_transport_error(error: TransportError) -> List[ContextItem]:
            return fail([error_item(str(error), error.status_code, error.status)])

        def fail(items: List[ContextItem]) -> List[ContextItem]:
            _invoke(on_failure, items)
            return items

        return self.send_request(
            model.api_url, payload, handle_response, handle_transport_error
        )

    async def generate(
        self, context: Sequence[Any], model: ModelDescriptor
    ) -> List[ContextItem]:
        """
        Send a conversation to a Gemini model and wait for the reply.

        Returns:
            The assistant-response items

        Raises:
            ConfigurationError: If no API key is configured
            ProviderError: If the exchange ended on the failure path
        """
        future: "asyncio.Future[List[ContextItem]]" = (
            asyncio.get_running_loop().create_future()
        )

        def reject(items: List[ContextItem]) -> None:
            message = items[0].content if items else "Gemini request failed"
            future.set_exception(ProviderError(message, items))

        task = self.send_context(context, model, future.set_result, reject)
        try:
            return await future
        finally:
            await task
