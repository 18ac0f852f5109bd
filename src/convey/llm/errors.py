"""Exceptions raised by LLM providers."""

from typing import Any, List, Optional


class ConfigurationError(ValueError):
    """Raised when a provider is missing required configuration (e.g. API key)."""


class LLMError(RuntimeError):
    """Base class for runtime failures of an LLM exchange."""


class TransportError(LLMError):
    """
    Raised when the HTTP exchange itself fails.

    Covers requests that cannot be built, connection failures, timeouts and
    response bodies that are not JSON.
    """

    def __init__(
        self,
        message: str,
        status: str = "NETWORK_ERROR",
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.status = status
        self.status_code = status_code


class MalformedResponseError(LLMError):
    """Raised when a provider response lacks candidates, parts or text."""


class ProviderError(LLMError):
    """
    Raised when a provider exchange ends on the failure path.

    Carries the error-tagged context items that describe the failure.
    """

    def __init__(self, message: str, items: Optional[List[Any]] = None):
        super().__init__(message)
        self.items = items or []

    @property
    def code(self) -> Optional[Any]:
        """Error code of the first error item, if any."""
        if not self.items:
            return None
        return self.items[0].properties.get("code")

    @property
    def status(self) -> Optional[str]:
        """Error status of the first error item, if any."""
        if not self.items:
            return None
        return self.items[0].properties.get("status")
