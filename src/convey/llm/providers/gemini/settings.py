"""Immutable settings for the Gemini provider."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
import os

DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSION = "v1beta"
DEFAULT_MAX_TOKENS = 65536
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class GeminiSettings:
    """Settings resolved once from configuration and environment."""

    api_key: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    timeout: float = DEFAULT_TIMEOUT
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION

    @classmethod
    def from_config(
        cls,
        config: Optional[Dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "GeminiSettings":
        """
        Build settings from a plugin configuration.

        The "api_key" entry names the environment variable holding the key.

        Args:
            config: Plugin configuration (e.g. the "llm.gemini" section)
            environ: Environment mapping, defaults to os.environ

        Returns:
            GeminiSettings instance
        """
        config = config or {}
        environ = os.environ if environ is None else environ

        api_key_env = config.get("api_key", DEFAULT_API_KEY_ENV)
        return cls(
            api_key=environ.get(api_key_env) or None,
            max_tokens=int(config.get("max_tokens", DEFAULT_MAX_TOKENS)),
            temperature=float(config.get("temperature", DEFAULT_TEMPERATURE)),
            timeout=float(config.get("timeout", DEFAULT_TIMEOUT)),
            base_url=config.get("base_url", DEFAULT_BASE_URL).rstrip("/"),
            api_version=config.get("api_version", DEFAULT_API_VERSION),
        )
