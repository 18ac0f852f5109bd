"""Google Gemini LLM provider plugin."""

from typing import Any, Dict

from convey.plugins import LLMProviderPlugin

from .provider import GeminiProvider


class GeminiProviderPlugin(LLMProviderPlugin):
    """Builds GeminiProvider from the "llm.gemini" configuration section."""

    name = "gemini"
    version = "1.0.0"
    description = "Google Gemini LLM provider (generateContent REST API)"
    config_schema = {
        "type": "object",
        "properties": {
            "provider": {"type": "string", "const": "gemini"},
            "model": {"type": "string"},
            "api_key": {"type": "string", "minLength": 1},
            "max_tokens": {"type": "integer", "minimum": 1},
            "temperature": {"type": "number", "minimum": 0, "maximum": 2},
            "timeout": {"type": "number", "exclusiveMinimum": 0},
            "base_url": {"type": "string"},
            "api_version": {"type": "string"},
        },
        "required": ["provider", "api_key"],
    }

    def create_provider(self, config: Dict[str, Any]) -> GeminiProvider:
        return GeminiProvider(config)
