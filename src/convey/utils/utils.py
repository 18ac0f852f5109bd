"""Helper functions for configuration lookups and display."""

from typing import Any, Dict, Optional


def conf_get(config: Optional[Dict[str, Any]], key_path: str, default=None):
    """Get configuration value using dot notation.

    Args:
        config: Configuration dictionary
        key_path: Dot notation key path
        default: Default value if key not found

    Returns:
        Configuration value or default

    Example: conf_get(config, 'llm.gemini.model')
    """
    keys = key_path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


def truncate(text: str, limit: int = 80) -> str:
    """Shorten text to a single line of at most `limit` characters.

    Args:
        text: Text to shorten
        limit: Maximum length of the result

    Returns:
        Text with newlines flattened, suffixed by "..." when cut
    """
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: max(limit - 3, 0)] + "..."
