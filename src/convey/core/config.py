"""Convey configuration."""

from typing import Dict, Any, Optional
from pathlib import Path
import copy
import json

from convey import utils


CONFIG_FILENAMES = ("convey.json", "convey.config.json")


class ConveyConfig:
    """Manages Convey configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Load configuration from file or use defaults.

        Args:
            config_path: Path to config JSON file
        """
        if config_path and Path(config_path).exists():
            with open(config_path, encoding="utf-8") as f:
                self.config = json.load(f)
            self.path = Path(config_path).resolve().as_posix()
        else:
            self.config = self.get_default_config()
            self.path = None

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return default configuration."""
        return copy.deepcopy(
            {
                "llm": {
                    "gemini": {
                        "provider": "gemini",
                        "model": "gemini-2.5-flash",
                        "api_key": "GEMINI_API_KEY",  # Environment variable for API key
                        "max_tokens": 65536,
                        "temperature": 0.7,
                        "timeout": 60,
                    },
                },
                "output": {
                    "level": "info",
                },
            }
        )

    def get(self, key_path: str, default=None):
        """
        Get configuration value using dot notation.

        Example: config.get('llm.gemini.model')
        """
        return utils.conf_get(self.config, key_path, default)


def initialize(project_dir: Optional[Path] = None) -> ConveyConfig:
    """Initialize and return the Convey configuration."""

    project_dir = project_dir or Path.cwd()
    selected_config = None
    for fname in CONFIG_FILENAMES:
        candidate = project_dir / fname
        if candidate.exists():
            selected_config = str(candidate)
            break

    return ConveyConfig(config_path=selected_config)


conf = initialize()
