"""Package for Convey core."""

from convey.core.config import ConveyConfig, conf

__all__ = ["ConveyConfig", "conf"]
