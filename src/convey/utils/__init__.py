"""Package for Convey utilities."""

from .utils import conf_get, truncate

__all__ = ["conf_get", "truncate"]
