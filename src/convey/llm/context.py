"""
Structured context items.

A context item is the generic, tagged unit of conversation the host framework
exchanges with model backends: a user turn, a system instruction, a file
excerpt, a generated response or an error. Items are read through the
accessors below so plain dictionaries coming from the host are accepted too.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union


class StructType(str, Enum):
    """Tags the host framework emits for context items."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    ASSISTANT_RESPONSE = "assistant-response"
    FILE_CONTEXT = "file-context"
    PROJECT_CONTEXT = "project-context"
    ERROR = "error"


@dataclass(frozen=True)
class ContextItem:
    """One tagged unit of conversation content; properties are read-only."""

    type: str
    content: str
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))


def _tag_value(tag: Any) -> Optional[str]:
    if isinstance(tag, StructType):
        return tag.value
    if isinstance(tag, str) and tag:
        return tag
    return None


def get_type(item: Any) -> Optional[str]:
    """
    Return the tag of a context item.

    Accepts ContextItem instances and mappings carrying a "type" (or "role") key.

    Returns:
        The tag as a plain string, or None if the item has no usable tag
    """
    if isinstance(item, ContextItem):
        return _tag_value(item.type)
    if isinstance(item, Mapping):
        return _tag_value(item.get("type", item.get("role")))
    return None


def get_content(item: Any) -> Optional[str]:
    """
    Return the textual content of a context item.

    Returns:
        The content string, or None if the item carries no string content
    """
    if isinstance(item, ContextItem):
        content = item.content
    elif isinstance(item, Mapping):
        content = item.get("content")
    else:
        return None
    return content if isinstance(content, str) else None


def make_typed_struct(
    content: str,
    struct_type: Union[StructType, str],
    extra: Optional[Mapping[str, Any]] = None,
) -> ContextItem:
    """
    Build a context item.

    Args:
        content: Text carried by the item
        struct_type: Tag of the item
        extra: Additional properties (e.g. error code and status)

    Returns:
        New ContextItem
    """
    tag = _tag_value(struct_type)
    if tag is None:
        raise ValueError(f"Invalid context item type: {struct_type!r}")
    return ContextItem(type=tag, content=content, properties=extra or {})
