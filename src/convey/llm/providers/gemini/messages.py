"""
Translate structured context items into Gemini request payloads.

Gemini only knows two conversation roles, "user" and "model", so every
context item tag is mapped onto one of them.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional
import copy

from convey.llm.context import StructType, get_content, get_type

from .models import ModelDescriptor

# Role of every tag the host framework emits, used when a model's own
# role mapping has no entry for the tag.
FRAMEWORK_ROLE_MAPPING: Mapping[str, str] = MappingProxyType(
    {
        StructType.SYSTEM.value: "user",
        StructType.USER.value: "user",
        StructType.ASSISTANT.value: "model",
        StructType.ASSISTANT_RESPONSE.value: "model",
        StructType.FILE_CONTEXT.value: "user",
        StructType.PROJECT_CONTEXT.value: "user",
        StructType.ERROR.value: "model",
    }
)


def resolve_role(tag: str, role_mapping: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve a context item tag to a Gemini role.

    Lookup order: the model's role mapping, the framework table, the tag itself.
    """
    if role_mapping and tag in role_mapping:
        return role_mapping[tag]
    if tag in FRAMEWORK_ROLE_MAPPING:
        return FRAMEWORK_ROLE_MAPPING[tag]
    return tag


def to_provider_message(
    item: Any, role_mapping: Optional[Mapping[str, str]] = None
) -> Optional[Dict[str, Any]]:
    """Convert one context item, or return None if it cannot be read."""
    tag = get_type(item)
    content = get_content(item)
    if tag is None or content is None:
        return None
    return {"role": resolve_role(tag, role_mapping), "parts": [{"text": content}]}


def to_provider_messages(
    items: Iterable[Any], role_mapping: Optional[Mapping[str, str]] = None
) -> List[Dict[str, Any]]:
    """
    Convert context items into Gemini "contents" entries.

    Items without a tag or string content are dropped; the order of the
    remaining items is preserved.

    Args:
        items: Ordered context items
        role_mapping: Generic role -> Gemini role table of the target model

    Returns:
        List of {"role": ..., "parts": [{"text": ...}]} dictionaries
    """
    messages = []
    for item in items:
        message = to_provider_message(item, role_mapping)
        if message is not None:
            messages.append(message)
    return messages


def generation_config(model: ModelDescriptor) -> Optional[Dict[str, Any]]:
    """Return the generationConfig for a model, or None if nothing is set."""
    config: Dict[str, Any] = {}
    if model.max_tokens is not None:
        config["maxOutputTokens"] = model.max_tokens
    if model.temperature is not None:
        config["temperature"] = model.temperature
    return config or None


def build_request(items: Iterable[Any], model: ModelDescriptor) -> Dict[str, Any]:
    """
    Build the generateContent request payload for a model.

    Args:
        items: Ordered context items
        model: Target model descriptor

    Returns:
        Request payload; rest_params of the model override top-level fields
    """
    payload: Dict[str, Any] = {
        "contents": to_provider_messages(items, model.role_mapping),
    }
    config = generation_config(model)
    if config is not None:
        payload["generationConfig"] = config
    payload.update(copy.deepcopy(dict(model.rest_params)))
    return payload
