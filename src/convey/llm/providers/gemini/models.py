"""
Gemini model registry.

Model descriptors are static: building the list performs no I/O and returns
the same ordered sequence for the same settings.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .settings import GeminiSettings

PROVIDER_NAME = "Google"

DEFAULT_ROLE_MAPPING: Mapping[str, str] = MappingProxyType(
    {
        "system": "user",
        "assistant": "model",
        "user": "user",
    }
)

# Published model versions, most capable first.
MODEL_VERSIONS = (
    "gemini-2.5-pro",
    "gemini-2.5-flash",
    "gemini-2.5-flash-lite",
    "gemini-2.0-flash",
)

LOW_TEMPERATURE = 0.2


@dataclass(frozen=True)
class ModelDescriptor:
    """Static description of one invocable model variant."""

    name: str
    version: str
    api_url: str
    provider: str = PROVIDER_NAME
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    role_mapping: Mapping[str, str] = field(default_factory=lambda: DEFAULT_ROLE_MAPPING)
    rest_params: Mapping[str, Any] = field(default_factory=dict)


def model_url(version: str, settings: Optional[GeminiSettings] = None) -> str:
    """Return the generateContent endpoint for a model version."""
    settings = settings or GeminiSettings()
    return (
        f"{settings.base_url}/{settings.api_version}/models/{version}:generateContent"
    )


def make_model(
    version: str,
    *,
    name: Optional[str] = None,
    max_tokens: Optional[int] = None,
    temperature: Optional[float] = None,
    role_mapping: Optional[Mapping[str, str]] = None,
    rest_params: Optional[Mapping[str, Any]] = None,
    settings: Optional[GeminiSettings] = None,
) -> ModelDescriptor:
    """
    Build a model descriptor.

    Args:
        version: API model id (e.g. "gemini-2.5-flash")
        name: Display name, defaults to "Google <version>" or
            "Google <version> (t<temperature>)" when a temperature is given
        max_tokens: Maximum output tokens, None leaves the provider default
        temperature: Sampling temperature, None leaves the provider default
        role_mapping: Generic role -> provider role table
        rest_params: Extra top-level request fields
        settings: Settings providing the endpoint base URL and API version

    Returns:
        ModelDescriptor
    """
    if name is None:
        name = f"{PROVIDER_NAME} {version}"
        if temperature is not None:
            name = f"{name} (t{temperature})"

    return ModelDescriptor(
        name=name,
        version=version,
        api_url=model_url(version, settings),
        temperature=temperature,
        max_tokens=max_tokens,
        role_mapping=MappingProxyType(
            dict(DEFAULT_ROLE_MAPPING if role_mapping is None else role_mapping)
        ),
        rest_params=MappingProxyType(dict(rest_params or {})),
    )


def list_models(settings: Optional[GeminiSettings] = None) -> List[ModelDescriptor]:
    """
    List the available Gemini model variants.

    Every version is published with the configured max tokens and the provider's
    default temperature, followed by two "gemini-2.5-flash" variants: one at the
    configured default temperature and one at a low temperature.

    Args:
        settings: Provider settings, defaults to GeminiSettings()

    Returns:
        Ordered list of ModelDescriptor
    """
    settings = settings or GeminiSettings()

    models = [
        make_model(version, max_tokens=settings.max_tokens, settings=settings)
        for version in MODEL_VERSIONS
    ]
    for temperature in dict.fromkeys((settings.temperature, LOW_TEMPERATURE)):
        models.append(
            make_model(
                "gemini-2.5-flash",
                max_tokens=settings.max_tokens,
                temperature=temperature,
                settings=settings,
            )
        )
    return models


def find_model(
    name_or_version: str,
    models: Optional[Sequence[ModelDescriptor]] = None,
) -> ModelDescriptor:
    """
    Find a model by display name or API version.

    Display names are matched first; a version returns its first descriptor.

    Raises:
        KeyError: If no model matches
    """
    models = list_models() if models is None else models
    for model in models:
        if model.name == name_or_version:
            return model
    for model in models:
        if model.version == name_or_version:
            return model
    raise KeyError(f"Unknown Gemini model: {name_or_version}")


def describe(model: ModelDescriptor) -> Dict[str, Any]:
    """Return a plain dictionary view of a descriptor."""
    return {
        "name": model.name,
        "provider": model.provider,
        "version": model.version,
        "api_url": model.api_url,
        "temperature": model.temperature,
        "max_tokens": model.max_tokens,
    }
