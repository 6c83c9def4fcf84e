"""Remote text-generation providers used to turn violations into suggestions."""

from __future__ import annotations

from typing import Dict, List, Optional, Type

import httpx

from ..config import InsightsConfig
from ..errors import ConfigurationError
from .clients import (
    GENERATION_ERROR,
    GENERATION_UNAVAILABLE,
    NO_SUGGESTIONS,
    AnthropicClient,
    HuggingFaceClient,
    InsightClient,
    OpenAIClient,
    SleepFunc,
)

_PROVIDERS: Dict[str, Type[InsightClient]] = {
    "huggingface": HuggingFaceClient,
    "openai": OpenAIClient,
    "anthropic": AnthropicClient,
}

_ALIASES: Dict[str, str] = {
    "hf": "huggingface",
    "hugging-face": "huggingface",
    "claude": "anthropic",
}


def normalise_provider(provider: str) -> str:
    """Return the registry key for ``provider`` or raise :class:`ConfigurationError`."""

    key = provider.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _PROVIDERS:
        raise ConfigurationError(
            f"Unsupported insight provider '{provider}'. Expected one of: {', '.join(list_providers())}."
        )
    return key


def list_providers() -> List[str]:
    """Return the names of every supported provider."""

    return sorted(_PROVIDERS)


def default_model_for(provider: str) -> str:
    """Return the default model name for the given provider."""

    return _PROVIDERS[normalise_provider(provider)].default_model


def create_insight_client(
    config: InsightsConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Optional[SleepFunc] = None,
) -> InsightClient:
    """Instantiate the client selected by ``config.provider``.

    Raises :class:`ConfigurationError` when the provider is unknown or its API
    key is missing.
    """

    provider = normalise_provider(config.provider)
    api_key = config.api_key_for(provider)
    if not api_key:
        raise ConfigurationError(f"No API key configured for provider '{provider}'")
    client_cls = _PROVIDERS[provider]
    return client_cls(
        api_key=api_key,
        model=config.model,
        timeout=config.request_timeout,
        max_attempts=config.max_attempts,
        default_backoff=config.default_backoff,
        max_backoff=config.max_backoff,
        transport=transport,
        sleep=sleep,
    )


__all__ = [
    "AnthropicClient",
    "GENERATION_ERROR",
    "GENERATION_UNAVAILABLE",
    "HuggingFaceClient",
    "InsightClient",
    "NO_SUGGESTIONS",
    "OpenAIClient",
    "create_insight_client",
    "default_model_for",
    "list_providers",
    "normalise_provider",
]
