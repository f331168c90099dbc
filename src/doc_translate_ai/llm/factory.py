"""
LLM provider factory.

Creates the appropriate LLM provider based on configuration.
"""

from __future__ import annotations

from enum import Enum

from doc_translate_ai.llm.base import LLMProvider


class LLMProviderType(str, Enum):
    """Available LLM provider types."""

    OPENROUTER = "openrouter"


def create_llm_provider(
    provider_type: LLMProviderType | str,
    *,
    api_key: str | None = None,
    model: str = "default",
    **kwargs,
) -> LLMProvider:
    """
    Create an LLM provider instance.

    Args:
        provider_type: Type of provider to create.
        api_key: API key (required for openrouter).
        model: Model name or alias.
        **kwargs: Additional provider-specific options (base_url, timeout).

    Returns:
        LLMProvider instance.

    Raises:
        ValueError: If provider_type is invalid or required config is missing.

    Examples:
        provider = create_llm_provider(
            "openrouter",
            api_key="sk-or-...",
            model="google/gemini-2.5-pro"
        )
    """
    # Normalize provider type
    if isinstance(provider_type, str):
        provider_type = provider_type.lower().replace("_", "-")
        try:
            provider_type = LLMProviderType(provider_type)
        except ValueError:
            valid = [p.value for p in LLMProviderType]
            raise ValueError(
                f"Invalid provider type: {provider_type}. Valid options: {valid}"
            ) from None

    if provider_type == LLMProviderType.OPENROUTER:
        if not api_key:
            raise ValueError("OpenRouter provider requires an API key")

        from doc_translate_ai.llm.openrouter import OpenRouterProvider

        return OpenRouterProvider(
            api_key=api_key,
            model=model,
            **kwargs,
        )

    raise ValueError(f"Unknown provider type: {provider_type}")
