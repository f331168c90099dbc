"""
LLM provider abstraction layer.

Supports:
- OpenRouter (default): Pay-per-token multimodal models via the OpenAI-compatible API
"""

from doc_translate_ai.llm.base import LLMProvider
from doc_translate_ai.llm.factory import LLMProviderType, create_llm_provider

__all__ = [
    "LLMProvider",
    "LLMProviderType",
    "create_llm_provider",
]
