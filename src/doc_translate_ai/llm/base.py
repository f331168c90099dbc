"""
Base classes for LLM providers.

Defines the abstract interface that all LLM providers must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any


class LLMProvider(ABC):
    """
    Abstract base class for document-translation LLM providers.

    A provider receives a whole (sub-)document inline together with an
    instruction prompt and streams back the model's text.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging and identification."""
        ...

    @property
    @abstractmethod
    def model(self) -> str:
        """Current model name."""
        ...

    @abstractmethod
    def stream_document(
        self,
        payload: bytes,
        mime_type: str,
        prompt: str,
        *,
        temperature: float = 0.3,
        max_tokens: int = 32000,
        **kwargs: Any,
    ) -> AsyncIterator[str]:
        """
        Send a document to the model and stream the generated text.

        Args:
            payload: Document bytes (PDF page range, image, or UTF-8 text).
            mime_type: Media type of the payload.
            prompt: Instruction prompt.
            temperature: Sampling temperature (0.0 to 2.0).
            max_tokens: Maximum tokens to generate.
            **kwargs: Additional provider-specific options.

        Yields:
            Text fragments in generation order.

        Raises:
            Exception: Any transport or API error. A single call never retries.
        """
        ...

    async def translate_document(
        self,
        payload: bytes,
        mime_type: str,
        prompt: str,
        **kwargs: Any,
    ) -> str:
        """
        Convenience method returning the complete text of one call.

        Args:
            payload: Document bytes.
            mime_type: Media type of the payload.
            prompt: Instruction prompt.
            **kwargs: Options forwarded to stream_document.

        Returns:
            All fragments joined together.
        """
        parts: list[str] = []
        async for fragment in self.stream_document(payload, mime_type, prompt, **kwargs):
            parts.append(fragment)
        return "".join(parts)
