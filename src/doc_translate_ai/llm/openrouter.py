"""
OpenRouter LLM provider.

Uses the OpenAI-compatible API via OpenRouter to send documents inline to
multimodal models and stream their translation back.
"""

from __future__ import annotations

import base64
from collections.abc import AsyncIterator
from typing import Any

from openai import AsyncOpenAI

from doc_translate_ai.llm.base import LLMProvider


class OpenRouterProvider(LLMProvider):
    """
    OpenRouter LLM provider.

    Uses OpenRouter's unified API to access Gemini, Claude, GPT, etc.
    Requires an OpenRouter API key and charges per token.

    Each call is a single request: retrying is the pipeline's job, so the
    client's own retry loop is switched off.
    """

    # Model aliases for convenience (all accept PDF and image input)
    MODELS = {
        "default": "google/gemini-2.5-flash",
        "fast": "google/gemini-2.5-flash-lite",
        "quality": "google/gemini-2.5-pro",
        "claude": "anthropic/claude-sonnet-4.5",
    }

    def __init__(
        self,
        api_key: str,
        model: str = "default",
        base_url: str = "https://openrouter.ai/api/v1",
        timeout: float = 600.0,
        client: AsyncOpenAI | None = None,
    ):
        """
        Initialize OpenRouter provider.

        Args:
            api_key: OpenRouter API key.
            model: Model key (from MODELS) or full model name.
            base_url: API base URL.
            timeout: Request timeout in seconds.
            client: Pre-built client (mainly for tests).
        """
        self._model_name = self.MODELS.get(model, model)
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        """Provider name."""
        return "openrouter"

    @property
    def model(self) -> str:
        """Current model name."""
        return self._model_name

    async def stream_document(
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
        Stream a translation via OpenRouter.

        Args:
            payload: Document bytes.
            mime_type: Media type of the payload.
            prompt: Instruction prompt.
            temperature: Sampling temperature.
            max_tokens: Maximum output tokens.
            **kwargs: Additional options passed to the API.

        Yields:
            Content deltas as they arrive.
        """
        messages = [{"role": "user", "content": build_content_parts(payload, mime_type, prompt)}]

        stream = await self._client.chat.completions.create(
            model=self._model_name,
            messages=messages,  # type: ignore[arg-type]
            temperature=temperature,
            max_tokens=max_tokens,
            stream=True,
            **kwargs,
        )

        async for chunk in stream:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta
            if delta is not None and delta.content:
                yield delta.content


def build_content_parts(payload: bytes, mime_type: str, prompt: str) -> list[dict[str, Any]]:
    """
    Build the multimodal user message for one document.

    PDFs and other binary documents go in a ``file`` part, images in an
    ``image_url`` part, and text payloads are appended to the prompt.
    """
    if mime_type.startswith("text/"):
        text = payload.decode("utf-8", errors="replace")
        return [{"type": "text", "text": f"{prompt}\n\n---\n\n{text}"}]

    data_url = f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}"

    if mime_type.startswith("image/"):
        document_part: dict[str, Any] = {"type": "image_url", "image_url": {"url": data_url}}
    else:
        extension = "pdf" if mime_type == "application/pdf" else "doc"
        document_part = {
            "type": "file",
            "file": {"filename": f"document.{extension}", "file_data": data_url},
        }

    return [{"type": "text", "text": prompt}, document_part]
