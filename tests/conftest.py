"""Shared fakes and document builders for the test suite."""

from __future__ import annotations

import io
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from typing import Any

import fitz
import pytest
from docx import Document

from doc_translate_ai.config import PDF_MIME_TYPE
from doc_translate_ai.documents import ChunkPayload, DocumentPager, SourceDocument
from doc_translate_ai.llm.base import LLMProvider


@dataclass
class BrokenStream:
    """Yields some fragments, then fails mid-stream."""

    fragments: list[str]
    error: Exception


# One scripted reply: text, a list of fragments, an exception, or a BrokenStream
Reply = str | list[str] | Exception | BrokenStream


@dataclass
class ProviderCall:
    payload: bytes
    mime_type: str
    prompt: str
    temperature: float
    max_tokens: int


class FakeProvider(LLMProvider):
    """
    LLM provider driven by a handler instead of the network.

    The handler receives the payload bytes and the 0-based call number and
    returns a Reply.
    """

    def __init__(self, handler: Callable[[bytes, int], Reply]):
        self._handler = handler
        self.calls: list[ProviderCall] = []

    @classmethod
    def scripted(cls, replies: list[Reply]) -> FakeProvider:
        """Replies consumed in call order."""
        return cls(lambda _payload, n: replies[n])

    @classmethod
    def by_payload(cls, replies: dict[bytes, Reply]) -> FakeProvider:
        """Fixed reply per payload (the same reply on every retry)."""
        return cls(lambda payload, _n: replies[payload])

    @property
    def name(self) -> str:
        return "fake"

    @property
    def model(self) -> str:
        return "fake-model"

    def payloads(self) -> list[bytes]:
        return [call.payload for call in self.calls]

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
        reply = self._handler(payload, len(self.calls))
        self.calls.append(ProviderCall(payload, mime_type, prompt, temperature, max_tokens))

        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, BrokenStream):
            for fragment in reply.fragments:
                yield fragment
            raise reply.error
        if isinstance(reply, str):
            reply = [reply]
        for fragment in reply:
            yield fragment


@dataclass
class RecordingSleep:
    """Sleep replacement that records delays instead of waiting."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FakePager(DocumentPager):
    """Pager with a fixed page count whose payloads name their page range."""

    def __init__(self, pages: int):
        self.pages = pages
        self.extracted: list[tuple[int, int]] = []

    @property
    def name(self) -> str:
        return "fake"

    def can_handle(self, mime_type: str) -> bool:
        return True

    def page_count(self, content: bytes) -> int:
        return self.pages

    def extract_page_range(self, content: bytes, start: int, end: int) -> ChunkPayload:
        self._check_range(start, end, self.pages)
        self.extracted.append((start, end))
        return ChunkPayload(data=range_payload(start, end), mime_type=PDF_MIME_TYPE)


def range_payload(start: int, end: int) -> bytes:
    """Payload FakePager produces for ``[start, end)``."""
    return f"{start}-{end}".encode()


def fake_document(pages: int, size_bytes: int = 1024) -> SourceDocument:
    return SourceDocument(
        content=b"%PDF-fake",
        mime_type=PDF_MIME_TYPE,
        file_name="book.pdf",
        size_bytes=size_bytes,
        page_count=pages,
    )


def make_pdf(pages: int) -> bytes:
    """Build a small real PDF with one line of text per page."""
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page()
        page.insert_text((72, 72), f"Page {i + 1}")
    data = doc.tobytes()
    doc.close()
    return data


def make_docx(paragraphs: list[str], heading: str | None = None) -> bytes:
    """Build a DOCX with an optional heading followed by body paragraphs."""
    doc = Document()
    if heading:
        doc.add_heading(heading, level=1)
    for text in paragraphs:
        doc.add_paragraph(text)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture(autouse=True)
def _no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
