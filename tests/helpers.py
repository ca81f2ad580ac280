"""Builders and test doubles shared across the Document Insights test suite."""

from __future__ import annotations

import asyncio
import io

import fitz
from docx import Document as DocxDocument

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.models.insight import InsightDocument

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def make_settings(**overrides) -> Settings:
    """Build Settings that ignore .env and blank out every credential."""
    defaults = {
        "ai_provider": "demo",
        "openai_api_key": "",
        "openai_base_url": "",
        "azure_openai_endpoint": "",
        "azure_openai_api_key": "",
        "google_gemini_api_key": "",
        "anthropic_api_key": "",
        "ollama_base_url": "http://localhost:11434",
        "confluence_email": "",
        "confluence_api_token": "",
        "frontend_url": "",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


# ---------------------------------------------------------------------------
# Document payloads
# ---------------------------------------------------------------------------


def make_pdf_bytes(*pages: str, encrypt: bool = False) -> bytes:
    """Build an in-memory PDF with one text line per page."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    if encrypt:
        data = doc.tobytes(
            encryption=fitz.PDF_ENCRYPT_AES_256,
            owner_pw="owner-secret",
            user_pw="user-secret",
        )
    else:
        data = doc.tobytes()
    doc.close()
    return data


def make_docx_bytes(paragraphs: list[str], table_rows: list[list[str]] | None = None) -> bytes:
    """Build an in-memory DOCX with paragraphs followed by an optional table."""
    doc = DocxDocument()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row_index, row in enumerate(table_rows):
            for col_index, value in enumerate(row):
                table.cell(row_index, col_index).text = value
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def make_insight_document(
    doc_id: str = "1",
    name: str = "report.pdf",
    content: str = "Quarterly revenue grew by 12 percent.",
    doc_type: str = "upload",
) -> InsightDocument:
    return InsightDocument(id=doc_id, name=name, type=doc_type, content=content)


# ---------------------------------------------------------------------------
# Provider doubles
# ---------------------------------------------------------------------------


class RecordingLLMProvider(ILLMProvider):
    """Adapter double that records prompts and replays scripted results.

    Each entry in *responses* is returned in turn; an exception instance is
    raised instead of returned.  When *gate* is given, each call waits for
    the event to be set before answering.
    """

    def __init__(
        self,
        name: str = "openai",
        responses: list | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self._name = name
        self._gate = gate
        self._responses = list(responses or ["Generated insight text"])
        self.calls: list[dict] = []

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self._gate is not None:
            await self._gate.wait()
        result = self._responses[0] if len(self._responses) == 1 else self._responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def is_available(self) -> bool:
        return True

    def get_provider_name(self) -> str:
        return self._name
