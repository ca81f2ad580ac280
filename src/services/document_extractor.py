"""Text extraction for uploaded documents.

# ─── DESIGN ────────────────────────────────────────────────────────────
#
# DocumentExtractor turns raw upload bytes into normalized plain text.
# Dispatch is on the declared DocumentFormat (derived from the filename
# extension), never on the file contents.
#
#   .pdf   -> PyMuPDF, page order, fails fast on encrypted files
#   .docx  -> python-docx, paragraphs then table rows
#   .doc   -> LibreOffice CLI (headless) converting to UTF-8 text
#   .txt   -> decoded as UTF-8 (with BOM), cp1252, then latin-1
#
# Every path ends in normalize_text(); an empty result is an
# EmptyContentError, never an empty string.  The PyMuPDF and python-docx
# parsers are synchronous, so they run via asyncio.to_thread.  The input
# bytes are never modified; the .doc path writes a private temporary copy
# that is removed when conversion finishes.
#
# Pattern: Strategy (format -> extractor function dispatch).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import io
import shutil
import tempfile
import zipfile
from pathlib import Path

import fitz  # PyMuPDF
import structlog
from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError

from src.models.document import DocumentFormat, DocumentMetadata, RawDocument, file_extension
from src.utils.errors import (
    ConfigurationError,
    EmptyContentError,
    EncryptedDocumentError,
    ExtractionError,
    FileTooLargeError,
    UnsupportedFormatError,
)
from src.utils.text_normalizer import normalize_text

logger = structlog.get_logger(logger_name=__name__)

_TEXT_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


class DocumentExtractor:
    """Extracts normalized text from PDF, DOC, DOCX and TXT payloads.

    Parameters
    ----------
    libreoffice_timeout:
        Seconds allowed for a single LibreOffice .doc conversion.
    """

    def __init__(self, libreoffice_timeout: float = 60.0) -> None:
        self._libreoffice_timeout = libreoffice_timeout

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def extract(self, data: bytes, fmt: DocumentFormat | str) -> str:
        """Extract and normalize text from *data* declared as *fmt*.

        Parameters
        ----------
        data:
            Raw file bytes.  Not modified.
        fmt:
            A :class:`DocumentFormat` or its extension string (``".pdf"``).

        Returns
        -------
        str
            Normalized, non-empty text.

        Raises
        ------
        UnsupportedFormatError
            *fmt* is not a supported format.  Raised before reading *data*.
        EncryptedDocumentError
            The PDF is encrypted.
        EmptyContentError
            Nothing but whitespace survived extraction and normalization.
        ExtractionError
            The file could not be parsed as the declared format.
        """
        fmt = _coerce_format(fmt)

        if fmt is DocumentFormat.DOC:
            raw_text = await self._extract_doc(data)
        else:
            sync_extractors = {
                DocumentFormat.PDF: _extract_pdf,
                DocumentFormat.DOCX: _extract_docx,
                DocumentFormat.TXT: _extract_txt,
            }
            raw_text = await asyncio.to_thread(sync_extractors[fmt], data)

        text = normalize_text(raw_text)
        if not text:
            raise EmptyContentError(
                message="No text content found in document",
                provider_name=fmt.name.lower(),
            )

        logger.info(
            "document_extracted",
            format=fmt.value,
            input_bytes=len(data),
            text_length=len(text),
        )
        return text

    async def extract_document(self, document: RawDocument) -> str:
        """Extract text from a :class:`RawDocument`."""
        return await self.extract(document.data, document.format)

    async def extract_file(self, filename: str, data: bytes) -> str:
        """Resolve the format from *filename* and extract *data*."""
        return await self.extract(data, DocumentFormat.from_filename(filename))

    @staticmethod
    def validate(filename: str, size: int, max_size: int) -> DocumentFormat:
        """Check an upload before extraction and return its format.

        Raises
        ------
        EmptyContentError
            The payload is zero bytes.
        FileTooLargeError
            The payload exceeds *max_size* bytes.
        UnsupportedFormatError
            The extension is not supported.
        """
        if size == 0:
            raise EmptyContentError(message="File is empty")
        if size > max_size:
            raise FileTooLargeError(
                message=(
                    f"File too large: {size / 1024 / 1024:.2f} MB exceeds limit "
                    f"of {max_size / 1024 / 1024:.2f} MB"
                ),
            )
        return DocumentFormat.from_filename(filename)

    @staticmethod
    def metadata(filename: str, size: int) -> DocumentMetadata:
        """Return size, extension and human-readable type for *filename*."""
        extension = file_extension(filename)
        try:
            label = DocumentFormat(extension).label
        except ValueError:
            label = "Unknown"
        return DocumentMetadata(size=size, extension=extension, type=label)

    # ------------------------------------------------------------------
    # Legacy Word (.doc)
    # ------------------------------------------------------------------

    async def _extract_doc(self, data: bytes) -> str:
        """DOC -> plain text via LibreOffice CLI (headless mode).

        Legacy .doc files use a proprietary binary format; LibreOffice is
        the most reliable open-source reader for them.
        """
        lo_cmd = shutil.which("libreoffice") or shutil.which("soffice")
        if not lo_cmd:
            raise ConfigurationError(
                message=(
                    "LibreOffice not installed; it is required for .doc files. "
                    "Install via: apt install libreoffice-writer (Linux) or "
                    "brew install --cask libreoffice (macOS)"
                ),
                provider_name="doc",
            )

        with tempfile.TemporaryDirectory(prefix="doc-extract-") as work_dir:
            source = Path(work_dir) / "document.doc"
            source.write_bytes(data)

            proc = await asyncio.create_subprocess_exec(
                lo_cmd,
                "--headless",
                "--convert-to",
                "txt:Text (encoded):UTF8",
                "--outdir",
                work_dir,
                str(source),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            try:
                _, stderr = await asyncio.wait_for(
                    proc.communicate(), timeout=self._libreoffice_timeout
                )
            except asyncio.TimeoutError as exc:
                proc.kill()
                await proc.wait()
                raise ExtractionError(
                    message=f"LibreOffice conversion timed out after {self._libreoffice_timeout}s",
                    provider_name="doc",
                ) from exc

            output = source.with_suffix(".txt")
            if proc.returncode != 0 or not output.exists():
                raise ExtractionError(
                    message=f"LibreOffice conversion failed: {stderr.decode(errors='replace')[:500]}",
                    provider_name="doc",
                )

            text = output.read_text(encoding="utf-8", errors="replace")

        if not text.strip():
            raise EmptyContentError(
                message="No text content found in DOC document",
                provider_name="doc",
            )
        return text


# ----------------------------------------------------------------------
# Synchronous format extractors (executed via asyncio.to_thread)
# ----------------------------------------------------------------------


def _coerce_format(fmt: DocumentFormat | str) -> DocumentFormat:
    if isinstance(fmt, DocumentFormat):
        return fmt
    try:
        return DocumentFormat(str(fmt).lower())
    except ValueError:
        raise UnsupportedFormatError(message=f"Unsupported file type: {fmt}") from None


def _extract_pdf(data: bytes) -> str:
    """Extract text page by page; refuse encrypted documents outright."""
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as exc:
        raise ExtractionError(
            message=f"Unable to open PDF: {exc}",
            provider_name="pdf",
        ) from exc

    try:
        if doc.needs_pass or doc.is_encrypted:
            raise EncryptedDocumentError(provider_name="pdf")
        pages = [page.get_text("text", sort=True) for page in doc]
    finally:
        doc.close()

    text = "\n".join(pages)
    if not text.strip():
        raise EmptyContentError(
            message="No text content found in PDF",
            provider_name="pdf",
        )
    return text


def _extract_docx(data: bytes) -> str:
    """Extract paragraph text, then table rows joined with `` | ``."""
    try:
        doc = DocxDocument(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
        raise ExtractionError(
            message=f"Unable to open DOCX document: {exc}",
            provider_name="docx",
        ) from exc

    parts: list[str] = [para.text for para in doc.paragraphs if para.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            row_text = " | ".join(cell.text.strip() for cell in row.cells if cell.text.strip())
            if row_text:
                parts.append(row_text)

    text = "\n\n".join(parts)
    if not text.strip():
        raise EmptyContentError(
            message="No text content found in DOCX document",
            provider_name="docx",
        )
    return text


def _extract_txt(data: bytes) -> str:
    """Decode a text file, trying UTF-8 first."""
    for encoding in _TEXT_ENCODINGS:
        try:
            text = data.decode(encoding)
            break
        except UnicodeDecodeError:
            continue
    else:  # pragma: no cover - latin-1 decodes any byte string
        text = data.decode("utf-8", errors="replace")

    if not text.strip():
        raise EmptyContentError(message="Text file is empty", provider_name="txt")
    return text
