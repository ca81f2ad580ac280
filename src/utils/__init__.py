"""Utility modules for Document Insights.

- **errors** -- Domain exception hierarchy rooted at DocumentInsightsError;
  each stage raises its own subclass so callers can react precisely.
- **logging** -- structlog setup with console output in development and
  structured JSON in production.
- **text_normalizer** -- Control-character / whitespace normalization for
  extracted text and tag stripping for wiki markup.
"""

from src.utils.errors import (
    ConfigurationError,
    DocumentInsightsError,
    DocumentNotFoundError,
    EmptyContentError,
    EmptyResponseError,
    EncryptedDocumentError,
    ExtractionError,
    FileTooLargeError,
    MisconfiguredProviderError,
    RemoteError,
    RequestTimeoutError,
    UnresolvableReferenceError,
    UnsupportedFormatError,
    UnsupportedProviderError,
)
from src.utils.logging import configure_logging, get_logger
from src.utils.text_normalizer import clean_markup, normalize_text

__all__ = [
    "ConfigurationError",
    "DocumentInsightsError",
    "DocumentNotFoundError",
    "EmptyContentError",
    "EmptyResponseError",
    "EncryptedDocumentError",
    "ExtractionError",
    "FileTooLargeError",
    "MisconfiguredProviderError",
    "RemoteError",
    "RequestTimeoutError",
    "UnresolvableReferenceError",
    "UnsupportedFormatError",
    "UnsupportedProviderError",
    "clean_markup",
    "configure_logging",
    "get_logger",
    "normalize_text",
]
