"""Custom exception hierarchy for Document Insights.

All application exceptions inherit from :class:`DocumentInsightsError`, which
carries an optional ``provider_name`` so error handlers can identify which
backend (e.g. "openai", "confluence", "pdf") caused the failure.

The hierarchy is organized by pipeline stage:

    DocumentInsightsError  (base -- catch-all for any application error)
    +-- UnsupportedFormatError      (extraction: unknown file extension)
    +-- EncryptedDocumentError      (extraction: password-protected PDF)
    +-- EmptyContentError           (extraction / fetch: no usable text)
    +-- ExtractionError             (extraction: parser or converter failed)
    +-- FileTooLargeError           (upload validation)
    +-- UnresolvableReferenceError  (fetch: no page id in the URL)
    +-- RemoteError                 (any non-2xx or transport failure)
    +-- RequestTimeoutError         (outbound call exceeded its timeout)
    +-- EmptyResponseError          (provider answered without text)
    +-- MisconfiguredProviderError  (provider missing its key / endpoint)
    +-- UnsupportedProviderError    (unknown provider name)
    +-- ConfigurationError          (startup / missing system tool)
    +-- DocumentNotFoundError       (document store lookup)

Nothing in this hierarchy is retried automatically; callers decide.
"""

from __future__ import annotations


class DocumentInsightsError(Exception):
    """Base exception for all Document Insights errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets
    for log scanning, e.g. ``[anthropic] Empty response``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Extraction errors
# ---------------------------------------------------------------------------


class UnsupportedFormatError(DocumentInsightsError):
    """Raised when a file extension is not one of .pdf, .doc, .docx, .txt."""

    def __init__(
        self,
        message: str = "Unsupported file type",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EncryptedDocumentError(DocumentInsightsError):
    """Raised when a PDF is encrypted.  No partial text is ever returned."""

    def __init__(
        self,
        message: str = "Encrypted PDF files are not supported",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EmptyContentError(DocumentInsightsError):
    """Raised when a document or wiki page yields no text after cleaning."""

    def __init__(
        self,
        message: str = "No text content found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ExtractionError(DocumentInsightsError):
    """Raised when a format parser or converter fails on otherwise valid input."""

    def __init__(
        self,
        message: str = "Failed to extract document text",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class FileTooLargeError(DocumentInsightsError):
    """Raised when an upload exceeds the configured maximum size."""

    def __init__(
        self,
        message: str = "File too large",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Remote content / provider errors
# ---------------------------------------------------------------------------


class UnresolvableReferenceError(DocumentInsightsError):
    """Raised when no wiki page id can be extracted from a URL."""

    def __init__(
        self,
        message: str = "Unable to resolve page reference",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RemoteError(DocumentInsightsError):
    """Raised when a remote service answers non-2xx or cannot be reached.

    ``status`` is the HTTP status code, or ``None`` when the request never
    produced a response (connection refused, DNS failure, ...).  ``body`` is
    the raw response body or the transport error description.
    """

    def __init__(
        self,
        message: str = "Remote request failed",
        provider_name: str | None = None,
        status: int | None = None,
        body: str = "",
    ) -> None:
        self._status = status
        self._body = body
        super().__init__(message=message, provider_name=provider_name)

    @property
    def status(self) -> int | None:
        return self._status

    @property
    def body(self) -> str:
        return self._body


class RequestTimeoutError(DocumentInsightsError):
    """Raised when an outbound call exceeds its configured timeout."""

    def __init__(
        self,
        message: str = "Remote request timed out",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EmptyResponseError(DocumentInsightsError):
    """Raised when a provider responds 2xx but the expected text field is empty."""

    def __init__(
        self,
        message: str = "No response generated",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class MisconfiguredProviderError(DocumentInsightsError):
    """Raised before any network call when a provider lacks required settings."""

    def __init__(
        self,
        message: str = "Provider is not configured",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnsupportedProviderError(DocumentInsightsError):
    """Raised when the configured provider name is not a known backend."""

    def __init__(
        self,
        message: str = "Unsupported AI provider",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration / storage errors
# ---------------------------------------------------------------------------


class ConfigurationError(DocumentInsightsError):
    """Raised when configuration is invalid or a required system tool is missing."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class DocumentNotFoundError(DocumentInsightsError):
    """Raised when one or more requested documents are not in the store."""

    def __init__(
        self,
        message: str = "Document not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
