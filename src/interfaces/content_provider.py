"""Abstract base class for remote content providers.

Defines the contract for pulling a single page of text out of a remote
knowledge base (Confluence today).  The document service only sees this
interface, so another wiki backend can be added without touching it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.document import RemoteContent


class IContentProvider(ABC):
    """Contract for services that fetch one page of remote content by URL."""

    @abstractmethod
    async def fetch(
        self,
        url: str,
        token: str | None = None,
        email: str | None = None,
    ) -> RemoteContent:
        """Fetch the page referenced by *url* and return its cleaned text.

        Parameters
        ----------
        url:
            Browser URL of the page.
        token:
            Optional API token; the configured default is used when omitted.
        email:
            Optional account identity paired with *token*.

        Returns
        -------
        RemoteContent
            Page title (``"Untitled"`` when absent) and non-empty body text.

        Raises
        ------
        src.utils.errors.UnresolvableReferenceError
            No page id could be extracted from *url*.
        src.utils.errors.RemoteError
            The service answered non-2xx or could not be reached.
        src.utils.errors.RequestTimeoutError
            The request exceeded the configured timeout.
        src.utils.errors.EmptyContentError
            The page has no body, or its body is empty after cleanup.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier, e.g. ``"confluence"``."""
