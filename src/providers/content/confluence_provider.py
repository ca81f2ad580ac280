"""Confluence content provider using httpx.

Resolves a page id from a browser URL, calls the Confluence REST content
API on the same host, and flattens the page's storage-format body into
plain text.

Accepted URL shapes (checked in this order)::

    https://acme.atlassian.net/wiki/spaces/ENG/pages/123456/Some+Title
    https://acme.atlassian.net/wiki/pages/viewpage.action?pageId=123456
    https://acme.atlassian.net/anything?foo=1&pageId=123456&bar=2
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

import httpx
import structlog

from src.config.settings import Settings
from src.interfaces.content_provider import IContentProvider
from src.models.document import RemoteContent
from src.utils.errors import EmptyContentError, UnresolvableReferenceError
from src.utils.http import request_json
from src.utils.text_normalizer import clean_markup

logger = structlog.get_logger(logger_name=__name__)

_PAGE_ID_PATTERNS = (
    re.compile(r"pages/(\d+)"),
    re.compile(r"viewpage\.action\?pageId=(\d+)"),
)


def extract_page_id(url: str) -> str:
    """Return the numeric page id referenced by *url*.

    Raises
    ------
    UnresolvableReferenceError
        If none of the known URL shapes yields a numeric id.
    """
    for pattern in _PAGE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)

    # Fallback: the first pageId= parameter anywhere in the URL.
    if "pageId=" in url:
        candidate = url.split("pageId=", 1)[1].split("&", 1)[0]
        if candidate.isdigit():
            return candidate

    raise UnresolvableReferenceError(
        message=f"Unable to extract page ID from Confluence URL: {url}",
        provider_name="confluence",
    )


def extract_base_url(url: str) -> str:
    """Return ``scheme://host[:port]`` of *url*."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise UnresolvableReferenceError(
            message=f"Unable to extract base URL from: {url}",
            provider_name="confluence",
        )
    return f"{parts.scheme}://{parts.netloc}"


def build_api_url(base_url: str, page_id: str) -> str:
    return f"{base_url}/wiki/rest/api/content/{page_id}?expand=body.storage,title"


class ConfluenceContentProvider(IContentProvider):
    """Fetches single Confluence pages through the REST content API.

    Parameters
    ----------
    settings:
        Supplies default credentials and the request timeout.
    http_client:
        Optional pre-built client (tests pass one with a mock transport).
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._default_email = settings.confluence_email
        self._default_token = settings.confluence_api_token
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.confluence_timeout),
            headers={"Accept": "application/json"},
        )

    # ------------------------------------------------------------------
    # IContentProvider implementation
    # ------------------------------------------------------------------

    async def fetch(
        self,
        url: str,
        token: str | None = None,
        email: str | None = None,
    ) -> RemoteContent:
        page_id = extract_page_id(url)
        api_url = build_api_url(extract_base_url(url), page_id)

        auth_email = email if email and email.strip() else self._default_email
        auth_token = token if token and token.strip() else self._default_token

        request_kwargs: dict[str, Any] = {}
        if auth_email and auth_token:
            request_kwargs["auth"] = httpx.BasicAuth(auth_email, auth_token)
        else:
            logger.warning("confluence_unauthenticated_request", page_id=page_id)

        logger.info("confluence_fetch_started", page_id=page_id, url=url)
        data = await request_json(
            self._client,
            "GET",
            api_url,
            provider_name=self.get_provider_name(),
            **request_kwargs,
        )

        content = _parse_page(data)
        logger.info(
            "confluence_fetch_completed",
            page_id=page_id,
            title=content.title,
            text_length=len(content.content),
        )
        return content

    def get_provider_name(self) -> str:
        return "confluence"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _parse_page(data: Any) -> RemoteContent:
    """Map a content API response onto :class:`RemoteContent`."""
    if not isinstance(data, dict):
        data = {}
    title = data.get("title") or "Untitled"
    storage = (data.get("body") or {}).get("storage") or {}
    text = clean_markup(storage.get("value") or "")
    if not text:
        raise EmptyContentError(
            message="No content found in Confluence page",
            provider_name="confluence",
        )
    return RemoteContent(title=title, content=text)
