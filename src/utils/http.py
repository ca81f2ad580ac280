"""Shared httpx request helper for the raw-HTTP adapters.

Gemini, Ollama and Confluence are called over plain httpx rather than an
SDK.  They all map transport failures onto the same domain errors, so the
mapping lives here once:

    httpx.TimeoutException  -> RequestTimeoutError
    non-2xx response        -> RemoteError(status, body)
    other httpx.HTTPError   -> RemoteError(status=None, body=<reason>)
    unparseable JSON body   -> RemoteError(status, body)
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from src.utils.errors import RemoteError, RequestTimeoutError

logger = structlog.get_logger(logger_name=__name__)

# Response bodies are echoed into errors and logs; keep them bounded.
_MAX_BODY_CHARS = 2000


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    provider_name: str,
    **kwargs: Any,
) -> Any:
    """Send one request and return the decoded JSON body.

    No retries.  *kwargs* are passed straight to ``client.request``.
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.TimeoutException as exc:
        raise RequestTimeoutError(
            message=f"Request to {provider_name} timed out",
            provider_name=provider_name,
        ) from exc
    except httpx.HTTPError as exc:
        raise RemoteError(
            message=f"Request to {provider_name} failed: {exc}",
            provider_name=provider_name,
            status=None,
            body=str(exc),
        ) from exc

    if not response.is_success:
        body = response.text[:_MAX_BODY_CHARS]
        logger.warning(
            "remote_request_failed",
            provider=provider_name,
            status=response.status_code,
        )
        raise RemoteError(
            message=f"{provider_name} returned HTTP {response.status_code}",
            provider_name=provider_name,
            status=response.status_code,
            body=body,
        )

    try:
        return response.json()
    except ValueError as exc:
        raise RemoteError(
            message=f"{provider_name} returned a non-JSON body",
            provider_name=provider_name,
            status=response.status_code,
            body=response.text[:_MAX_BODY_CHARS],
        ) from exc
