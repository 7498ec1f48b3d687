import logging
from typing import Any, Optional

import httpx

from mint_dashboard.config import get_settings

logger = logging.getLogger(__name__)


class MintUpstreamError(RuntimeError):
    """The mint answered, but with a non-success status code."""


class MintUnavailableError(RuntimeError):
    """The mint could not be queried at all (not configured, unreachable, bad JSON)."""


async def _fetch_json(path: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    """
    GET `path` from the configured mint and return the decoded JSON body.

    Raises MintUpstreamError for non-2xx responses and MintUnavailableError
    for everything that prevents a response from being read.
    """
    settings = get_settings()
    if not settings.mint_url:
        raise MintUnavailableError("MINT_URL is not configured")

    url = f"{settings.mint_url}/v1{path}"
    try:
        async with httpx.AsyncClient(
            timeout=settings.mint_timeout_seconds,
            transport=transport,
        ) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        raise MintUnavailableError(f"request to {url} failed: {exc!r}") from exc

    if not response.is_success:
        raise MintUpstreamError(f"{path} status {response.status_code}")

    try:
        return response.json()
    except ValueError as exc:
        raise MintUnavailableError(f"{url} did not return JSON") from exc


async def fetch_mint_info(transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    return await _fetch_json("/info", transport=transport)


async def fetch_mint_settings(transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    return await _fetch_json("/settings", transport=transport)
