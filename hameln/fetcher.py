"""Download the "view all episodes" page of a novel.

Requests go through ``httpx``. Transport errors and non-200 responses
are retried with exponential backoff; once the attempts are used up a
:class:`~hameln.errors.FetchError` is raised carrying the last reason.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from .config import Settings, get_settings
from .errors import FetchError

logger = logging.getLogger(__name__)


def novel_url(nid: int, settings: Optional[Settings] = None) -> str:
    """Return the URL of the page listing every episode of novel ``nid``."""
    settings = settings or get_settings()
    return settings.novel_url_template.format(nid=nid)


async def _get_with_retry(client: httpx.AsyncClient, url: str, settings: Settings) -> str:
    attempts = max(settings.max_retries, 1)
    reason = "no attempt made"
    status_code: Optional[int] = None
    for attempt in range(attempts):
        try:
            response = await client.get(url)
            if response.status_code == 200:
                return response.text
            status_code = response.status_code
            reason = f"HTTP {response.status_code}"
        except httpx.HTTPError as exc:
            status_code = None
            reason = f"{type(exc).__name__}: {exc}"
        if attempt + 1 < attempts:
            delay = settings.retry_backoff * (2 ** attempt)
            logger.warning("Request to %s failed (%s), retrying in %.1fs", url, reason, delay)
            await asyncio.sleep(delay)
    raise FetchError(url, reason, status_code=status_code)


async def fetch_novel_page(
    nid: int,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Fetch the raw HTML for novel ``nid``.

    If ``client`` is given it is used as-is and left open; otherwise a
    client is created for this call and closed afterwards.
    """
    settings = settings or get_settings()
    url = novel_url(nid, settings)
    logger.info("Fetching %s", url)
    if client is not None:
        return await _get_with_retry(client, url, settings)
    async with httpx.AsyncClient(
        timeout=settings.request_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    ) as own_client:
        return await _get_with_retry(own_client, url, settings)
