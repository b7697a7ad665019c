"""Fetch, scrape and package novels.

``publish`` handles a single novel id end to end. ``publish_many`` runs
it over several ids; each novel is processed independently and the
caller decides whether the first failure aborts the rest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import httpx

from .config import Settings, get_settings
from .epub import write_epub
from .errors import HamelnError
from .fetcher import fetch_novel_page
from .models import Novel
from .scraper import scrape

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    written: Dict[int, Path] = field(default_factory=dict)
    failed: Dict[int, HamelnError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


async def load_novel(
    nid: int,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> Novel:
    """Fetch the page for ``nid`` and scrape it."""
    page = await fetch_novel_page(nid, client=client, settings=settings)
    return scrape(page)


async def publish(
    nid: int,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
    output_dir: Optional[str] = None,
) -> Path:
    """Download novel ``nid`` and write it as an EPUB file."""
    settings = settings or get_settings()
    novel = await load_novel(nid, client=client, settings=settings)
    return write_epub(novel, output_dir or settings.output_dir, settings)


async def publish_many(
    ids: Iterable[int],
    fail_fast: bool = False,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
    output_dir: Optional[str] = None,
) -> BatchResult:
    """Publish every id in ``ids`` in order.

    With ``fail_fast`` the first error is re-raised and the remaining ids
    are not attempted. Otherwise errors are recorded in the result and
    processing moves on to the next id. An id listed more than once is
    published once, at its first position.
    """
    result = BatchResult()
    for nid in dict.fromkeys(ids):
        try:
            result.written[nid] = await publish(nid, client=client, settings=settings, output_dir=output_dir)
        except HamelnError as exc:
            logger.error("Novel %s failed: %s", nid, exc)
            if fail_fast:
                raise
            result.failed[nid] = exc
    return result


def failed_ids(result: BatchResult) -> List[int]:
    return sorted(result.failed)
