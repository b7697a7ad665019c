"""FastAPI application exposing the publisher over HTTP.

Two read-only routes are provided: one returns the scraped structure of
a novel as JSON, the other returns the generated EPUB as a download.
Nothing is stored on the server; every request fetches the page again.

Errors from the fetch and scrape stages are mapped to status codes by
exception handlers: a page that cannot be retrieved is a ``502``, a page
that lacks a mandatory field is a ``422``.
"""

from __future__ import annotations

import html
import logging
from typing import AsyncIterator
from urllib.parse import quote

import httpx
from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from .config import Settings, configure_logging, get_settings
from .epub import build_epub, make_filename
from .errors import FetchError, MissingFieldError
from .service import load_novel

logger = logging.getLogger(__name__)

app = FastAPI(title="Hameln EPUB Publisher")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()


async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    """Yield an HTTP client for the duration of one request."""
    async with httpx.AsyncClient(
        timeout=settings.request_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    ) as client:
        yield client


@app.exception_handler(FetchError)
async def fetch_error_handler(request: Request, exc: FetchError) -> JSONResponse:
    logger.error("Fetch failed for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc), "upstream_status": exc.status_code},
    )


@app.exception_handler(MissingFieldError)
async def missing_field_handler(request: Request, exc: MissingFieldError) -> JSONResponse:
    logger.error("Scrape failed for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "field": exc.field.value},
    )


# Declared before the JSON route so that "123.epub" is not taken as an id.
@app.get("/novels/{nid}.epub")
async def download_epub(
    nid: int,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Build and return the EPUB for novel ``nid``."""
    novel = await load_novel(nid, client=client, settings=settings)
    data = build_epub(novel, settings)
    filename = make_filename(novel)
    return Response(
        content=data,
        media_type="application/epub+zip",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@app.get("/novels/{nid}")
async def get_novel(
    nid: int,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Return the title, author and episode titles of novel ``nid``."""
    novel = await load_novel(nid, client=client, settings=settings)
    return JSONResponse({
        "title": html.unescape(str(novel.title)),
        "author": html.unescape(str(novel.author)),
        "episodes": [{"title": html.unescape(str(episode.title))} for episode in novel.episodes],
    })
