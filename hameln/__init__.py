"""Hameln (syosetu.org) novel publisher.

This package downloads the "view all episodes" page of a novel hosted
on syosetu.org, extracts its title, author and episodes, and packages
the result as an EPUB file.

The modules in this package are:

* ``text.py`` – Substring search primitives over ``Span`` views. A
  span is an offset pair into the page text, so extraction never
  copies the page while it is being scanned.

* ``scraper.py`` – The page scraper: a fixed sequence of marker
  searches for the title and author, followed by ``EpisodeScanner``,
  a lazy iterator that carves episodes off the front of the remaining
  text.

* ``models.py`` – The ``Novel`` and ``Episode`` structures produced by
  the scraper.

* ``fetcher.py`` – Downloads a page with ``httpx``, retrying failed
  requests with exponential backoff.

* ``epub.py`` – Builds the EPUB archive with ``zipfile``, rendering
  pages from Jinja2 templates and normalising episode markup with
  BeautifulSoup.

* ``service.py`` – Glue that runs fetch, scrape and packaging for one
  or many novel ids.

* ``cli.py`` and ``main.py`` – The ``hameln-publish`` command and a
  FastAPI application serving the same functionality over HTTP.
"""

from .errors import AssemblyError, FetchError, Field, HamelnError, MissingFieldError
from .models import Episode, Novel
from .scraper import EpisodeScanner, scrape
from .text import Span, extract_between, skip_past, skip_while

__all__ = [
    "AssemblyError",
    "Episode",
    "EpisodeScanner",
    "FetchError",
    "Field",
    "HamelnError",
    "MissingFieldError",
    "Novel",
    "Span",
    "extract_between",
    "scrape",
    "skip_past",
    "skip_while",
]
