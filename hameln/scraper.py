"""Scrape a Hameln "view all episodes" page into a :class:`Novel`.

The page layout is fixed: the novel title sits in ``<title>``, the
author is the text of the first link to ``//syosetu.org/user/<id>``, and
every episode follows as a large ``<span>`` heading and a
``<div class="honbun">`` body. Nothing here parses HTML; the scraper
walks the page once, front to back, with the literal-marker primitives
from :mod:`hameln.text`.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

from .errors import Field, MissingFieldError
from .models import Episode, Novel
from .text import Span, TextLike, extract_between, is_decimal_digit, skip_past, skip_while

logger = logging.getLogger(__name__)

TITLE_MARKERS = ("<title>", "</title>")
AUTHOR_ANCHOR = "<a href=//syosetu.org/user/"
AUTHOR_MARKERS = (">", "</a>")
EPISODE_TITLE_MARKERS = ('<span style="font-size:large">', "</span>")
EPISODE_BODY_MARKERS = ('<div class="honbun">', "</div>\n")


class EpisodeScanner:
    """Iterate over the episode blocks of a page, front to back.

    The scanner holds a single view of the text that has not been
    consumed yet. Each step carves one heading and one body out of the
    front of that view. The first time either marker pair cannot be
    matched the iteration ends; a trailing block without a closed body
    is treated as the end of the page, not as an error.
    """

    def __init__(
        self,
        text: TextLike,
        title_markers: Tuple[str, str] = EPISODE_TITLE_MARKERS,
        body_markers: Tuple[str, str] = EPISODE_BODY_MARKERS,
    ) -> None:
        self._rest: Optional[Span] = Span.of(text)
        self.title_markers = title_markers
        self.body_markers = body_markers

    def __iter__(self) -> Iterator[Episode]:
        return self

    def __next__(self) -> Episode:
        if self._rest is None:
            raise StopIteration
        found = extract_between(self._rest, *self.title_markers)
        if found is not None:
            title, rest = found
            found = extract_between(rest, *self.body_markers)
        if found is None:
            self._rest = None
            raise StopIteration
        body, self._rest = found
        return Episode(title=title, body=body)

    @property
    def remaining(self) -> Optional[Span]:
        """The unconsumed text, or ``None`` once the scanner is exhausted."""
        return self._rest


def scrape(document: TextLike) -> Novel:
    """Extract title, author and episodes from a raw page.

    Raises :class:`MissingFieldError` naming the first mandatory field
    that could not be located. A page with a title and an author but no
    episode blocks is a valid novel with an empty episode list.
    """
    found = extract_between(document, *TITLE_MARKERS)
    if found is None:
        raise MissingFieldError(Field.TITLE)
    title, rest = found

    after_anchor = skip_past(rest, AUTHOR_ANCHOR)
    if after_anchor is None:
        raise MissingFieldError(Field.AUTHOR_ANCHOR)
    # the anchor is followed by the numeric user id
    rest = skip_while(after_anchor, is_decimal_digit)

    found = extract_between(rest, *AUTHOR_MARKERS)
    if found is None:
        raise MissingFieldError(Field.AUTHOR)
    author, rest = found

    episodes = list(EpisodeScanner(rest))
    logger.debug("Scraped %r by %r: %d episodes", str(title), str(author), len(episodes))
    return Novel(title=title, author=author, episodes=episodes)
