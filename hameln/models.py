"""Structures produced by scraping a novel page.

All text fields are :class:`~hameln.text.Span` views into the page the
novel was scraped from; call ``str()`` on them to get the text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .text import Span


@dataclass(frozen=True)
class Episode:
    title: Span
    body: Span


@dataclass
class Novel:
    title: Span
    author: Span
    episodes: List[Episode] = field(default_factory=list)
