"""Substring search primitives over borrowed text views.

Everything in this module works on :class:`Span` values: a reference to
one source string plus a ``(start, end)`` offset pair. Searching is done
with the bounded form of ``str.find`` so no intermediate slices are
created while scanning; the characters of a span are only copied out
when a caller asks for ``str(span)``.

Each primitive accepts either a plain ``str`` (treated as a view over
the whole string) or a ``Span``, and the spans it returns always point
into the same source string as the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union


@dataclass(frozen=True)
class Span:
    """A read-only view of ``source[start:end]``."""

    source: str
    start: int
    end: int

    @classmethod
    def of(cls, text: Union[str, "Span"]) -> "Span":
        """Return ``text`` as a span, wrapping a plain string whole."""
        if isinstance(text, Span):
            return text
        return cls(text, 0, len(text))

    @property
    def text(self) -> str:
        return self.source[self.start:self.end]

    def find(self, marker: str, offset: int = 0) -> int:
        """Return the absolute index of ``marker`` at or after ``start + offset``.

        The search never looks outside the view. Returns ``-1`` when the
        marker does not occur.
        """
        return self.source.find(marker, self.start + offset, self.end)

    def slice(self, start: int, end: int) -> "Span":
        """Return a sub-view given absolute offsets into ``source``."""
        return Span(self.source, start, end)

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return self.text

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Span):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)

    def __repr__(self) -> str:
        return f"Span({self.text!r}, start={self.start}, end={self.end})"


TextLike = Union[str, Span]


def extract_between(text: TextLike, start_marker: str, end_marker: str) -> Optional[Tuple[Span, Span]]:
    """Return the text between ``start_marker`` and the next ``end_marker``.

    The first occurrence of ``start_marker`` is located, then
    ``end_marker`` is searched for strictly after it, so the two markers
    never overlap even when they are the same string. On success the
    result is ``(match, remainder)`` where ``remainder`` starts right
    after the end marker. ``None`` is returned when either marker is
    missing.
    """
    view = Span.of(text)
    marker_at = view.find(start_marker)
    if marker_at < 0:
        return None
    match_start = marker_at + len(start_marker)
    match_end = view.source.find(end_marker, match_start, view.end)
    if match_end < 0:
        return None
    rest_start = match_end + len(end_marker)
    return view.slice(match_start, match_end), view.slice(rest_start, view.end)


def skip_past(text: TextLike, marker: str) -> Optional[Span]:
    """Return everything after the first ``marker``, or ``None`` if it is absent."""
    view = Span.of(text)
    marker_at = view.find(marker)
    if marker_at < 0:
        return None
    return view.slice(marker_at + len(marker), view.end)


def skip_while(text: TextLike, predicate: Callable[[str], bool]) -> Span:
    """Drop the leading run of characters for which ``predicate`` holds."""
    view = Span.of(text)
    source = view.source
    pos = view.start
    while pos < view.end and predicate(source[pos]):
        pos += 1
    return view.slice(pos, view.end)


def is_decimal_digit(char: str) -> bool:
    # str.isdigit() also accepts superscripts and full-width digits
    return "0" <= char <= "9"
