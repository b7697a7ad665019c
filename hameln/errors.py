"""Exceptions raised by the hameln package."""

from __future__ import annotations

import enum
from typing import Optional


class Field(str, enum.Enum):
    """Mandatory fields of a "view all" page."""

    TITLE = "title"
    AUTHOR_ANCHOR = "author_anchor"
    AUTHOR = "author"


class HamelnError(Exception):
    """Base class for every error raised by this package."""


class FetchError(HamelnError):
    """The novel page could not be retrieved."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {reason}")


class MissingFieldError(HamelnError):
    """A mandatory field was not found in the document."""

    def __init__(self, field: Field) -> None:
        self.field = field
        super().__init__(f"Failed to find {field.value} in document")


class AssemblyError(HamelnError):
    """The EPUB could not be generated or written."""
