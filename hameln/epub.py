"""Package a scraped :class:`~hameln.models.Novel` as an EPUB archive.

The archive follows the minimal EPUB 3 layout: an uncompressed
``mimetype`` entry first, ``META-INF/container.xml``, a package document
(``content.opf``), an NCX table of contents for older readers and one
XHTML document per episode. The navigation document doubles as an
inline table of contents and is the first page of the spine.

Episode bodies are the site's own markup. They are passed through
BeautifulSoup so that void elements such as ``<br>`` come out
self-closed and the result is well-formed XHTML; the text itself is
not altered.
"""

from __future__ import annotations

import html
import io
import logging
import uuid
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from bs4 import BeautifulSoup
from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from .config import Settings, get_settings
from .errors import AssemblyError
from .models import Novel

logger = logging.getLogger(__name__)

# Characters that are not allowed in file names on Windows.
UNSAFE_FILENAME_CHARS = '\\/:*?"<>|'

_templates = Environment(
    loader=PackageLoader("hameln", "templates"),
    autoescape=select_autoescape(["xhtml", "html"]),
    keep_trailing_newline=True,
)

CONTAINER_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">\n'
    "  <rootfiles>\n"
    '    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>\n'
    "  </rootfiles>\n"
    "</container>\n"
)


def sanitize(text: str) -> str:
    """Replace every character that cannot appear in a file name with ``_``."""
    return "".join("_" if ch in UNSAFE_FILENAME_CHARS else ch for ch in text)


def make_filename(novel: Novel) -> str:
    """Return ``"[author] title.epub"`` for ``novel``."""
    author = sanitize(html.unescape(str(novel.author)))
    title = sanitize(html.unescape(str(novel.title)))
    return f"[{author}] {title}.epub"


def to_xhtml_fragment(markup: str) -> str:
    """Re-serialise an HTML fragment as well-formed XHTML."""
    soup = BeautifulSoup(markup, "lxml")
    if soup.body is None:
        return ""
    return soup.body.decode_contents()


def episode_href(index: int) -> str:
    return f"text/{index}.xhtml"


def _opf(novel_title: str, author: str, book_id: str, language: str, count: int) -> str:
    now_iso = datetime.now(timezone.utc).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")
    manifest_items = [
        '<item id="toc" href="toc.xhtml" media-type="application/xhtml+xml" properties="nav"/>',
        '<item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>',
    ]
    spine_items = ['<itemref idref="toc"/>']
    for idx in range(count):
        manifest_items.append(
            f'<item id="episode{idx}" href="{episode_href(idx)}" media-type="application/xhtml+xml"/>'
        )
        spine_items.append(f'<itemref idref="episode{idx}"/>')
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<package xmlns="http://www.idpf.org/2007/opf" unique-identifier="bookid" version="3.0">\n'
        '  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">\n'
        f'    <dc:identifier id="bookid">{book_id}</dc:identifier>\n'
        f"    <dc:title>{html.escape(novel_title)}</dc:title>\n"
        f"    <dc:creator>{html.escape(author)}</dc:creator>\n"
        f"    <dc:language>{html.escape(language)}</dc:language>\n"
        f'    <meta property="dcterms:modified">{now_iso}</meta>\n'
        "  </metadata>\n"
        "  <manifest>\n"
        "    " + "\n    ".join(manifest_items) + "\n"
        "  </manifest>\n"
        '  <spine toc="ncx">\n'
        "    " + "\n    ".join(spine_items) + "\n"
        "  </spine>\n"
        "</package>\n"
    )


def _ncx(novel_title: str, book_id: str, episode_titles: List[str]) -> str:
    nav_points = []
    for idx, title in enumerate(episode_titles):
        nav_points.append(
            f'<navPoint id="navPoint-{idx + 1}" playOrder="{idx + 1}">'
            f"<navLabel><text>{html.escape(title)}</text></navLabel>"
            f'<content src="{episode_href(idx)}"/>'
            "</navPoint>"
        )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">\n'
        "  <head>\n"
        f'    <meta name="dtb:uid" content="{book_id}"/>\n'
        '    <meta name="dtb:depth" content="1"/>\n'
        '    <meta name="dtb:totalPageCount" content="0"/>\n'
        '    <meta name="dtb:maxPageNumber" content="0"/>\n'
        "  </head>\n"
        f"  <docTitle><text>{html.escape(novel_title)}</text></docTitle>\n"
        "  <navMap>\n"
        "    " + "\n    ".join(nav_points) + "\n"
        "  </navMap>\n"
        "</ncx>\n"
    )


def render_book(novel: Novel, settings: Optional[Settings] = None) -> Dict[str, str]:
    """Return the text entries of the archive keyed by their path.

    The ``mimetype`` entry is not included; :func:`build_epub` writes it
    separately because it must be stored first and uncompressed.
    """
    settings = settings or get_settings()
    language = settings.language
    # <title> text and link text on the page are already entity-encoded
    novel_title = html.unescape(str(novel.title))
    author = html.unescape(str(novel.author))
    episode_titles = [html.unescape(str(episode.title)) for episode in novel.episodes]
    book_id = f"urn:uuid:{uuid.uuid4()}"

    entries = {
        "META-INF/container.xml": CONTAINER_XML,
        "OEBPS/content.opf": _opf(novel_title, author, book_id, language, len(novel.episodes)),
        "OEBPS/toc.ncx": _ncx(novel_title, book_id, episode_titles),
        "OEBPS/toc.xhtml": _templates.get_template("toc.xhtml").render(
            title=novel_title,
            author=author,
            language=language,
            entries=[
                {"href": episode_href(idx), "title": title}
                for idx, title in enumerate(episode_titles)
            ],
        ),
    }
    episode_template = _templates.get_template("episode.xhtml")
    for idx, (episode, title) in enumerate(zip(novel.episodes, episode_titles)):
        entries[f"OEBPS/{episode_href(idx)}"] = episode_template.render(
            title=title,
            body=Markup(to_xhtml_fragment(str(episode.body))),
            language=language,
        )
    return entries


def build_epub(novel: Novel, settings: Optional[Settings] = None) -> bytes:
    """Return the complete EPUB archive for ``novel`` as bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        # The mimetype entry must come first and must not be compressed.
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        for name, content in render_book(novel, settings).items():
            zf.writestr(name, content)
    return buffer.getvalue()


def write_epub(novel: Novel, dest_dir: Union[str, Path], settings: Optional[Settings] = None) -> Path:
    """Write the EPUB for ``novel`` into ``dest_dir`` and return its path."""
    dest_dir_path = Path(dest_dir)
    target = dest_dir_path / make_filename(novel)
    data = build_epub(novel, settings)
    try:
        dest_dir_path.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    except OSError as exc:
        raise AssemblyError(f"Cannot write {target}: {exc}") from exc
    logger.info("Wrote %d episodes to %s", len(novel.episodes), target)
    return target
