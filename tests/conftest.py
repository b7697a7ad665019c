"""Shared fixtures: pages laid out like a syosetu.org "view all" page."""

from typing import Dict, List, Tuple

import httpx
import pytest

from hameln.config import Settings


def make_page(title: str, author: str, episodes: List[Tuple[str, str]], user_id: str = "4567") -> str:
    """Build a page with the markers the scraper looks for."""
    parts = [
        "<!DOCTYPE html>\n<html><head><meta charset=\"utf-8\">",
        f"<title>{title}</title></head><body>\n",
        '<div id="maind"><p>作：',
        f"<a href=//syosetu.org/user/{user_id}>{author}</a></p>\n",
    ]
    for episode_title, body in episodes:
        parts.append(f'<span style="font-size:large">{episode_title}</span>\n')
        parts.append(f'<div class="honbun">{body}</div>\n')
    parts.append("</div></body></html>\n")
    return "".join(parts)


@pytest.fixture
def page() -> str:
    return make_page(
        "My Novel - ハーメルン",
        "Writer",
        [
            ("Ch1", '<p id="1">Body1</p>'),
            ("Ch2", "<p>Body2<br>line</p>"),
        ],
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(max_retries=3, retry_backoff=0.0, output_dir=str(tmp_path))


@pytest.fixture
def pages_transport():
    """Return a factory for a transport serving pages keyed by nid."""

    def factory(pages: Dict[int, str]) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            nid = int(request.url.params["nid"])
            if nid not in pages:
                return httpx.Response(404, text="not found")
            return httpx.Response(200, text=pages[nid])

        return httpx.MockTransport(handler)

    return factory
