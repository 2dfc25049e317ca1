import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger("books-search-app")

NO_RESULTS_MESSAGE = "No matching results"
UNTITLED = "Untitled"

_HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"}


class DisplayClientError(Exception):
    pass


def escape_html(value: Any) -> str:
    return "".join(_HTML_ESCAPES.get(c, c) for c in str(value))


def render_items(items: List[Dict[str, Any]]) -> str:
    """Render search items as article blocks, or the no-results notice"""
    if not items:
        return f"<div>{NO_RESULTS_MESSAGE}</div>"
    blocks = []
    for item in items:
        authors = escape_html(", ".join(str(a) for a in item.get("authors") or []))
        date = item.get("publishedDate")
        meta = f"{authors} · {escape_html(date)}" if date else authors
        blocks.append(
            '<article class="item">'
            f"<h2>{escape_html(item.get('title') or UNTITLED)}</h2>"
            f'<p class="meta">{meta}</p>'
            "</article>"
        )
    return "".join(blocks)


def render_error(message: str) -> str:
    return f'<div class="error">{escape_html(message)}</div>'


class DisplayClient:
    """Calls the /books endpoint and renders its result as HTML"""

    def __init__(self, api_base: str = "", session: Optional[requests.Session] = None):
        self.api_base = api_base.rstrip("/")
        self.session = session or requests.Session()

    def search(self, q: str) -> List[Dict[str, Any]]:
        res = self.session.get(f"{self.api_base}/books", params={"q": q})
        if not 200 <= res.status_code < 300:
            raise DisplayClientError(f"API error: {res.status_code}")
        return res.json().get("items") or []

    def render(self, q: Optional[str]) -> str:
        """HTML for the results area; empty when there is nothing to search"""
        q = (q or "").strip()
        if not q:
            return ""
        try:
            return render_items(self.search(q))
        except Exception as e:
            logger.error(f"Search for {q!r} failed: {e}")
            return render_error(str(e))


def render_page(q: Optional[str], results_html: str) -> str:
    return (
        "<!doctype html>"
        '<html><head><meta charset="utf-8"><title>Books Explorer</title></head><body>'
        '<form id="searchForm" method="get" action="/">'
        f'<input id="q" name="q" value="{escape_html(q or "")}" placeholder="Search books">'
        '<button type="submit">Search</button>'
        "</form>"
        f'<div id="results">{results_html}</div>'
        "</body></html>"
    )
