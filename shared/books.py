import time
import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests
from pydantic import BaseModel, Field

from settings import AppConfig

logger = logging.getLogger("books-search-lambda")

# Characters encodeURIComponent leaves unescaped, besides alphanumerics and -_.~
URI_SAFE = "!*'()"


# ---- Response models ----
class BookItem(BaseModel):
    """Minimal projection of a Google Books volume record"""
    # Upstream values pass through unvalidated
    id: Any = None
    title: Any = None
    authors: Any = Field(default_factory=list)
    publishedDate: Any = None

    @classmethod
    def from_volume(cls, volume: Dict[str, Any]) -> "BookItem":
        info = volume.get("volumeInfo") or {}
        return cls(
            id=volume.get("id"),
            title=info.get("title") or None,
            authors=info.get("authors") or [],
            publishedDate=info.get("publishedDate") or None,
        )


class SearchResponse(BaseModel):
    items: List[BookItem] = []

    @classmethod
    def from_volumes(cls, payload: Dict[str, Any], limit: int = 10) -> "SearchResponse":
        volumes = (payload or {}).get("items") or []
        return cls(items=[BookItem.from_volume(v) for v in volumes[:limit]])


# ---- Upstream request ----
def build_volumes_url(query: str, api_key: Optional[str] = None, base_url: Optional[str] = None) -> str:
    base_url = base_url or AppConfig.get_value("books_api_url")
    url = f"{base_url}?q={quote(query, safe=URI_SAFE)}"
    if api_key:
        url += f"&key={quote(api_key, safe=URI_SAFE)}"
    return url


def fetch_with_retry(
    url: str,
    session: Optional[requests.Session] = None,
    attempts: int = 3,
    backoff: float = 0.3,
    timeout: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
    log: Optional[logging.Logger] = None,
    on_attempt: Optional[Callable[[int], None]] = None,
    redact: Callable[[str], str] = str,
) -> requests.Response:
    """
    GET `url`, retrying network-level failures with linear backoff.

    Waits backoff * attempt between attempts. HTTP error statuses are returned
    as-is, not retried. Raises the last network error once attempts run out.
    `redact` scrubs error text before it is logged.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")
    log = log or logger
    http = session or requests
    last_error = None
    for attempt in range(1, attempts + 1):
        if on_attempt:
            on_attempt(attempt)
        try:
            return http.get(url, timeout=timeout)
        except requests.exceptions.RequestException as e:
            last_error = e
            log.warning(f"fetch attempt {attempt} failed: {redact(str(e))}")
            if attempt < attempts:
                sleep(backoff * attempt)
    raise last_error
