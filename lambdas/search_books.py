"""
GET /books?q=... proxy for the Google Books volumes API.

The API key comes from GOOGLE_BOOKS_API_KEY or, failing that, from the
Secrets Manager secret named by GOOGLE_BOOKS_SECRET_NAME. Secret lookups are
cached per container, so rotating the secret needs a function restart.
"""
import time
import logging
from typing import Any, Dict, Optional

import requests

from settings import AppConfig
from shared.books import SearchResponse, build_volumes_url, fetch_with_retry
from shared.credentials import CredentialResolver, mask_key, redact_key
from shared.events import EventParser
from shared.responses import api_response, error_response
from utils.monitoring import MetricsCollector

logger = logging.getLogger("books-search-lambda")

UPSTREAM_ERROR_MESSAGE = "Google Books API error"


class SearchHandler:
    """Turns an API Gateway event into a response envelope; never raises"""

    def __init__(
        self,
        resolver: CredentialResolver,
        session: Optional[requests.Session] = None,
        sleep=None,
        log: Optional[logging.Logger] = None,
    ):
        self.resolver = resolver
        self.session = session
        self._sleep = sleep or time.sleep
        self._log = log or logger

    def __call__(self, event: Optional[Dict[str, Any]], context: Any = None) -> dict:
        return self.handle(event, context)

    def handle(self, event: Optional[Dict[str, Any]], context: Any = None) -> dict:
        metrics = MetricsCollector(getattr(context, "aws_request_id", None))
        key = None
        try:
            if EventParser.http_method(event) == "OPTIONS":
                return api_response(200, {})

            query = EventParser.extract_query(event, AppConfig.get_value("fallback_query"))
            key = self._resolve_key()

            url = build_volumes_url(query, key)
            with metrics.timer("upstream"):
                res = fetch_with_retry(
                    url,
                    session=self.session,
                    attempts=AppConfig.get_int("retry_attempts"),
                    backoff=AppConfig.get_float("retry_backoff_seconds"),
                    timeout=AppConfig.get_float("request_timeout_seconds"),
                    log=self._log,
                    on_attempt=lambda _: metrics.count("upstream_attempts"),
                    sleep=self._sleep,
                    redact=lambda text: redact_key(text, key),
                )

            if not res.ok:
                text = res.text
                snippet = text[:AppConfig.get_int("error_snippet_chars")] if text else None
                self._log.error(
                    "Google Books API responded with non-OK status "
                    f"status={res.status_code} reason={res.reason} body_snippet={snippet!r}"
                )
                return error_response(res.status_code, UPSTREAM_ERROR_MESSAGE)

            result = SearchResponse.from_volumes(res.json(), limit=AppConfig.get_int("max_results"))
            metrics.record("items_returned", len(result.items))
            return api_response(200, result.model_dump())
        except Exception as e:
            message = redact_key(str(e), key)
            self._log.error(f"Search request failed: {message}")
            return error_response(500, message)
        finally:
            self._log.info(f"[{metrics.request_id}] search metrics: {metrics.summary()}")

    def _resolve_key(self) -> Optional[str]:
        secret_name = AppConfig.get_value("google_books_secret_name")
        try:
            key = self.resolver.resolve(secret_name)
        except Exception as e:
            # Continue unauthenticated rather than failing the search
            self._log.error(f"Failed to read secret: {e}")
            key = None

        if key:
            self._log.info(
                f"Google Books API key present (source={self.resolver.last_source}, mask={mask_key(key)})"
            )
        else:
            self._log.info("No Google Books API key found; requests will be unauthenticated")
        return key


# One handler per container so the credential cache survives warm invocations
handler = SearchHandler(CredentialResolver())


def lambda_handler(event, context):
    return handler(event, context)
