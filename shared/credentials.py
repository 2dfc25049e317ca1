"""
Google Books API key resolution.

Priority:
- GOOGLE_BOOKS_API_KEY in the environment, re-read on every call
- the Secrets Manager secret named by the caller, fetched once per process
  and kept in a CredentialCache until the process restarts
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional
from urllib.parse import quote

from services.secrets import get_secret_string
from shared.books import URI_SAFE
from settings import AppConfig

logger = logging.getLogger("books-search-lambda")

# Field names probed in a JSON secret, highest priority first
KEY_FIELDS = ("GOOGLE_BOOKS_API_KEY", "apiKey", "API_KEY")


def mask_key(key: Optional[str]) -> Optional[str]:
    if not key:
        return None
    return f"{key[:4]}...{key[-4:]}" if len(key) > 8 else "****"


def redact_key(text: str, key: Optional[str]) -> str:
    """Replace the raw and URL-encoded key in `text` with its mask"""
    if not key:
        return text
    for form in (quote(key, safe=URI_SAFE), key):
        text = text.replace(form, mask_key(key))
    return text


@dataclass
class SecretPayload:
    """A secret string parsed either as a JSON object or as a plain-text key"""

    fields: Dict[str, str] = field(default_factory=dict)
    structured: bool = False

    @classmethod
    def parse(cls, raw: str) -> "SecretPayload":
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            return cls(fields=parsed, structured=True)
        return cls(fields={KEY_FIELDS[0]: raw}, structured=False)

    def api_key(self) -> Optional[str]:
        for name in KEY_FIELDS:
            value = self.fields.get(name)
            if value:
                return str(value)
        return None


class CredentialCache:
    """Holds the key resolved from the secret store for the life of the process"""

    def __init__(self):
        self._populated = False
        self._value: Optional[str] = None

    @property
    def populated(self) -> bool:
        return self._populated

    def get(self) -> Optional[str]:
        return self._value

    def store(self, value: Optional[str]) -> None:
        self._value = value
        self._populated = True

    def clear(self) -> None:
        self._value = None
        self._populated = False


class CredentialResolver:
    """Decides which API key, if any, is attached to upstream requests"""

    def __init__(
        self,
        cache: Optional[CredentialCache] = None,
        fetch_secret: Callable[[str], str] = get_secret_string,
        log: Optional[logging.Logger] = None,
    ):
        self.cache = cache if cache is not None else CredentialCache()
        self._fetch_secret = fetch_secret
        self._log = log or logger
        self.last_source: Optional[str] = None

    def resolve(self, secret_name: Optional[str] = None) -> Optional[str]:
        env_key = AppConfig.get_value("google_books_api_key")
        if env_key:
            self.last_source = "env"
            return env_key

        self.last_source = None
        if not secret_name:
            return None

        if self.cache.populated:
            self.last_source = "secretsmanager"
            return self.cache.get()

        # Failures propagate and leave the cache empty so the next call retries
        payload = SecretPayload.parse(self._fetch_secret(secret_name))
        key = payload.api_key()
        self.cache.store(key)
        self.last_source = "secretsmanager"

        if key:
            self._log.info(f"Retrieved secret for {secret_name}, key mask={mask_key(key)}")
        else:
            self._log.info(f"Secret {secret_name} found but no recognizable key field")
        return key
