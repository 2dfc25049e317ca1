import json
import os
from typing import Any, List, Optional

import pytest

from settings import AppConfig

_ENV_VARS = (
    "GOOGLE_BOOKS_API_KEY",
    "GOOGLE_BOOKS_SECRET_NAME",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "CORS_ORIGIN",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("BOOKS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BOOKS_CONFIG_PATH", str(tmp_path / "missing-config.json"))
    monkeypatch.chdir(tmp_path)
    AppConfig.reset()
    yield
    AppConfig.reset()


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None, reason: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else json.dumps(payload))
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """Returns (or raises) the queued outcomes in order and records each call"""

    def __init__(self, *outcomes):
        self.outcomes: List[Any] = list(outcomes)
        self.calls: List[dict] = []

    def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def volume(volume_id: str, **info) -> dict:
    return {"id": volume_id, "volumeInfo": info, "saleInfo": {"country": "JP"}}
