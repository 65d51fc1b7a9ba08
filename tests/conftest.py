import logging
from pathlib import Path
from unittest.mock import patch

import pytest
import requests
import yaml

from ledger_quotes.logging_config import LOGGER_NAME


class FakeResponse:
    """Minimal stand-in for requests.Response as used by the fetcher."""

    def __init__(self, body="", status_code=200, error=None):
        self._body = body
        self.status_code = status_code
        self._error = error
        self.closed = False

    @property
    def text(self):
        if self._error is not None:
            raise self._error
        return self._body

    def close(self):
        self.closed = True


class StubPages(dict):
    """url -> html (or FakeResponse, or Exception to raise from requests.get)."""

    def __init__(self):
        super().__init__()
        self.calls = []
        self.responses = []

    def get(self, url, timeout=None, stream=False):
        self.calls.append((url, timeout))
        page = super().get(url)
        if page is None:
            raise requests.exceptions.ConnectionError(f"Failed to connect to {url}")
        if isinstance(page, Exception):
            raise page
        resp = page if isinstance(page, FakeResponse) else FakeResponse(page)
        self.responses.append(resp)
        return resp


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep env overrides and logger state from leaking between tests"""
    for name in ("LEDGER_QUOTES_CONFIG", "LEDGER_QUOTES_TIMEOUT", "LEDGER_QUOTES_WORKERS"):
        monkeypatch.delenv(name, raising=False)

    yield

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def stub_pages():
    """Patch requests.get in the fetcher with an in-memory page table"""
    pages = StubPages()
    with patch("ledger_quotes.quote_service.fetcher.requests.get", side_effect=pages.get):
        yield pages


@pytest.fixture
def write_config(tmp_path):
    """Write a list of records as a YAML quote params file"""

    def _write(records, name=".quoteparams") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(records, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_response():
    """The FakeResponse class, for tests that build responses by hand"""
    return FakeResponse
