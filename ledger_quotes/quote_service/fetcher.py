from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

import requests
import soupsieve
from bs4 import BeautifulSoup

from ..core.exceptions import (
    ExtractionError,
    HttpBodyError,
    NetworkError,
    SelectorSyntaxError,
)
from ..core.models import QuoteLine, ScrapeTarget
from ..decorators import log_action
from .config import QuoteServiceConfig

_logger = logging.getLogger("ledger_quotes")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def compile_selector(select: str) -> soupsieve.SoupSieve:
    """Compile a CSS selector or raise SelectorSyntaxError."""
    try:
        return soupsieve.compile(select)
    except soupsieve.SelectorSyntaxError as exc:
        # soupsieve appends a multi-line caret diagram; keep the headline
        reason = next(iter(str(exc).splitlines()), "invalid selector")
        raise SelectorSyntaxError(select, reason) from exc


def download_text(url: str, timeout: float | None = None) -> str:
    """GET ``url`` and return the body decoded with requests' charset detection.

    Raises:
        NetworkError: the request could not be sent or no response arrived
        HttpBodyError: the response body could not be read or decoded
    """
    try:
        resp = requests.get(url, timeout=timeout, stream=True)
    except requests.exceptions.RequestException as exc:
        raise NetworkError(url, str(exc)) from exc

    try:
        if not 200 <= resp.status_code < 300:
            _logger.warning("GET %s returned HTTP %s", url, resp.status_code)
        try:
            return resp.text
        except requests.exceptions.RequestException as exc:
            raise HttpBodyError(url, str(exc)) from exc
        except (LookupError, UnicodeDecodeError) as exc:
            raise HttpBodyError(url, f"cannot decode body: {exc}") from exc
    finally:
        resp.close()


def extract_value(html: str, selector: soupsieve.SoupSieve, url: str) -> str:
    """Return the inner HTML of the first node matching ``selector``.

    The markup is parsed with html5lib, which repairs it the way browsers do
    (implied tbody, auto-closed paragraphs). The value is returned verbatim.
    """
    page = BeautifulSoup(html, "html5lib")
    node = selector.select_one(page)
    if node is None:
        raise ExtractionError(url, selector.pattern)
    return node.decode_contents()


@log_action("FETCH")
def fetch_quote(
    target: ScrapeTarget,
    timeout: float | None = None,
    clock: Clock | None = None,
) -> QuoteLine:
    """Fetch one target's page and build its price line.

    The selector is compiled before any network I/O, so a bad selector fails
    with SelectorSyntaxError whatever the network does.
    """
    selector = compile_selector(target.select)
    html = download_text(target.url, timeout=timeout)
    value = extract_value(html, selector, target.url)
    now = (clock or utc_now)()
    return QuoteLine(
        timestamp=now,
        from_=target.from_,
        value=value,
        to=target.to,
        url=target.url,
    )


class QuoteFetcher:
    """Fetcher bound to a service config (timeout) and a clock."""

    def __init__(self, cfg: QuoteServiceConfig, clock: Clock | None = None) -> None:
        self.cfg = cfg
        self.clock = clock or utc_now

    def fetch(self, target: ScrapeTarget) -> QuoteLine:
        return fetch_quote(target, timeout=self.cfg.REQUEST_TIMEOUT, clock=self.clock)

    __call__ = fetch
