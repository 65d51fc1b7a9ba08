from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Iterable

from ..core.models import QuoteLine, ScrapeTarget
from .config import QuoteServiceConfig, load_service_config
from .fetcher import QuoteFetcher, fetch_quote

DEFAULT_MAX_WORKERS = 16

Fetch = Callable[[ScrapeTarget], QuoteLine]

_logger = logging.getLogger("ledger_quotes")


def run_all(
    targets: Iterable[ScrapeTarget],
    fetch: Fetch | None = None,
    max_workers: int | None = None,
) -> list[QuoteLine]:
    """Fetch every target concurrently and return the quotes in input order.

    Fail-fast: the first failure to complete cancels fetches that have not
    started yet and is re-raised unchanged. Fetches already running are left
    to finish in the background; their results are discarded, so a failed
    batch yields no quotes at all.
    """
    items = list(targets)
    if not items:
        return []
    fetch = fetch or fetch_quote
    workers = max(1, min(max_workers or DEFAULT_MAX_WORKERS, len(items)))

    results: list[QuoteLine | None] = [None] * len(items)
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="quote")
    try:
        futures: dict[Future[QuoteLine], int] = {
            executor.submit(fetch, target): idx for idx, target in enumerate(items)
        }
        for fut in as_completed(futures):
            results[futures[fut]] = fut.result()
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)
    return [quote for quote in results if quote is not None]


class QuoteRunner:
    """Orchestrates one run: fan out fetches over a bounded pool, collect.

    - Pool size is min(MAX_WORKERS, number of targets)
    - Output order matches the order of the quote params file
    - All-or-nothing: any failed fetch fails the whole run
    """

    def __init__(
        self,
        cfg: QuoteServiceConfig | None = None,
        fetcher: Fetch | None = None,
    ) -> None:
        self.cfg = cfg or load_service_config()
        self.fetcher = fetcher or QuoteFetcher(self.cfg)

    def run(self, targets: Iterable[ScrapeTarget]) -> list[QuoteLine]:
        items = list(targets)
        _logger.info(
            "Fetching %d quotes (workers=%d)...",
            len(items),
            min(self.cfg.MAX_WORKERS, len(items)),
        )
        quotes = run_all(items, fetch=self.fetcher, max_workers=self.cfg.MAX_WORKERS)
        _logger.info("Fetched %d quotes", len(quotes))
        return quotes
