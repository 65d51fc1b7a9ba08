"""Domain models for ledger-quotes.

ScrapeTarget describes one configured page; QuoteLine is the price directive
produced from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


def format_timestamp(moment: datetime) -> str:
    """Format a moment as UTC 'YYYY/MM/DD HH:MM:SS' (naive values are UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


@dataclass(frozen=True)
class ScrapeTarget:
    """One entry of the quote params file.

    Attributes:
        url: Page holding the rate.
        select: CSS selector whose first match holds the value.
        from_: Commodity being priced (``from`` in the config file).
        to: Commodity the price is expressed in.
    """

    url: str
    select: str
    from_: str
    to: str


@dataclass(frozen=True)
class QuoteLine:
    timestamp: datetime
    from_: str
    value: str
    to: str
    url: str = ""  # diagnostics only, not rendered

    def render(self) -> str:
        """Return the ledger price directive for this quote."""
        ts = format_timestamp(self.timestamp)
        return f"P {ts} {self.from_} {self.value} {self.to}"

    def __str__(self) -> str:
        return self.render()
