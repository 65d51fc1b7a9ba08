from __future__ import annotations

import sys
from typing import Iterable, TextIO

from prettytable import PrettyTable

from ..core.models import QuoteLine, ScrapeTarget, format_timestamp


def print_lines(lines: Iterable[QuoteLine], stream: TextIO | None = None) -> None:
    """Write each quote's price directive on its own line, in the given order."""
    out = stream if stream is not None else sys.stdout
    for line in lines:
        out.write(line.render() + "\n")
    out.flush()


def render_table(lines: Iterable[QuoteLine]) -> str:
    """Render fetched quotes as a table for interactive viewing."""
    table = PrettyTable()
    table.field_names = ["From", "Value", "To", "Timestamp (UTC)", "URL"]
    table.align["From"] = "l"
    table.align["Value"] = "r"
    table.align["To"] = "l"
    table.align["Timestamp (UTC)"] = "l"
    table.align["URL"] = "l"
    for q in lines:
        table.add_row([q.from_, q.value, q.to, format_timestamp(q.timestamp), q.url])
    return table.get_string()


def render_targets(targets: Iterable[ScrapeTarget]) -> str:
    """Render the configured scrape targets (no network access)."""
    table = PrettyTable()
    table.field_names = ["#", "From", "To", "Selector", "URL"]
    table.align["#"] = "r"
    table.align["Selector"] = "l"
    table.align["URL"] = "l"
    for idx, t in enumerate(targets, start=1):
        table.add_row([idx, t.from_, t.to, t.select, t.url])
    return table.get_string()
