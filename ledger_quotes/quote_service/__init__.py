"""Quote Service package.

Reads scrape targets from ~/.quoteparams, fetches every page concurrently,
extracts the rate with a CSS selector and prints ledger price directives.

Public entry points:
- loader.load_targets() — parse the quote params file
- runner.run_all() / runner.QuoteRunner — concurrent fetch of all targets
- printer.print_lines() — write the P lines to stdout
"""

from __future__ import annotations

__all__ = [
    "config",
    "loader",
    "fetcher",
    "runner",
    "printer",
]
