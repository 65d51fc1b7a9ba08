"""Entrypoint for running the CLI directly via `python main.py`."""

from __future__ import annotations

from ledger_quotes.cli.interface import main

if __name__ == "__main__":
    raise SystemExit(main())
