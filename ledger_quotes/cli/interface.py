"""CLI entrypoint for ledger-quotes.

Здесь только разбор аргументов и вывод. Загрузка, сбор и форматирование
котировок живут в quote_service.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from ..core.exceptions import QuoteError
from ..logging_config import configure_logging
from ..quote_service.config import load_service_config, resolve_config_path
from ..quote_service.loader import load_targets
from ..quote_service.printer import print_lines, render_table, render_targets
from ..quote_service.runner import QuoteRunner

_logger = logging.getLogger("ledger_quotes")


def _print_error(msg: str) -> None:
    """Print a user-facing error message to stderr (no stack traces)."""
    print(msg, file=sys.stderr)


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid int value: {raw!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return value


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid float value: {raw!r}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError("must be positive")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Construct the argparse parser."""
    parser = argparse.ArgumentParser(
        prog="ledger-quotes",
        description=(
            "Scrape currency quotes from web pages listed in ~/.quoteparams and "
            "print them as ledger price directives."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Quote params file (default: ~/.quoteparams)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        help="Maximum number of pages fetched at once (default: 16)",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        help="Per-request timeout in seconds (default: none)",
    )
    out = parser.add_mutually_exclusive_group()
    out.add_argument(
        "--table",
        action="store_true",
        help="Show the fetched quotes as a table instead of P lines",
    )
    out.add_argument(
        "--list",
        action="store_true",
        help="Show the configured targets and exit without fetching",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every fetch and error details to stderr (DEBUG level)",
    )
    return parser


def run(ns: argparse.Namespace) -> int:
    """Execute one run for parsed arguments and return process exit code."""
    try:
        cfg = load_service_config()
    except ValueError as exc:
        _print_error(f"Error: {exc}")
        return 2
    overrides: dict[str, object] = {}
    if ns.config is not None:
        overrides["CONFIG_PATH"] = ns.config.expanduser()
    if ns.workers is not None:
        overrides["MAX_WORKERS"] = ns.workers
    if ns.timeout is not None:
        overrides["REQUEST_TIMEOUT"] = ns.timeout
    if overrides:
        cfg = dataclasses.replace(cfg, **overrides)

    try:
        targets = load_targets(resolve_config_path(cfg))
        if ns.list:
            print(render_targets(targets))
            return 0
        quotes = QuoteRunner(cfg).run(targets)
    except QuoteError as exc:
        _logger.debug("Run aborted", exc_info=True)
        _print_error(f"Error: {exc}")
        return 1

    if ns.table:
        print(render_table(quotes))
    else:
        print_lines(quotes)
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint used by the console script and main.py.

    Args:
        argv: Optional explicit argv (without program name). If None, uses sys.argv[1:].
    Returns:
        Exit code integer (0 success, 1 on a failed run, 2 on usage errors).
    """
    parser = build_parser()
    ns = parser.parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging("DEBUG" if ns.verbose else None)
    return run(ns)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
