from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..core.exceptions import ConfigNotFound, ConfigParseError
from ..core.models import ScrapeTarget

REQUIRED_FIELDS: tuple[str, ...] = ("url", "select", "from", "to")

_logger = logging.getLogger("ledger_quotes")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigNotFound(path, "no such file") from exc
    except IsADirectoryError as exc:
        raise ConfigNotFound(path, "is a directory") from exc
    except PermissionError as exc:
        raise ConfigNotFound(path, "permission denied") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigNotFound(path, str(exc)) from exc


def _build_target(path: Path, index: int, record: Any) -> ScrapeTarget:
    if not isinstance(record, dict):
        raise ConfigParseError(
            path, f"record #{index} must be a mapping, got {type(record).__name__}"
        )
    values: dict[str, str] = {}
    for field in REQUIRED_FIELDS:
        if field not in record:
            raise ConfigParseError(path, f"record #{index} is missing '{field}'")
        value = record[field]
        if not isinstance(value, str):
            reason = (
                f"record #{index} field '{field}' must be a string, "
                f"got {type(value).__name__}"
            )
            if isinstance(value, (bool, int, float)):
                # YAML 1.1 reads bare NO/ON/100 as bool or number
                reason += " (write the value in quotes)"
            raise ConfigParseError(path, reason)
        values[field] = value
    return ScrapeTarget(
        url=values["url"],
        select=values["select"],
        from_=values["from"],
        to=values["to"],
    )


def parse_targets(text: str, path: str | Path = "<string>") -> list[ScrapeTarget]:
    """Parse YAML text into scrape targets, preserving file order.

    Raises:
        ConfigParseError: malformed YAML or a record of the wrong shape
    """
    path = Path(path)
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigParseError(path, f"invalid YAML: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigParseError(
            path, f"expected a list of records, got {type(data).__name__}"
        )
    return [_build_target(path, i, rec) for i, rec in enumerate(data)]


def load_targets(path: str | Path) -> list[ScrapeTarget]:
    """Read the quote params file at ``path``.

    Raises:
        ConfigNotFound: file missing or unreadable
        ConfigParseError: content is not a list of url/select/from/to records
    """
    path = Path(path)
    targets = parse_targets(_read_text(path), path)
    _logger.info("Loaded %d scrape targets from %s", len(targets), path)
    return targets
