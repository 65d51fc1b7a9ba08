from __future__ import annotations

from pathlib import Path


class QuoteError(Exception):
    """Base class for every failure that aborts a quote run."""


class HomeDirNotFound(QuoteError):
    """The user's home directory could not be determined."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot find home dir: {reason}")


class ConfigNotFound(QuoteError):
    """Config file is missing or cannot be opened."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to open config file {self.path}: {reason}")


class ConfigParseError(QuoteError):
    """Config file content does not describe a list of scrape targets."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to parse config file {self.path}: {reason}")


class NetworkError(QuoteError):
    """HTTP GET could not complete (DNS, connect, TLS, timeout)."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot read url {url}: {reason}")


class HttpBodyError(QuoteError):
    """Response arrived but its body could not be read as text."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot read html body from url {url}: {reason}")


class SelectorSyntaxError(QuoteError):
    def __init__(self, selector: str, reason: str) -> None:
        self.selector = selector
        self.reason = reason
        super().__init__(f"Cannot parse html selector {selector!r}: {reason}")


class ExtractionError(QuoteError):
    def __init__(self, url: str, selector: str) -> None:
        self.url = url
        self.selector = selector
        super().__init__(f"Selector {selector!r} matched nothing at {url}")
