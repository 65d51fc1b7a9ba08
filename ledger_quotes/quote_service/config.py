from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from ..core.exceptions import HomeDirNotFound
from ..infra.settings import SettingsLoader

ENV_CONFIG = "LEDGER_QUOTES_CONFIG"
ENV_TIMEOUT = "LEDGER_QUOTES_TIMEOUT"
ENV_WORKERS = "LEDGER_QUOTES_WORKERS"


@dataclass(frozen=True)
class QuoteServiceConfig:
    # Путь к файлу с целями (по умолчанию ~/.quoteparams)
    CONFIG_PATH: Path | None

    # Сетевые параметры: None означает таймаут транспорта по умолчанию
    REQUEST_TIMEOUT: float | None

    # Верхняя граница пула потоков
    MAX_WORKERS: int


def home_dir() -> Path:
    """Return the current user's home directory or raise HomeDirNotFound."""
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise HomeDirNotFound(str(exc) or "home directory is not set") from exc


def default_config_path() -> Path:
    """Return ``<home>/.quoteparams`` (file name from settings)."""
    settings = SettingsLoader()
    name = str(settings.get("config_filename", ".quoteparams") or ".quoteparams")
    return home_dir() / name


def _optional_float(raw: object, name: str) -> float | None:
    if raw is None or str(raw).strip() == "":
        return None
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _positive_int(raw: object, name: str) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {raw!r}")
    return value


def load_service_config() -> QuoteServiceConfig:
    """Load service configuration from env/.env and project settings.

    Returns a frozen QuoteServiceConfig. Environment variables override .env;
    SettingsLoader provides defaults. CONFIG_PATH stays None unless
    overridden so the home directory is only resolved when actually needed.
    """
    # Load .env once per process (non-overriding)
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(dotenv_path=path, override=False)
    settings = SettingsLoader()
    cfg_path = os.getenv(ENV_CONFIG)
    return QuoteServiceConfig(
        CONFIG_PATH=Path(cfg_path).expanduser() if cfg_path else None,
        REQUEST_TIMEOUT=_optional_float(
            os.getenv(ENV_TIMEOUT, settings.get("request_timeout")), ENV_TIMEOUT
        ),
        MAX_WORKERS=_positive_int(
            os.getenv(ENV_WORKERS, settings.get("max_workers", 16)), ENV_WORKERS
        ),
    )


def resolve_config_path(cfg: QuoteServiceConfig) -> Path:
    """Return the configured quote params path, defaulting to the home dir."""
    if cfg.CONFIG_PATH is not None:
        return cfg.CONFIG_PATH
    return default_config_path()
