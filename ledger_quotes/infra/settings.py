from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

PROJECT_FILE = Path(__file__).resolve().parents[2] / "pyproject.toml"

DEFAULTS: dict[str, Any] = {
    "config_filename": ".quoteparams",
    "log_file": None,  # file logging disabled unless configured
    "log_level": "WARNING",
    "log_rotation_bytes": 1_048_576,  # 1MB
    "log_backup_count": 5,
    "max_workers": 16,
    "request_timeout": None,
}


def read_tool_section(pyproject: Path) -> dict[str, Any]:
    """Return [tool.ledger_quotes] from a project file, {} when unusable."""
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    section = data.get("tool", {}).get("ledger_quotes", {})
    return section if isinstance(section, dict) else {}


class SettingsLoader:
    """Process-wide settings: DEFAULTS overlaid with [tool.ledger_quotes]."""

    _instance: "SettingsLoader | None" = None
    _lock = threading.Lock()
    _config: dict[str, Any]

    def __new__(cls) -> "SettingsLoader":
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._config = {**DEFAULTS, **read_tool_section(PROJECT_FILE)}
                cls._instance = instance
        return cls._instance

    def get(self, key: str, default: Any | None = None) -> Any:
        return self._config.get(key, default)
