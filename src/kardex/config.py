# -*- coding: utf-8 -*-
"""Ledger configuration loaded from kardex.toml.

Each section of the file is merged over built-in defaults, so a missing
file or a partial file is fine. Values are validated once on load.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import tomllib

from kardex.constants import DEFAULT_BATCH_SIZE, DEFAULT_LOCATION, DEFAULT_WINDOWS
from kardex.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "kardex.toml"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "ledger": {
        "default_location": DEFAULT_LOCATION,
        "allowed_locations": [],
    },
    "import": {
        "batch_size": DEFAULT_BATCH_SIZE,
        "show_progress": False,
    },
    "stats": {
        "windows": list(DEFAULT_WINDOWS),
        "default_window": "ALL",
    },
    "logging": {
        "level": "INFO",
        "format": LOG_FORMAT,
    },
}


@dataclass(frozen=True)
class KardexConfig:
    """Resolved configuration values."""

    default_location: str = DEFAULT_LOCATION
    allowed_locations: Tuple[str, ...] = ()
    batch_size: int = DEFAULT_BATCH_SIZE
    show_progress: bool = False
    windows: Tuple[int, ...] = DEFAULT_WINDOWS
    default_window: str = "ALL"
    log_level: str = "INFO"
    log_format: str = LOG_FORMAT
    source: Optional[Path] = field(default=None, compare=False)


def read_config_file(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Read raw TOML sections, or an empty dict when the file is absent."""
    config_path = Path(config_path or CONFIG_FILENAME)
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using defaults")
        return {}

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Cannot parse {config_path}: {e}") from e


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = raw.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table", key=name)
    return {**DEFAULTS[name], **section}


def load_config(config_path: Optional[Path] = None) -> KardexConfig:
    """Load kardex.toml and merge it over the defaults.

    Args:
        config_path: Path to the TOML file. Defaults to ./kardex.toml.

    Returns:
        KardexConfig with validated values.

    Raises:
        ConfigError: If the file cannot be parsed or a value is invalid.
    """
    raw = read_config_file(config_path)

    ledger = _section(raw, "ledger")
    imports = _section(raw, "import")
    stats = _section(raw, "stats")
    logging_section = _section(raw, "logging")

    batch_size = imports["batch_size"]
    if not isinstance(batch_size, int) or isinstance(batch_size, bool) or batch_size < 1:
        raise ConfigError(
            f"import.batch_size must be a positive integer, got {batch_size!r}",
            key="import.batch_size",
        )

    windows = stats["windows"]
    if not isinstance(windows, list) or not all(
        isinstance(w, int) and not isinstance(w, bool) and w > 0 for w in windows
    ):
        raise ConfigError(
            f"stats.windows must be a list of positive integers, got {windows!r}",
            key="stats.windows",
        )

    allowed = ledger["allowed_locations"]
    if not isinstance(allowed, list):
        raise ConfigError(
            "ledger.allowed_locations must be a list", key="ledger.allowed_locations"
        )

    level = str(logging_section["level"]).upper()
    if level not in logging.getLevelNamesMapping():
        raise ConfigError(f"Unknown log level: {level}", key="logging.level")

    return KardexConfig(
        default_location=str(ledger["default_location"]).strip() or DEFAULT_LOCATION,
        allowed_locations=tuple(str(loc) for loc in allowed),
        batch_size=batch_size,
        show_progress=bool(imports["show_progress"]),
        windows=tuple(windows),
        default_window=str(stats["default_window"]),
        log_level=level,
        log_format=str(logging_section["format"]),
        source=Path(config_path or CONFIG_FILENAME) if raw else None,
    )
