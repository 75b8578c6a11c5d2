"""calendarkit.config_loader

Lightweight config loader for calendarkit.

- Reads YAML (PyYAML); JSON documents parse as YAML too.
- Exposes a typed dataclass `Config` and a `load_config()` helper that accepts
  an optional path override.
"""

from __future__ import annotations

import logging
import zoneinfo
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from calendarkit.calendar.recurrence import DEFAULT_MAX_OCCURRENCES
from calendarkit.codec.ics_codec import PRODUCT_ID
from calendarkit.codec.json_codec import EXPORT_VERSION

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Typed configuration for calendarkit.

    Fields:
        local_timezone: IANA zone pinning the "local" timezone mode (None = system zone)
        max_occurrences: safety cap on occurrences per recurring event
        export_version: version string written into JSON exports
        product_id: PRODID written into ICS exports
        events_path: path of the JSON event store
        week_start: first weekday of calendar grids (Mon=0 ... Sun=6)
        log_level: logging level name
    """

    local_timezone: str | None = None
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES
    export_version: str = EXPORT_VERSION
    product_id: str = PRODUCT_ID
    events_path: str = "calendar-events.json"
    week_start: int = 6
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Config:
        """Create Config from a plain mapping, applying defaults and validation.

        Numeric-like values are coerced to int, out-of-range values fall back
        to defaults, and every coercion is logged as a warning.
        """
        if data is None:
            data = {}

        def _coerce_int(key: str, default: int) -> int:
            raw = data.get(key, default)
            try:
                return int(raw)
            except (TypeError, ValueError):
                logger.warning("Config %s=%r is not an int; using default %d", key, raw, default)
                return default

        max_occurrences = _coerce_int("max_occurrences", DEFAULT_MAX_OCCURRENCES)
        if max_occurrences < 1:
            logger.warning("max_occurrences %d below minimum; coercing to 1", max_occurrences)
            max_occurrences = 1

        week_start = _coerce_int("week_start", 6)
        if not 0 <= week_start <= 6:
            logger.warning("week_start %d out of range 0..6; using 6 (Sunday)", week_start)
            week_start = 6

        local_timezone = data.get("local_timezone")
        if local_timezone is not None:
            local_timezone = str(local_timezone)
            try:
                zoneinfo.ZoneInfo(local_timezone)
            except (zoneinfo.ZoneInfoNotFoundError, ValueError):
                logger.warning("Config local_timezone %r is not a valid zone; ignoring", local_timezone)
                local_timezone = None

        log_level = data.get("log_level", "INFO")
        log_level = str(log_level).upper() if log_level is not None else "INFO"

        return cls(
            local_timezone=local_timezone,
            max_occurrences=max_occurrences,
            export_version=str(data.get("export_version", EXPORT_VERSION)),
            product_id=str(data.get("product_id", PRODUCT_ID)),
            events_path=str(data.get("events_path", "calendar-events.json")),
            week_start=week_start,
            log_level=log_level,
        )


def _load_mapping(path: Path) -> Any:
    """Load a YAML (or JSON) document; empty files load as an empty mapping."""
    loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    return {} if loaded is None else loaded


def load_config(path: str | None = None) -> Config:
    """Load configuration from a YAML/JSON file and return a Config instance.

    Args:
        path: Optional path to the config file. Defaults to ./calendarkit.yaml.

    Behavior:
    - If file is missing: returns Config() with defaults.
    - If file exists but top-level is not a mapping: raises ValueError.
    - If the file is not valid YAML: raises yaml.YAMLError.
    """
    p = Path(path) if path else Path.cwd() / "calendarkit.yaml"
    logger.debug("Attempting to load config from %s", p)
    if not p.exists():
        logger.info("Config file %s not found; using defaults", p)
        return Config()

    raw = _load_mapping(p)
    if not isinstance(raw, dict):
        logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, raw)
        raise ValueError("Config file must contain a mapping at top level")  # noqa: TRY004
    cfg = Config.from_dict(raw)
    logger.info("Loaded configuration from %s", p)
    logger.debug("Configuration values: %s", cfg)
    return cfg
