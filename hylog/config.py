"""Configuration: defaults, optional YAML file, then environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import yaml

from hylog.models import Format, RenderOptions, TimestampFormat
from hylog.levels import Level

logger = logging.getLogger(__name__)

VALID_FORMATS = tuple(f.value for f in Format)
VALID_LEVELS = tuple(level.value for level in Level)
VALID_TIMESTAMP_FORMATS = tuple(t.value for t in TimestampFormat)

_ENV_KEYS = {
    "default_format": "HYLOG_FORMAT",
    "default_level": "HYLOG_LEVEL",
    "timestamp_format": "HYLOG_TIMESTAMP_FORMAT",
    "shorter_level": "HYLOG_SHORTER_LEVEL",
    "level_under_brackets": "HYLOG_LEVEL_UNDER_BRACKETS",
}


def _parse_bool(val, default: bool) -> bool:
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in ("true", "1", "yes")


def _choice(name: str, val, valid: tuple[str, ...], default: str, upper: bool = False) -> str:
    if val is None:
        return default
    normalized = str(val).strip()
    normalized = normalized.upper() if upper else normalized.lower()
    if normalized not in valid:
        logger.warning("Invalid %s '%s', falling back to '%s'", name, val, default)
        return default
    return normalized


@dataclass(frozen=True)
class Config:
    default_format: str = "slf"
    default_level: str = "LOG"
    timestamp_format: str = "utc"
    shorter_level: bool = False
    level_under_brackets: bool = True

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            timestamp_format=TimestampFormat(self.timestamp_format),
            shorter_level=self.shorter_level,
            level_under_brackets=self.level_under_brackets,
        )


def load_yaml(path: str) -> dict:
    """Read the ``hylog:`` section of a YAML file.

    A missing file yields {}; invalid YAML is logged and ignored.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as exc:
        logger.warning("Invalid YAML in %s, using defaults: %s", path, exc)
        return {}

    if not isinstance(data, dict):
        return {}
    section = data.get("hylog", data)
    return section if isinstance(section, dict) else {}


def load_config(path: str | None = None) -> Config:
    """Build Config from defaults ← YAML file ← environment variables."""
    path = path or os.environ.get("HYLOG_CONFIG_PATH")
    raw = load_yaml(path) if path else {}

    for key, env_name in _ENV_KEYS.items():
        if env_name in os.environ:
            raw[key] = os.environ[env_name]

    return Config(
        default_format=_choice("format", raw.get("default_format"), VALID_FORMATS, Config.default_format),
        default_level=_choice("level", raw.get("default_level"), VALID_LEVELS, Config.default_level, upper=True),
        timestamp_format=_choice(
            "timestamp format", raw.get("timestamp_format"), VALID_TIMESTAMP_FORMATS, Config.timestamp_format
        ),
        shorter_level=_parse_bool(raw.get("shorter_level"), Config.shorter_level),
        level_under_brackets=_parse_bool(raw.get("level_under_brackets"), Config.level_under_brackets),
    )
