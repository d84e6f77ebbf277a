"""Severity levels and the alias tables used to render and recognise them."""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, Any

from hylog.errors import InvalidArgumentError

if TYPE_CHECKING:
    from hylog.entry import LogEntry


class Level(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    LOG = "LOG"
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    SUCCESS = "SUCCESS"
    FATAL = "FATAL"


# ---------------------------------------------------------------------------
# Alias tables
# ---------------------------------------------------------------------------

SHORT_TOKENS: dict[Level, str] = {
    Level.WARNING: "WRN",
    Level.INFO: "INF",
    Level.SUCCESS: "SCC",
    Level.FATAL: "FTL",
    Level.DEBUG: "DBG",
    Level.ERROR: "ERR",
    Level.TRACE: "TRC",
    Level.LOG: "LOG",
}

# Every recognised token (upper case) → canonical level
ALIASES: dict[str, Level] = {
    **{level.value: level for level in Level},
    **{short: level for level, short in SHORT_TOKENS.items()},
    "WARN": Level.WARNING,
}

# Longest first, so "ERROR" is never consumed as "ERR"
ALIAS_PATTERN = "|".join(sorted(ALIASES, key=lambda token: (-len(token), token)))

_LEVEL_RE = re.compile(rf"\[?({ALIAS_PATTERN})\]?", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def coerce_level(value: Any) -> Level:
    """Return the Level for a Level member or a canonical name (any case)."""
    if isinstance(value, Level):
        return value
    if isinstance(value, str):
        try:
            return Level(value.strip().upper())
        except ValueError:
            pass
    raise InvalidArgumentError(f"Unknown level descriptor '{value}'", context={"level": value})


def stringify_level(level: Level | str, short: bool = False) -> str:
    """Render *level* as its long token, or its 3-letter token when *short*."""
    if isinstance(level, Level):
        canonical = level
    else:
        try:
            canonical = Level(level)
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown level descriptor '{level}'", context={"level": level}
            ) from None

    if not short:
        return canonical.value
    return SHORT_TOKENS[canonical]


def extract_level(entry: LogEntry | str) -> Level:
    """Return the level of a LogEntry, or the first level alias found in text."""
    if not isinstance(entry, str):
        return entry.level

    match = _LEVEL_RE.search(entry)
    if not match:
        raise InvalidArgumentError(
            "This entry does not appear to have a level", context={"text": entry}
        )
    return ALIASES[match.group(1).upper()]
