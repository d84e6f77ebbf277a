"""Output layouts, render options and the properties schema."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping

import jsonschema

from hylog.errors import InvalidArgumentError


class Format(str, Enum):
    JSON = "json"
    RAW = "raw"
    TEXT = "text"
    PROPERTIES = "properties"
    SLF = "slf"


class TimestampFormat(str, Enum):
    NUMERIC = "numeric"
    ISO = "iso"
    UTC = "utc"


def coerce_format(value: Any) -> Format:
    try:
        return Format(value.lower() if isinstance(value, str) else value)
    except ValueError:
        raise InvalidArgumentError(f"Unknown format '{value}'", context={"format": value}) from None


# ---------------------------------------------------------------------------
# Render options
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RenderOptions:
    timestamp_format: TimestampFormat = TimestampFormat.UTC
    shorter_level: bool = False
    level_under_brackets: bool = True

    def __post_init__(self):
        try:
            ts_format = TimestampFormat(self.timestamp_format)
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown timestamp format '{self.timestamp_format}'",
                context={"timestamp_format": self.timestamp_format},
            ) from None
        object.__setattr__(self, "timestamp_format", ts_format)
        for name in ("shorter_level", "level_under_brackets"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidArgumentError(
                    f"Render option '{name}' must be a boolean, got {type(value).__name__}",
                    context={name: value},
                )

    def merge(self, patch: RenderOptions | Mapping[str, Any] | None = None, **changes) -> RenderOptions:
        """Return a copy with *patch* and *changes* applied on top."""
        updates: dict[str, Any] = {}
        if isinstance(patch, RenderOptions):
            updates.update(asdict(patch))
        elif patch:
            updates.update(patch)
        updates.update(changes)

        unknown = set(updates) - {f.name for f in fields(self)}
        if unknown:
            raise InvalidArgumentError(
                f"Unknown render option(s): {', '.join(sorted(unknown))}",
                context={"options": sorted(unknown)},
            )
        return replace(self, **updates)


DEFAULT_OPTIONS = RenderOptions()

# ---------------------------------------------------------------------------
# Properties schema
# ---------------------------------------------------------------------------

PROPERTIES_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "propertyNames": {"type": "string", "pattern": "^[A-Za-z0-9_]+$"},
    "additionalProperties": {"type": ["string", "number", "boolean", "null"]},
}

_properties_validator = jsonschema.Draft202012Validator(PROPERTIES_SCHEMA)


def validate_properties(props: Any) -> list[str]:
    """Return the schema violations of *props* (empty when valid)."""
    return [error.message for error in _properties_validator.iter_errors(props)]
