"""LogEntry: one log record plus the options used to render it."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Mapping

from hylog.errors import InvalidArgumentError
from hylog.jsonio import stringify_json
from hylog.levels import Level, coerce_level, stringify_level
from hylog.models import (
    DEFAULT_OPTIONS,
    Format,
    RenderOptions,
    TimestampFormat,
    coerce_format,
    validate_properties,
)
from hylog.properties import Properties, format_properties
from hylog.slf import format_slf
from hylog.timestamps import format_iso, format_utc, to_epoch_millis

if TYPE_CHECKING:
    from hylog.config import Config


def _now() -> datetime:
    """Current UTC instant truncated to milliseconds."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


class LogEntry:
    """A single log event.

    The timestamp is taken when the entry is created and never changes.
    ``format``/``level`` have setters and ``options()`` merges render
    options; rendering reads only the current field values.
    """

    def __init__(
        self,
        format: Format | str = Format.SLF,
        level: Level | str = Level.LOG,
        message: Any = None,
        properties: Properties | None = None,
        options: RenderOptions | Mapping[str, Any] | None = None,
    ):
        self._timestamp = _now()
        self._format = coerce_format(format)
        self._level = coerce_level(level)
        self._message = message

        props = dict(properties) if properties is not None else {}
        errors = validate_properties(props)
        if errors:
            raise InvalidArgumentError(
                f"Invalid properties: {'; '.join(errors)}", context={"properties": props}
            )
        self._props = props
        self._options = DEFAULT_OPTIONS.merge(options)

    @classmethod
    def from_config(
        cls,
        config: Config,
        message: Any = None,
        properties: Properties | None = None,
        level: Level | str | None = None,
        format: Format | str | None = None,
    ) -> LogEntry:
        """Build an entry whose defaults (format, level, options) come from *config*."""
        return cls(
            format=format if format is not None else config.default_format,
            level=level if level is not None else config.default_level,
            message=message,
            properties=properties,
            options=config.render_options(),
        )

    # -- accessors ----------------------------------------------------------

    @property
    def format(self) -> Format:
        return self._format

    @format.setter
    def format(self, value: Format | str):
        self._format = coerce_format(value)

    @property
    def level(self) -> Level:
        return self._level

    @level.setter
    def level(self, value: Level | str):
        self._level = coerce_level(value)

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def render_options(self) -> RenderOptions:
        return self._options

    def options(self, patch: RenderOptions | Mapping[str, Any] | None = None, **changes) -> LogEntry:
        """Merge *patch* over the current render options; returns self."""
        self._options = self._options.merge(patch, **changes)
        return self

    def get_message(self) -> Any:
        if self._format is Format.PROPERTIES:
            return dict(self._props)
        return self._message

    def get_timestamp(self, fmt: str | None = None) -> int | str:
        """Epoch milliseconds, or the 'iso' / 'utc' string form."""
        if fmt == TimestampFormat.ISO:
            return format_iso(self._timestamp)
        if fmt == TimestampFormat.UTC:
            return format_utc(self._timestamp)
        return to_epoch_millis(self._timestamp)

    # -- rendering ----------------------------------------------------------

    def _render_timestamp(self) -> str:
        ts_format = self._options.timestamp_format
        if ts_format is TimestampFormat.NUMERIC:
            return str(to_epoch_millis(self._timestamp))
        if ts_format is TimestampFormat.ISO:
            return format_iso(self._timestamp)
        return format_utc(self._timestamp)

    def _render_level(self) -> str:
        token = stringify_level(self._level, self._options.shorter_level)
        if self._options.level_under_brackets:
            return f"[{token}]"
        return token

    def _render_text(self) -> str:
        return self._message if self._message is not None else ""

    def _render_raw(self) -> str:
        return str(self._message)

    def _render_properties(self) -> str:
        return format_properties(self._props)

    def _render_slf(self) -> str:
        return format_slf(str(self._message) if self._message is not None else "", self._props)

    def _render_json(self) -> str:
        return stringify_json(self._message)

    _BODY_RENDERERS: dict[Format, Callable[[LogEntry], str]] = {
        Format.TEXT: _render_text,
        Format.RAW: _render_raw,
        Format.PROPERTIES: _render_properties,
        Format.SLF: _render_slf,
        Format.JSON: _render_json,
    }

    def to_string(self) -> str:
        body = self._BODY_RENDERERS[self._format](self)
        return f"{self._render_timestamp()} {self._render_level()} {body}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"LogEntry(format={self._format.value!r}, level={self._level.value!r}, "
            f"message={self._message!r}, properties={self._props!r})"
        )
