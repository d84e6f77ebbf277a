"""logging.Formatter that renders stdlib records as hylog lines."""

import logging

from hylog.entry import LogEntry
from hylog.levels import Level
from hylog.models import Format, RenderOptions


def level_for_record(levelno: int) -> Level:
    """Map a stdlib level number onto the closest hylog Level."""
    if levelno >= logging.CRITICAL:
        return Level.FATAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARNING
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno >= logging.DEBUG:
        return Level.DEBUG
    return Level.TRACE


class EntryFormatter(logging.Formatter):
    """Formats records through LogEntry.

    Properties come from the ``props`` extra::

        logger.info("user login", extra={"props": {"user": "alice"}})
    """

    def __init__(self, format: Format | str = Format.SLF, options: RenderOptions | None = None):
        super().__init__()
        self._format = format
        self._options = options

    def format(self, record: logging.LogRecord) -> str:
        props = getattr(record, "props", None)
        if not isinstance(props, dict):
            props = None

        entry = LogEntry(
            format=self._format,
            level=level_for_record(record.levelno),
            message=record.getMessage(),
            properties=props,
            options=self._options,
        )
        line = entry.to_string()

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line = f"{line}\n{record.exc_text}"
        return line
