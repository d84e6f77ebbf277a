"""Explicit channel for unexpected errors, owned and observed by the host."""

import logging
import threading
from typing import Callable

from hylog.errors import HyLogError

logger = logging.getLogger(__name__)

Handler = Callable[[BaseException], None]


def describe_error(err: BaseException) -> str:
    """'[ERR_INVALID_ARGUMENT] message' for HyLogError, 'Type: message' otherwise."""
    if isinstance(err, HyLogError):
        return err.describe()
    return f"{type(err).__name__}: {err}"


class ErrorChannel:
    def __init__(self, max_size: int = 100):
        self._max_size = max_size
        self._errors: list[BaseException] = []
        self._handlers: list[Handler] = []
        self._lock = threading.Lock()

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        """Register *handler*; returns a callable that removes it again."""
        with self._lock:
            self._handlers.append(handler)

        def unsubscribe():
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)

        return unsubscribe

    def report(self, err: BaseException):
        """Record an error, evicting the oldest if at capacity, and notify handlers."""
        logger.error("Unexpected error: %s", describe_error(err))
        with self._lock:
            self._errors.append(err)
            if len(self._errors) > self._max_size:
                self._errors.pop(0)
            handlers = list(self._handlers)

        for handler in handlers:
            try:
                handler(err)
            except Exception:
                logger.exception("Error handler %r failed", handler)

    def recent(self, n: int = 10) -> list[BaseException]:
        """Return the N most recent errors."""
        with self._lock:
            if n <= 0:
                return []
            return list(self._errors[-n:])

    def drain(self) -> list[BaseException]:
        """Return every buffered error and clear the buffer."""
        with self._lock:
            errors, self._errors = self._errors, []
        return errors

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._errors)
