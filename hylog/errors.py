"""Error types shared by every hylog module.

Codes are stored negative; the magnitude identifies the kind and
``code_string()`` maps it back to its name.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    ERR_UNKNOWN_ERROR = 101
    ERR_INVALID_ARGUMENT = 102


def _resolve_code(code: int | str | None) -> int:
    """Turn an int, an ErrorCode or a code name into a negative code."""
    if code is None:
        return -ErrorCode.ERR_UNKNOWN_ERROR
    if isinstance(code, str):
        member = ErrorCode.__members__.get(code, ErrorCode.ERR_UNKNOWN_ERROR)
        return -int(member)
    if not code:
        return -ErrorCode.ERR_UNKNOWN_ERROR
    return -abs(int(code))


class HyLogError(Exception):
    """Base error raised by the codec, carrying a code and optional context."""

    def __init__(
        self,
        message: str | None = None,
        code: int | str | None = None,
        context: Any = None,
    ):
        super().__init__(message or "")
        self.message = message or ""
        self.code = _resolve_code(code)
        self.context = context

    def code_string(self) -> str:
        try:
            return ErrorCode(-self.code).name
        except ValueError:
            return ErrorCode.ERR_UNKNOWN_ERROR.name

    def describe(self) -> str:
        return f"[{self.code_string()}] {self.message}"


class InvalidArgumentError(HyLogError, ValueError):
    """Raised when input cannot be interpreted (bad level, no timestamp, ...)."""

    def __init__(self, message: str | None = None, context: Any = None):
        super().__init__(message, ErrorCode.ERR_INVALID_ARGUMENT, context)
