"""JSON bridge: total safe parse/stringify plus the strict/lenient adapters."""

import json
import logging
from typing import Any

from hylog.errors import ErrorCode, HyLogError, InvalidArgumentError

logger = logging.getLogger(__name__)


def safe_parse(text: str) -> tuple[Any, Exception | None]:
    """Parse *text*; returns (value, None) or (None, error). Never raises."""
    try:
        return json.loads(text), None
    except (json.JSONDecodeError, TypeError) as exc:
        return None, exc


def safe_stringify(value: Any) -> tuple[str | None, Exception | None]:
    """Serialize *value*; returns (text, None) or (None, error). Never raises."""
    try:
        return json.dumps(value, allow_nan=False, ensure_ascii=False, separators=(",", ":")), None
    except (TypeError, ValueError, RecursionError) as exc:
        return None, exc


def parse_json(message: str, strict: bool = False) -> Any:
    """Parse a JSON body.

    Lenient mode wraps unparseable text as ``{"$message": text}``; strict
    mode raises InvalidArgumentError.
    """
    value, error = safe_parse(message)
    if error is None:
        return value

    if not strict:
        logger.debug("Falling back to $message wrapper: %s", error)
        return {"$message": message}

    raise InvalidArgumentError(
        f"Invalid JSON: {error}", context={"text": message}
    ) from error


def stringify_json(value: Any) -> str:
    """Serialize *value* or raise HyLogError; there is no fallback."""
    text, error = safe_stringify(value)
    if error is not None:
        raise HyLogError(
            f"JSON serialization failed: {error}",
            ErrorCode.ERR_UNKNOWN_ERROR,
            context={"type": type(value).__name__},
        ) from error
    return text
