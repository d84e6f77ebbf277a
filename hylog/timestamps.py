"""Timestamp grammar: ISO 8601, RFC 1123 (UTC string) and numeric epoch.

The three alternatives are tried left to right as one pattern, so an ISO
stamp wins over a digit run appearing inside it.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import TYPE_CHECKING

from hylog.errors import InvalidArgumentError

if TYPE_CHECKING:
    from hylog.entry import LogEntry

# ---------------------------------------------------------------------------
# Compiled regex patterns
# ---------------------------------------------------------------------------

TIMESTAMP_PATTERN = (
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?Z"  # ISO 8601
    r"|\w{3}, \d{2} \w{3} \d{4} \d{2}:\d{2}:\d{2} GMT"  # UTC string
    r"|\d{10,})"  # numeric
)

_TIMESTAMP_RE = re.compile(TIMESTAMP_PATTERN, re.IGNORECASE)

_ISO_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(?P<fraction>\d+))?Z$",
    re.IGNORECASE,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def to_epoch_millis(dt: datetime) -> int:
    return (dt - EPOCH) // timedelta(milliseconds=1)


def from_epoch_millis(millis: int) -> datetime:
    return EPOCH + timedelta(milliseconds=millis)


def format_iso(dt: datetime) -> str:
    """'2024-01-01T00:00:00.000Z', always UTC with millisecond precision."""
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def format_utc(dt: datetime) -> str:
    """'Mon, 01 Jan 2024 00:00:00 GMT' (locale independent)."""
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _parse_iso(token: str) -> datetime:
    m = _ISO_RE.match(token)
    base = datetime.strptime(m.group("base").upper(), "%Y-%m-%dT%H:%M:%S")
    fraction = m.group("fraction") or ""
    micro = int(fraction[:6].ljust(6, "0")) if fraction else 0
    return base.replace(microsecond=micro, tzinfo=timezone.utc)


def _parse_token(token: str) -> datetime:
    if token.isdigit():
        return from_epoch_millis(int(token))
    if _ISO_RE.match(token):
        return _parse_iso(token)
    dt = parsedate_to_datetime(token)
    return dt.astimezone(timezone.utc)


def extract_timestamp(entry: LogEntry | str) -> datetime:
    """Return the timestamp of a LogEntry, or the first timestamp found in text.

    Numeric stamps are read as epoch milliseconds. Raises
    InvalidArgumentError when no alternative matches or the match is not a
    real instant.
    """
    if not isinstance(entry, str):
        return entry.timestamp

    match = _TIMESTAMP_RE.search(entry)
    if not match:
        raise InvalidArgumentError(
            "This entry does not appear to have a timestamp", context={"text": entry}
        )

    token = match.group(1)
    try:
        return _parse_token(token)
    except (ValueError, TypeError, OverflowError) as exc:
        raise InvalidArgumentError(
            f"Invalid timestamp '{token}'", context={"text": entry}
        ) from exc
