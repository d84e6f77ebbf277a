"""Recover a message body from a line rendered with a timestamp + level prefix."""

import re

from hylog.levels import ALIAS_PATTERN
from hylog.timestamps import TIMESTAMP_PATTERN

_PREFIX_RE = re.compile(
    rf"^{TIMESTAMP_PATTERN}(\s*\[?(?:{ALIAS_PATTERN})\]?)(\s*)",
    re.IGNORECASE,
)


def normalize_text_entry(message: str) -> str:
    """Strip one leading '<timestamp> [LEVEL]' prefix and surrounding whitespace.

    Only the very start of the text is considered; timestamps or levels
    later in the message are kept.
    """
    return _PREFIX_RE.sub("", message.strip(), count=1).strip()


def parse_text(message: str) -> str:
    return normalize_text_entry(message)
