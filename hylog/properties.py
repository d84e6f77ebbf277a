"""Bracketed key=value properties micro-format: [k1=v1 k2="v2" ...]."""

import math
import re
from typing import Any

from hylog.text import normalize_text_entry

JsonScalar = str | int | float | bool | None
Properties = dict[str, JsonScalar]

# ---------------------------------------------------------------------------
# Compiled regex patterns
# ---------------------------------------------------------------------------

_PAIR_RE = re.compile(r"""(\w+)=(".*?"|'.*?'|\S+)""", re.ASCII)

_HEX_RE = re.compile(r"^0x[0-9a-f]+$", re.IGNORECASE)

_DECIMAL_RE = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)(e[-+]?\d+)?$", re.ASCII)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_number(value: Any) -> bool:
    """True for int/float values and for numeric-literal strings (incl. 0x hex)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if not isinstance(value, str):
        return False
    return bool(_HEX_RE.match(value) or _DECIMAL_RE.match(value))


def _to_number(value: str) -> int | float:
    if _HEX_RE.match(value):
        return int(value, 16)
    if any(ch in value for ch in ".e"):
        return float(value)
    return int(value)


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return _format_number(value)
    return str(value)


def _coerce_value(value: str) -> JsonScalar:
    if is_number(value):
        return _to_number(value)
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered == "null":
        return None
    return value


# ---------------------------------------------------------------------------
# Public codec
# ---------------------------------------------------------------------------


def format_properties(props: Properties) -> str:
    """Render '[k=v ...]' in mapping order.

    String values are double-quoted as-is; embedded quotes are not escaped.
    """
    chunks = [f"{key}={_format_value(value)}" for key, value in props.items()]
    return f"[{' '.join(chunks)}]"


def parse_properties(message: str) -> Properties:
    """Parse a '[k=v ...]' block. Returns {} when the text is not bracketed."""
    text = normalize_text_entry(message)
    if not text.startswith("[") or not text.endswith("]"):
        return {}

    props: Properties = {}
    inner = text[1:-1].strip()

    for match in _PAIR_RE.finditer(inner):
        key, val = match.group(1), match.group(2)
        if val[0] == val[-1] and val[0] in ("'", '"'):
            val = val[1:-1]
        props[key] = _coerce_value(val)

    return props
