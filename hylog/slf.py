"""Structured Line Format: '<message> [k=v ...]'."""

from typing import Any

from hylog.properties import Properties, format_properties, parse_properties
from hylog.text import normalize_text_entry


def format_slf(message: str, props: Properties | None = None) -> str:
    """Join the trimmed message and its properties block.

    ``props=None`` renders no block at all (the separating space stays),
    while an empty mapping renders ``[]``.
    """
    properties = format_properties(props) if props is not None else ""
    return f"{message.strip()} {properties}"


def parse_slf(line: str) -> dict[str, Any]:
    """Split a line into its message and properties.

    The block starts at the first '[' whenever the line ends with ']'.
    Brackets are not balanced, so a message such as 'see [docs] [a=1]'
    is cut at '[docs]'.
    """
    text = normalize_text_entry(line)
    last = text[-1:]

    cut = len(text)
    for i, ch in enumerate(text):
        if ch == "[" and last == "]":
            cut = i
            break

    message, rest = text[:cut], text[cut:]
    props: Properties = {}
    if rest.startswith("[") and rest.endswith("]"):
        props = parse_properties(rest)

    return {**props, "message": message.strip()}
