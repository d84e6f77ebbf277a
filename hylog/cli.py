"""hylog command line: render log lines and parse them back into their parts."""

import json
import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError

from hylog.config import load_config
from hylog.entry import LogEntry
from hylog.errors import HyLogError
from hylog.levels import extract_level
from hylog.models import Format, TimestampFormat
from hylog.properties import parse_properties
from hylog.slf import parse_slf
from hylog.timestamps import extract_timestamp, format_iso

logger = logging.getLogger(__name__)


def _prop_pair(text: str) -> str:
    """argparse type for --prop: KEY=VALUE, VALUE without double quotes."""
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise ArgumentTypeError(f"expected KEY=VALUE, got '{text}'")
    if '"' in value:
        raise ArgumentTypeError(f"property value may not contain '\"': '{text}'")
    return text


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="hylog",
        description="Render structured log lines and parse them back.",
    )
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render one log line")
    render.add_argument("message", help="Message body (JSON text for --format json)")
    render.add_argument("--format", choices=[f.value for f in Format], help="Output layout")
    render.add_argument("--level", help="Level name (e.g. INFO, ERROR)")
    render.add_argument(
        "--prop",
        action="append",
        default=[],
        type=_prop_pair,
        metavar="KEY=VALUE",
        help="Property to attach (repeatable)",
    )
    render.add_argument(
        "--timestamp-format",
        choices=[t.value for t in TimestampFormat],
        help="Timestamp rendering",
    )
    render.add_argument("--short-level", action="store_true", help="Use 3-letter level tokens")
    render.add_argument("--no-brackets", action="store_true", help="Do not wrap the level in []")

    parse = sub.add_parser("parse", help="Parse rendered lines into JSON objects")
    parse.add_argument("files", nargs="*", help="Files to read (stdin when omitted)")
    return parser


def _props_from_args(pairs: list[str]) -> dict:
    """Coerce repeated KEY=VALUE flags through the properties grammar."""
    if not pairs:
        return {}
    quoted = " ".join(
        f'{key}="{value}"' for key, _, value in (pair.partition("=") for pair in pairs)
    )
    return parse_properties(f"[{quoted}]")


def run_render(args, config) -> str:
    message = args.message
    if args.format == Format.JSON.value:
        message = json.loads(args.message)

    entry = LogEntry.from_config(
        config,
        message=message,
        properties=_props_from_args(args.prop),
        level=args.level,
        format=args.format,
    )
    patch = {}
    if args.timestamp_format:
        patch["timestamp_format"] = args.timestamp_format
    if args.short_level:
        patch["shorter_level"] = True
    if args.no_brackets:
        patch["level_under_brackets"] = False
    return entry.options(patch).to_string()


def parse_record(line: str) -> dict:
    """Recover timestamp, level, message and properties from one line."""
    try:
        timestamp = format_iso(extract_timestamp(line))
    except HyLogError:
        timestamp = None
    try:
        level = extract_level(line).value
    except HyLogError:
        level = None

    parsed = parse_slf(line)
    message = parsed.pop("message")
    return {"timestamp": timestamp, "level": level, "message": message, "properties": parsed}


def _read_lines(files: list[str]):
    if not files:
        yield from sys.stdin
        return
    for path in files:
        with open(path, "r", encoding="utf-8") as f:
            yield from f


def run_parse(args) -> int:
    count = 0
    for line in _read_lines(args.files):
        if not line.strip():
            continue
        print(json.dumps(parse_record(line)))
        count += 1
    logger.debug("Parsed %d line(s)", count)
    return count


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [HYLOG] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "render":
            print(run_render(args, load_config(args.config)))
        else:
            run_parse(args)
    except HyLogError as exc:
        print(f"Error: {exc.describe()}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"Error: invalid JSON message: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
