#!/usr/bin/env python3
"""Post-build housekeeping: drop test artifacts and sync the dependency list.

Runs outside the codec; the build pipeline calls it once per build.
"""

import argparse
import json
import logging
import os
import sys
import time

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES = (".spec.js", ".spec.d.ts", "test.js", "test.d.ts")


class HousekeepingError(Exception):
    """Raised when the output directory cannot be processed."""


def remove_matching(base_dir: str, suffixes) -> list[str]:
    """Delete, recursively, every file under *base_dir* ending with a suffix.

    Directories are kept, including *base_dir*. Returns the removed paths.
    """
    suffixes = tuple(suffixes)
    removed = []
    for root, _dirs, files in os.walk(base_dir):
        for name in files:
            if name.endswith(suffixes):
                path = os.path.join(root, name)
                os.unlink(path)
                removed.append(path)
    return removed


def merge_dependencies(source_manifest: str, build_manifest: str):
    """Copy the ``dependencies`` key of *source_manifest* into *build_manifest*."""
    with open(source_manifest, "r", encoding="utf-8") as f:
        source = json.load(f)
    with open(build_manifest, "r", encoding="utf-8") as f:
        build = json.load(f)

    build["dependencies"] = source.get("dependencies")

    with open(build_manifest, "w", encoding="utf-8") as f:
        f.write(json.dumps(build, indent=2).strip())


def run(
    output_dir: str,
    production: bool,
    suffixes=DEFAULT_SUFFIXES,
    source_manifest: str | None = None,
    build_manifest: str | None = None,
) -> list[str]:
    """Filter *output_dir* (production only) and merge the manifests if given."""
    logger.info("Post build started at %d", int(time.time() * 1000))
    logger.info("Build dir: %s", output_dir)

    if not os.path.exists(output_dir):
        raise HousekeepingError("Output path does not exist")
    if not os.path.isdir(output_dir):
        raise HousekeepingError("Output path is not a directory")

    removed: list[str] = []
    if production:
        logger.info("Deleting test artifacts...")
        removed = remove_matching(output_dir, suffixes)
        logger.info("Removed %d file(s)", len(removed))

    if source_manifest and build_manifest:
        logger.info("Updating dependencies list...")
        merge_dependencies(source_manifest, build_manifest)

    logger.info("Done.")
    return removed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Post-build housekeeping")
    parser.add_argument(
        "--output-dir",
        default=os.path.join(os.getcwd(), os.environ.get("OUTPUT_DIR", "dist")),
        help="Build output directory (default: $OUTPUT_DIR or ./dist)",
    )
    parser.add_argument(
        "--production",
        action="store_true",
        default=os.environ.get("HYLOG_ENV") == "production",
        help="Delete test artifacts (default: on when HYLOG_ENV=production)",
    )
    parser.add_argument(
        "--suffix",
        action="append",
        dest="suffixes",
        help="File suffix to delete (repeatable, replaces the defaults)",
    )
    parser.add_argument("--source-manifest", help="JSON manifest holding the dependencies")
    parser.add_argument("--build-manifest", help="JSON manifest to update")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [HYLOG] %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    args = build_parser().parse_args(argv)
    try:
        run(
            args.output_dir,
            args.production,
            suffixes=args.suffixes or DEFAULT_SUFFIXES,
            source_manifest=args.source_manifest,
            build_manifest=args.build_manifest,
        )
    except HousekeepingError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
