#!/usr/bin/env python3
"""
Command-line entry point.

Usage:
  rsimg --source photos --options size=800x600,filter=lanczos3
  rsimg -s photos -o size=50%
"""
import argparse
import sys
from collections.abc import Callable

from . import options, resize
from .errors import ConfigError, RsimgError


def resize_task(source_dir: str, raw_options: str) -> int:
    config = options.parse(raw_options)
    return resize.run(source_dir, config)


TASKS: dict[str, Callable[[str, str], int]] = {
    "resize": resize_task,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rsimg",
        description="Resize every png/jpg/jpeg image under a directory in place.",
    )
    parser.add_argument(
        "--source", "-s", default=".", help="Root directory to scan."
    )
    parser.add_argument(
        "--task", "-t", default="resize", help="Task to run (only 'resize')."
    )
    parser.add_argument(
        "--options",
        "-o",
        default="size=128x128",
        help="Comma-separated key=value options, e.g. size=50%%,filter=nearest.",
    )
    return parser.parse_args(argv)


def run_task(task: str, source_dir: str, raw_options: str) -> int:
    """
    Validate the source directory, then run the named task on it.
    """
    resize.check_source_dir(source_dir)
    if task not in TASKS:
        raise ConfigError(f"Unknown task: {task!r} (available: {', '.join(TASKS)})")
    return TASKS[task](source_dir, raw_options)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        count = run_task(args.task, args.source, args.options)
    except RsimgError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"Resized {count} image(s) under {args.source}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
