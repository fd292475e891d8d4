"""Command-line entry point: render or normalise stored event documents.

Usage:
    deploylog history.json
    deploylog --json < events.jsonl
"""

import argparse
import json
import logging
import sys
from typing import Any, Iterator, Optional, TextIO

from deploylog.codec import DeployLogError, decode_event, dumps_event
from deploylog.config import settings
from deploylog.models.event import Event
from deploylog.rendering import render_event

logger = logging.getLogger(__name__)


def iter_documents(stream: TextIO) -> Iterator[Any]:
    """
    Yield raw event documents from a stream.

    Accepts a JSON array of events, a single (possibly indented) event, or
    one JSON event per line. JSON lines are yielded undecoded so a bad line
    is reported by the decoder.
    """
    text = stream.read()
    stripped = text.lstrip()
    if stripped.startswith("["):
        yield from json.loads(text)
        return
    if stripped.startswith("{"):
        try:
            document = json.loads(text)
        except json.JSONDecodeError:
            pass
        else:
            yield document
            return
    for line in text.splitlines():
        if line.strip():
            yield line


def format_event(event: Event, as_json: bool, show_timestamps: bool) -> str:
    """Format a decoded event as one line of output."""
    if as_json:
        return dumps_event(event, sort_keys=True)
    line = render_event(event)
    if show_timestamps:
        line = f"{event.started_at.strftime(settings.timestamp_format)}  {line}"
    return line


def process_stream(
    stream: TextIO,
    source: str,
    out: TextIO,
    as_json: bool = False,
    show_timestamps: bool = True,
) -> int:
    """
    Decode and print every event in a stream.

    Returns:
        Number of events that could not be decoded or rendered
    """
    failures = 0
    try:
        documents = list(iter_documents(stream))
    except json.JSONDecodeError as e:
        logger.error(f"{source}: not a valid JSON array of events: {e}")
        return 1
    except UnicodeDecodeError as e:
        logger.error(f"{source}: not valid UTF-8: {e}")
        return 1

    for index, document in enumerate(documents, start=1):
        try:
            event = decode_event(document)
            print(format_event(event, as_json, show_timestamps), file=out)
        except DeployLogError as e:
            failures += 1
            logger.error(f"{source}:{index}: {e.code}: {e.message}")
    return failures


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deploylog",
        description="Render deployment history events as one-line summaries",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Files holding a JSON array, one JSON object or JSON lines of events (default: stdin)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print normalised event documents instead of summaries",
    )
    parser.add_argument(
        "--no-timestamps",
        action="store_true",
        help="Do not prefix summaries with the event start time",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the deploylog command."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format=settings.log_format,
    )

    show_timestamps = settings.show_timestamps and not args.no_timestamps
    failures = 0
    for path in args.files or ["-"]:
        if path == "-":
            failures += process_stream(sys.stdin, "<stdin>", sys.stdout, args.json, show_timestamps)
            continue
        try:
            with open(path, encoding="utf-8") as stream:
                failures += process_stream(stream, path, sys.stdout, args.json, show_timestamps)
        except OSError as e:
            failures += 1
            logger.error(f"Cannot read {path}: {e}")

    if failures:
        logger.warning(f"{failures} event(s) could not be processed")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
