"""Command-line export of event rows to an .ics file.

Usage: python -m icsexport events.json [-o DIR | --stdout] [--name BASE]
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from icsexport.config.settings import ExportConfig
from icsexport.core.delivery import (
    DirectorySink,
    StreamSink,
    deliver_as_file,
    filename_for_event,
)
from icsexport.core.event_model import Event
from icsexport.core.ics_builder import build_multi_event_document, build_single_event_document
from icsexport.core.ics_reader import read_events
from icsexport.core.timezone_utils import resolve_timezone
from icsexport.exceptions.errors import ICSExportError
from icsexport.messages import get_user_friendly_error

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_EMPTY = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="icsexport",
        description="Export event rows (JSON) to an RFC 5545 .ics file.",
    )
    parser.add_argument("input", help="JSON file holding an event object or a list of events ('-' for stdin)")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("-o", "--output-dir", help="Directory to write the .ics file into")
    target.add_argument("--stdout", action="store_true", help="Write the document to standard output")
    parser.add_argument("--name", help="Base filename for multi-event exports")
    parser.add_argument("--skip-invalid", action="store_true", help="Skip malformed events instead of aborting")
    parser.add_argument("--check", action="store_true", help="Parse the generated document back before delivery")
    parser.add_argument("--env-file", help="Optional .env file with ICS_EXPORT_* settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _load_rows(source: str) -> List[dict]:
    if source == "-":
        data = json.load(sys.stdin)
    else:
        with open(source, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON object or list, got {type(data).__name__}")
    return data


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the exporter."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    config = ExportConfig.from_env(env_file=args.env_file)
    local_tz = resolve_timezone(config.local_timezone)
    skip_invalid = args.skip_invalid or config.skip_invalid

    try:
        rows = _load_rows(args.input)
    except (OSError, ValueError) as exc:
        logger.error("Could not read %s: %s", args.input, exc)
        return EXIT_ERROR

    if not rows:
        logger.warning("No events in %s; nothing to export", args.input)
        return EXIT_EMPTY

    try:
        events = []
        for index, row in enumerate(rows):
            try:
                events.append(Event.from_dict(row))
            except ICSExportError as exc:
                if not skip_invalid:
                    raise
                logger.warning("Skipping event %d: %s", index + 1, exc)

        if not events:
            logger.warning("No exportable events in %s", args.input)
            return EXIT_EMPTY

        if len(rows) == 1:
            document = build_single_event_document(events[0], local_tz=local_tz)
            filename = filename_for_event(events[0])
        else:
            document = build_multi_event_document(
                events, local_tz=local_tz, skip_invalid=skip_invalid
            )
            filename = args.name or config.default_filename

        if not document:
            logger.warning("No exportable events in %s", args.input)
            return EXIT_EMPTY

        if args.check:
            logger.info("Document parses back to %d events", len(read_events(document)))

        if args.stdout:
            sink = StreamSink(sys.stdout.buffer)
        else:
            sink = DirectorySink(args.output_dir or config.output_dir)
        deliver_as_file(document, filename, sink)
    except ICSExportError as exc:
        logger.error("Export failed: %s", exc)
        print(get_user_friendly_error(exc), file=sys.stderr)
        return EXIT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
