#!/usr/bin/env python3

import argparse
import sys
from pathlib import Path

from . import __version__ as PLAYLOG_VERSION
from .config import Config
from .core.export import SinkError, export_events
from .core.events import RECORD_SIZE, decode_records
from .core.service import ConsistencyFault, DumpFileService, fetch_raw_events
from .core.structured_logging import setup_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONSISTENCY_FAULT = 3


def main():
    parser = argparse.ArgumentParser(
        description="Export a device play-history dump as a text log"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"playlog-export {PLAYLOG_VERSION}",
    )
    parser.add_argument(
        "--dump", "-d", type=Path, help="Play-history dump to read (overrides config)"
    )
    parser.add_argument(
        "--out", "-o", type=Path, help="Output log file (overrides config)"
    )
    parser.add_argument("--config", type=Path, help="Configuration file path")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress non-error status output",
    )
    args = parser.parse_args()

    config = Config(args.config) if args.config else Config()
    if args.dump:
        config.set("dump_path", str(args.dump))
    if args.out:
        config.set("output_path", str(args.out))

    log = None
    if config.get("enable_logging", True):
        level = "DEBUG" if args.verbose else config.get("log_level", "INFO")
        log = setup_logging(level)

    dump_path = config.get("dump_path")
    if not dump_path:
        print("Error: --dump is required (or set dump_path in config)")
        sys.exit(EXIT_FAILURE)
    output_path = config.get("output_path")
    if not output_path:
        print("Error: --out is required (or set output_path in config)")
        sys.exit(EXIT_FAILURE)
    output_path = Path(output_path)

    try:
        raw = fetch_raw_events(DumpFileService(Path(dump_path)))
    except ConsistencyFault as e:
        if log:
            log.critical("Play history is inconsistent", error=e)
        print(f"Error: {e}")
        sys.exit(EXIT_CONSISTENCY_FAULT)

    events = decode_records(raw)
    skipped = len(raw) // RECORD_SIZE - len(events)

    try:
        count = export_events(events, output_path)
    except SinkError as e:
        if log:
            log.error("Export failed", path=output_path, error=e)
        print(f"Error: {e}")
        sys.exit(EXIT_FAILURE)

    if log:
        log.info("Export complete", events=count, skipped=skipped, path=output_path)
    if not args.quiet:
        status = f"Exported {count} events to {output_path}"
        if skipped:
            status += f" ({skipped} unreadable records skipped)"
        print(status)
    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
