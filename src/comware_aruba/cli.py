"""Command-line entry point: ``comware-aruba INPUT [-o OUTPUT]``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from comware_aruba.converter import ComwareToArubaConverter
from comware_aruba.errors import SettingsError
from comware_aruba.settings import load_settings, load_settings_from_env

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr with a timestamped format."""
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="comware-aruba",
        description="Convert a Comware running configuration to Aruba AOS-CX.",
    )
    parser.add_argument("input", type=Path, help="Comware configuration file")
    parser.add_argument(
        "-o", "--output", type=Path, help="write the configuration here instead of stdout"
    )
    parser.add_argument("--hostname", help="target hostname (default: source sysname)")
    parser.add_argument("--password", help="administrator password")
    parser.add_argument(
        "--stack",
        nargs="+",
        default=["48"],
        metavar="MODEL",
        help="hardware model per stack unit, unit 1 first (12, 24, 48 or e.g. 6100-48)",
    )
    parser.add_argument("--settings", type=Path, help="YAML file overriding site settings")
    parser.add_argument(
        "--tables",
        action="store_true",
        help="print the parsed interface tables as JSON instead of the configuration",
    )
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = load_settings(args.settings) if args.settings else load_settings_from_env()
    except SettingsError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    try:
        text = args.input.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"ERROR: cannot read {str(args.input)!r}: {exc}", file=sys.stderr)
        return 1

    converter = ComwareToArubaConverter(
        args.stack, hostname=args.hostname, password=args.password, settings=settings
    )
    converter.load(text)

    if args.tables:
        output = json.dumps(converter.tables(), indent=2) + "\n"
    else:
        output = converter.render()

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(output)

    for u in converter.unmapped:
        print(f"WARNING: {u.entry.source_name} omitted: {u.reason}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
