#!/usr/bin/env python3
"""Example: convert a Comware configuration for a two-unit stack and edit it.

Usage::

    export COMWARE_CONFIG=tests/fixtures/comware_sample.cfg
    export STACK_MODELS="6100-48 6100-24"
    python examples/convert_stack.py

Environment variables:
    COMWARE_CONFIG   Path to the Comware running configuration (required).
    STACK_MODELS     Space-separated model per stack unit (default: "48").
    TARGET_HOSTNAME  Hostname to write (default: the source sysname).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from comware_aruba import ComwareToArubaConverter
from comware_aruba.utils.sorting import sorted_names


def main() -> None:
    source = os.environ.get("COMWARE_CONFIG", "")
    if not source:
        print("ERROR: COMWARE_CONFIG is not set", file=sys.stderr)
        sys.exit(1)
    models = os.environ.get("STACK_MODELS", "48").split()

    converter = ComwareToArubaConverter(models, hostname=os.environ.get("TARGET_HOSTNAME"))
    cfg = converter.load(Path(source).read_text(encoding="utf-8"))

    for unit in converter.stack:
        print(f"# unit {unit.unit_number}: {unit.describe()}", file=sys.stderr)
    for u in converter.unmapped:
        print(f"# omitted {u.entry.source_name}: {u.reason}", file=sys.stderr)

    # Put the first mapped port into the first LAG, if there is one.
    lags = cfg.available_lags()
    if lags and cfg.ports:
        first = sorted_names(list(cfg.ports))[0]
        converter.set_lag_membership(first, lags[0])
        print(f"# {first} moved to lag {lags[0]}", file=sys.stderr)

    sys.stdout.write(converter.render())


if __name__ == "__main__":
    main()
