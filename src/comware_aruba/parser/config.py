"""Parser for Comware running configurations (``display current-configuration``)."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from comware_aruba.model.config import SwitchConfig
from comware_aruba.model.interface import LagEntry, PhysicalInterfaceEntry, VlanInterfaceEntry
from comware_aruba.model.stack import StackUnit
from comware_aruba.model.vlan import VlanEntry
from comware_aruba.parser.directives import (
    LAG_DIRECTIVES,
    PHYSICAL_DIRECTIVES,
    SVI_DIRECTIVES,
    VLAN_DIRECTIVES,
    dispatch,
)
from comware_aruba.utils.normalize import normalize_switch_config
from comware_aruba.vendor.comware.mappings import LAG_PREFIX, PHYSICAL_MARKER, SVI_PREFIX

logger = logging.getLogger(__name__)

BlockKind = Literal["svi", "lag", "physical", "vlan"]

_VLAN_ID_RE: re.Pattern[str] = re.compile(r"^\d+$")


@dataclass
class _Block:
    """The block the scanner is currently inside."""

    key: str | None = None
    kind: BlockKind | None = None
    in_interface: bool = False

    def close(self) -> None:
        self.key = None
        self.kind = None
        self.in_interface = False


def classify_interface(name: str) -> BlockKind | None:
    """Return the block kind for an ``interface <name>`` declaration.

    Returns:
        ``"svi"``, ``"lag"``, ``"physical"``, or ``None`` for interface
        types the converter does not carry (loopbacks, NULL0, ...).
    """
    if name.startswith(SVI_PREFIX):
        return "svi"
    if name.startswith(LAG_PREFIX):
        return "lag"
    if PHYSICAL_MARKER in name:
        return "physical"
    return None


def scan_config(text: str) -> SwitchConfig:
    """Scan Comware configuration text into a :class:`SwitchConfig`.

    Lines are stripped and read in order.  ``interface <name>`` opens an SVI,
    LAG or physical block; ``vlan <id>`` opens a VLAN block.  A ``#`` line
    closes the current block, and so does a blank line, but only while no
    interface block is open.  Other lines inside a block go to the
    directive table of the block kind; anything unrecognised is dropped.

    Physical ports stay keyed by their source names; see
    :func:`parse_comware_config` for the normalized form.

    Args:
        text: Raw configuration text.

    Returns:
        The parsed model.  Malformed input yields empty maps, never an error.
    """
    cfg = SwitchConfig()
    block = _Block()

    for raw in text.splitlines():
        line = raw.strip()

        if line.startswith("#") or (not line and not block.in_interface):
            block.close()
            continue

        if line.startswith("interface "):
            name = line[len("interface "):].strip()
            block.key = name
            block.kind = classify_interface(name)
            block.in_interface = True
            _open_interface(cfg, name, block.kind)
            continue

        if line.startswith("vlan ") and "interface" not in line:
            vlan_text = line[len("vlan "):].strip()
            if _VLAN_ID_RE.match(vlan_text):
                vlan_id = int(vlan_text)
                if vlan_id not in cfg.vlans:
                    cfg.vlans[vlan_id] = VlanEntry(vlan_id=vlan_id)
                block.key = str(vlan_id)
                block.kind = "vlan"
            continue

        if block.key is not None and block.kind is not None:
            applied = _dispatch_line(cfg, block.key, block.kind, line)
            if applied:
                logger.debug("%s: %s <- %r", block.key, applied, line)

    logger.info(
        "Parsed %d SVI(s), %d LAG(s), %d port(s), %d VLAN(s)",
        len(cfg.svis),
        len(cfg.lags),
        len(cfg.ports),
        len(cfg.vlans),
    )
    return cfg


def parse_comware_config(text: str, stack: Sequence[StackUnit]) -> SwitchConfig:
    """Parse *text* and normalize its ports against *stack*.

    Every call maps with a new :class:`~comware_aruba.utils.port_map.SfpAllocator`,
    so SFP assignments never leak from a previous run.

    Returns:
        The normalized model; ports the stack cannot hold are listed in
        :attr:`SwitchConfig.unmapped`.
    """
    cfg = scan_config(text)
    hostname = extract_hostname(text)
    if hostname:
        cfg.metadata["hostname"] = hostname
    return normalize_switch_config(cfg, stack)


def extract_hostname(text: str) -> str | None:
    """Return the device name from the first line containing ``sysname``."""
    for raw in text.splitlines():
        line = raw.strip()
        if "sysname" in line:
            parts = line.split()
            if len(parts) >= 2:
                return parts[1]
    return None


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _open_interface(cfg: SwitchConfig, name: str, kind: BlockKind | None) -> None:
    """Create the entry for a declared interface unless it already exists."""
    if kind == "svi" and name not in cfg.svis:
        cfg.svis[name] = VlanInterfaceEntry(name=name)
    elif kind == "lag" and name not in cfg.lags:
        cfg.lags[name] = LagEntry(name=name)
    elif kind == "physical" and name not in cfg.ports:
        cfg.ports[name] = PhysicalInterfaceEntry(name=name)
    elif kind is None:
        logger.debug("Ignoring unsupported interface %s", name)


def _dispatch_line(cfg: SwitchConfig, key: str, kind: BlockKind, line: str) -> str | None:
    if kind == "svi":
        return dispatch(SVI_DIRECTIVES, cfg.svis[key], line)
    if kind == "lag":
        return dispatch(LAG_DIRECTIVES, cfg.lags[key], line)
    if kind == "physical":
        return dispatch(PHYSICAL_DIRECTIVES, cfg.ports[key], line)
    return dispatch(VLAN_DIRECTIVES, cfg.vlans[int(key)], line)
