"""Normalization of parsed physical interfaces to target port addresses.

Normalization re-keys :attr:`SwitchConfig.ports` from Comware source names to
AOS-CX ``unit/subslot/port`` addresses.  Entries are mapped in canonical
source order so SFP cages are handed out in the order a reader of the sorted
port table would expect.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from comware_aruba.errors import UnmappablePortError
from comware_aruba.model.config import SwitchConfig, UnmappedPort
from comware_aruba.model.interface import PhysicalInterfaceEntry
from comware_aruba.model.stack import StackUnit
from comware_aruba.utils.port_map import PortMapper
from comware_aruba.utils.sorting import interface_sort_key

logger = logging.getLogger(__name__)


def normalize_switch_config(
    cfg: SwitchConfig,
    stack: Sequence[StackUnit],
    *,
    mapper: PortMapper | None = None,
) -> SwitchConfig:
    """Re-key the physical ports of *cfg* in place and return *cfg*.

    Every physical entry, including entries left unmapped by a previous
    pass, is mapped again from its ``source_name`` with a fresh SFP
    allocator, so the pass can be repeated after a topology change without
    losing manual edits.  Entries the mapper rejects are logged and moved to
    :attr:`SwitchConfig.unmapped`; SVIs, LAGs and VLANs are left untouched.

    Args:
        cfg: Parsed configuration.
        stack: Target stack topology.
        mapper: Mapper to use; a new one (with a new allocator) by default.

    Returns:
        The same *cfg* object.
    """
    mapper = mapper if mapper is not None else PortMapper(stack)

    entries: list[PhysicalInterfaceEntry] = list(cfg.ports.values())
    entries.extend(u.entry for u in cfg.unmapped)
    entries.sort(key=lambda e: interface_sort_key(e.source_name))

    ports: dict[str, PhysicalInterfaceEntry] = {}
    unmapped: list[UnmappedPort] = []

    for entry in entries:
        try:
            target = mapper.map(entry.source_name)
        except UnmappablePortError as exc:
            logger.warning("Skipping %s: %s", entry.source_name, exc.reason)
            entry.name = entry.source_name
            unmapped.append(UnmappedPort(entry=entry, reason=exc.reason))
            continue

        if target in ports:
            reason = f"target {target} already used by {ports[target].source_name}"
            logger.warning("Skipping %s: %s", entry.source_name, reason)
            entry.name = entry.source_name
            unmapped.append(UnmappedPort(entry=entry, reason=reason))
            continue

        entry.name = target
        ports[target] = entry

    cfg.ports = ports
    cfg.unmapped = unmapped
    logger.info("Normalized %d port(s), %d unmapped", len(ports), len(unmapped))
    return cfg
