"""Port identity mapping from Comware addressing to AOS-CX addressing.

Comware addresses a port as ``<prefix><unit>/<subslot>/<port>`` with a
zero-based subslot; AOS-CX uses ``<unit>/<subslot>/<port>`` with a one-based
subslot.  Standard ports keep their number.  Uplink-class ports are handed
the next free SFP cage of their unit by :class:`SfpAllocator`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from comware_aruba.errors import SfpExhaustedError, UnmappablePortError
from comware_aruba.model.stack import StackUnit
from comware_aruba.vendor.comware.mappings import STANDARD_PREFIXES, UPLINK_PREFIXES

logger = logging.getLogger(__name__)

_ADDRESS_RE: re.Pattern[str] = re.compile(r"^(\d+)/(\d+)/(\d+)$")


class SfpAllocator:
    """First-come SFP cage assignment for one conversion run.

    The first request for a source port gets its unit's next free cage;
    repeated requests for the same source port return the same cage.  A
    fresh allocator must be used for every run.
    """

    def __init__(self) -> None:
        self._assigned: dict[str, int] = {}
        self._next_free: dict[int, int] = {}

    def allocate(self, source_name: str, unit: StackUnit) -> int:
        """Return the SFP port number for *source_name* on *unit*.

        Raises:
            SfpExhaustedError: If every SFP cage of *unit* is already taken.
        """
        if source_name in self._assigned:
            return self._assigned[source_name]

        port = self._next_free.get(unit.unit_number, unit.sfp_start)
        if port > unit.sfp_end:
            raise SfpExhaustedError(
                source_name=source_name,
                reason=(
                    f"no SFP port left on unit {unit.unit_number} "
                    f"({unit.sfp_count} already assigned)"
                ),
                unit=unit.unit_number,
            )
        self._assigned[source_name] = port
        self._next_free[unit.unit_number] = port + 1
        logger.debug("SFP %s -> unit %d port %d", source_name, unit.unit_number, port)
        return port

    @property
    def assignments(self) -> dict[str, int]:
        """Copy of the source-port to SFP-port assignments made so far."""
        return dict(self._assigned)


class PortMapper:
    """Translate source physical-interface names into target port addresses.

    Args:
        stack: Resolved target stack.
        allocator: SFP allocator for this run; a fresh one is created when
            omitted.
    """

    def __init__(self, stack: Sequence[StackUnit], allocator: SfpAllocator | None = None) -> None:
        self._units: dict[int, StackUnit] = {u.unit_number: u for u in stack}
        self.allocator = allocator if allocator is not None else SfpAllocator()

    def map(self, source_name: str) -> str:
        """Return the target ``unit/subslot/port`` address for *source_name*.

        Raises:
            UnmappablePortError: If the name is not a known port type, its
                unit is not part of the stack, or its port number is out of
                range for the unit.
            SfpExhaustedError: If an uplink-class port finds no free SFP cage.
        """
        address, uplink = _split_prefix(source_name)
        if address is None:
            raise UnmappablePortError(source_name, "unrecognised interface type")

        m = _ADDRESS_RE.match(address)
        if not m:
            raise UnmappablePortError(source_name, f"malformed port address {address!r}")
        unit_number, subslot, port = (int(g) for g in m.groups())

        unit = self._units.get(unit_number)
        if unit is None:
            raise UnmappablePortError(source_name, f"unit {unit_number} is not in the stack")

        if uplink:
            target_port = self.allocator.allocate(source_name, unit)
        else:
            if port > unit.total_ports:
                raise UnmappablePortError(
                    source_name,
                    f"port {port} out of range for unit {unit_number} "
                    f"({unit.model}, max {unit.total_ports})",
                )
            target_port = port

        return f"{unit_number}/{subslot + 1}/{target_port}"


def _split_prefix(name: str) -> tuple[str | None, bool]:
    """Strip the interface-class prefix.

    Returns:
        ``(address, is_uplink)``; ``address`` is ``None`` if no known
        prefix matches.
    """
    for prefix in UPLINK_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix):], True
    for prefix in STANDARD_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix):], False
    return None, False
