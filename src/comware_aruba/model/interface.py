"""Typed models for the interface sections of a parsed configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from comware_aruba.utils.vlans import merge_vlan_ids

# Sentinel stored in a tagged-VLAN field when the port permits every VLAN.
VLAN_ALL: Literal["all"] = "all"

PortMode = Literal["access", "trunk", "hybrid"]
LagMode = Literal["access", "trunk"]


@dataclass
class VlanInterfaceEntry:
    """A switch virtual interface (``interface Vlan-interfaceN``).

    Attributes:
        name: Source interface name, also the map key.
        admin_up: ``False`` once a ``shutdown`` directive is seen.
        primary_address: Primary address in CIDR form, or ``None``.
        secondary_address: Secondary (``sub``) address in CIDR form, or ``None``.
        dhcp_relay: ``True`` if ``dhcp select relay`` is configured.
        description: Free-text description with quotes stripped.
    """

    name: str
    admin_up: bool = True
    primary_address: str | None = None
    secondary_address: str | None = None
    dhcp_relay: bool = False
    description: str = ""


@dataclass
class LagEntry:
    """A link aggregation group (``interface Bridge-AggregationN``).

    Attributes:
        name: Source interface name, also the map key.
        admin_up: ``False`` once a ``shutdown`` directive is seen.
        mode: ``"access"``, ``"trunk"`` or ``None`` when unset.
        vlans: ``"all"``, a sorted comma-joined VLAN list, or the single
            access VLAN; ``None`` when unset.
        description: Free-text description with quotes stripped.
    """

    name: str
    admin_up: bool = True
    mode: LagMode | None = None
    vlans: str | None = None
    description: str = ""

    @property
    def lag_id(self) -> str:
        """Numeric suffix of the LAG name (``Bridge-Aggregation13`` -> ``"13"``).

        Empty when the name carries no number.
        """
        digits = ""
        for ch in reversed(self.name):
            if not ch.isdigit():
                break
            digits = ch + digits
        return digits


@dataclass
class PhysicalInterfaceEntry:
    """An Ethernet port.

    ``name`` is the map key: the source name right after parsing, the target
    ``unit/slot/port`` address once normalized.  ``source_name`` never
    changes, so the entry can be re-mapped against a different stack.

    VLAN list fields merge across directives (union, first-seen order);
    ``untagged_vlans`` keeps source order because the native VLAN is its
    last element.  ``tagged_vlans`` may hold :data:`VLAN_ALL`, which
    absorbs every later merge.
    """

    name: str
    source_name: str = ""
    admin_up: bool = True
    lag: str | None = None
    mode: PortMode | None = None
    untagged_vlans: list[int] = field(default_factory=list)
    tagged_vlans: list[int] | Literal["all"] = field(default_factory=list)
    voice_vlan: int | None = None
    lldp_med_policy: int | None = None
    loop_protect_vlans: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.source_name:
            self.source_name = self.name

    def merge_tagged(self, vlan_ids: list[int]) -> None:
        """Union *vlan_ids* into ``tagged_vlans`` unless it already permits all."""
        if isinstance(self.tagged_vlans, str):
            return
        self.tagged_vlans = merge_vlan_ids(self.tagged_vlans, vlan_ids)

    def merge_untagged(self, vlan_ids: list[int]) -> None:
        """Union *vlan_ids* into ``untagged_vlans``, preserving first-seen order."""
        self.untagged_vlans = merge_vlan_ids(self.untagged_vlans, vlan_ids)

    @property
    def has_vlan_config(self) -> bool:
        """``True`` if any of untagged, tagged or voice VLAN is set."""
        return bool(self.untagged_vlans or self.tagged_vlans or self.voice_vlan is not None)
