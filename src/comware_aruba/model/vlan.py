"""Typed models for VLAN data."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class VlanEntry:
    """A VLAN declared in the source configuration (``vlan N`` block).

    Source VLANs are kept for display only; the generator emits the static
    catalog instead.

    Attributes:
        vlan_id: 802.1Q VLAN identifier.
        name: VLAN name, or ``None`` if the block had no ``name`` directive.
        port_count: Display-only counter; never computed from port data.
        igmp_snooping: ``True`` if any ``igmp-snooping`` directive was seen.
    """

    vlan_id: int
    name: str | None = None
    port_count: int = 0
    igmp_snooping: bool = False


@dataclass
class CatalogVlan:
    """One VLAN of the fixed catalog written to every generated configuration.

    Attributes:
        vlan_id: 802.1Q VLAN identifier.
        name: VLAN name; empty string omits the ``name`` line.
        description: Optional description, rendered double-quoted.
        voice: Emit the ``voice`` marker.
        igmp_snooping: Emit ``ip igmp snooping enable``.
    """

    vlan_id: int
    name: str = ""
    description: str | None = None
    voice: bool = False
    igmp_snooping: bool = True
