"""Tabular rendering of a parsed configuration and port-grid queries.

The table rows are JSON-serializable and mirror what an operator reviews
before generating: one table per model section, sorted in canonical
interface order, with ``"-"`` standing for an unset value.
"""

from __future__ import annotations

import re
from typing import Any, Literal

from comware_aruba.model.config import SwitchConfig
from comware_aruba.model.interface import PhysicalInterfaceEntry
from comware_aruba.utils.sorting import sorted_items
from comware_aruba.utils.vlans import format_vlan_ids

PortClass = Literal[
    "down", "lag", "trunk", "access", "hybrid-voice", "hybrid", "empty", "unused"
]

_UNSET: str = "-"

_TARGET_RE: re.Pattern[str] = re.compile(r"^(\d+)/(\d+)/(\d+)$")


def render_tables(cfg: SwitchConfig) -> dict[str, list[dict[str, Any]]]:
    """Serialize *cfg* into display tables.

    Returns:
        A dict with keys:

        - ``"int_vlan"`` — one row per SVI.
        - ``"lag"`` — one row per LAG.
        - ``"int"`` — one row per mapped physical port, keyed by target address.
        - ``"vlan"`` — one row per source VLAN.
        - ``"unmapped"`` — source name and reason for each omitted port.
    """
    return {
        "int_vlan": [
            {
                "interface": name,
                "admin_status": _admin(svi.admin_up),
                "ip": svi.primary_address or _UNSET,
                "ip_sub": svi.secondary_address or _UNSET,
                "dhcp_relay": "DHCP Relay" if svi.dhcp_relay else _UNSET,
                "description": svi.description,
            }
            for name, svi in sorted_items(cfg.svis)
        ],
        "lag": [
            {
                "interface": name,
                "admin_status": _admin(lag.admin_up),
                "type": lag.mode.upper() if lag.mode else _UNSET,
                "vlan": lag.vlans or _UNSET,
                "description": lag.description,
            }
            for name, lag in sorted_items(cfg.lags)
        ],
        "int": [port_row(entry) for _, entry in sorted_items(cfg.ports)],
        "vlan": [
            {
                "id": vid,
                "name": vlan.name or _UNSET,
                "ports": vlan.port_count,
                "snooping": vlan.igmp_snooping,
            }
            for vid, vlan in sorted_items(cfg.vlans)
        ],
        "unmapped": [
            {"interface": u.entry.source_name, "reason": u.reason} for u in cfg.unmapped
        ],
    }


def port_row(entry: PhysicalInterfaceEntry) -> dict[str, Any]:
    """Return the display row of a physical port."""
    tagged = entry.tagged_vlans
    return {
        "interface": entry.name,
        "source": entry.source_name,
        "admin_status": _admin(entry.admin_up),
        "agg": entry.lag or _UNSET,
        "type": entry.mode.upper() if entry.mode else _UNSET,
        "untag_vlan": ",".join(str(v) for v in entry.untagged_vlans) or _UNSET,
        "tag_vlan": tagged if isinstance(tagged, str) else (format_vlan_ids(tagged) or _UNSET),
        "voice_vlan": _opt(entry.voice_vlan),
        "lldp_med_np": _opt(entry.lldp_med_policy),
        "loopback_vlans": entry.loop_protect_vlans or _UNSET,
        "description": entry.description,
        "class": classify_port(entry),
    }


def classify_port(entry: PhysicalInterfaceEntry) -> PortClass:
    """Return the port-grid category of *entry*.

    Categories are checked in order: administratively down, LAG member,
    trunk, access, hybrid carrying a voice VLAN, plain hybrid, and finally
    ``"empty"`` for an enabled port with no mode.
    """
    if not entry.admin_up:
        return "down"
    if entry.lag is not None:
        return "lag"
    if entry.mode == "trunk":
        return "trunk"
    if entry.mode == "access":
        return "access"
    if entry.mode == "hybrid":
        return "hybrid-voice" if entry.voice_vlan is not None else "hybrid"
    return "empty"


def find_port(cfg: SwitchConfig, unit: int, port: int) -> PhysicalInterfaceEntry | None:
    """Return the mapped port rendered at target *unit*/x/*port*, if any."""
    for key, entry in cfg.ports.items():
        m = _TARGET_RE.match(key)
        if m and int(m.group(1)) == unit and int(m.group(3)) == port:
            return entry
    return None


def port_grid_class(cfg: SwitchConfig, unit: int, port: int) -> PortClass:
    """Category of the grid cell *unit*/*port*; ``"unused"`` when nothing maps there."""
    entry = find_port(cfg, unit, port)
    return classify_port(entry) if entry is not None else "unused"


def _admin(up: bool) -> str:
    return "UP" if up else "Down"


def _opt(value: int | None) -> str:
    return _UNSET if value is None else str(value)
