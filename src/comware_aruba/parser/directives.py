"""Directive tables for the Comware configuration parser.

Each interface kind has an ordered table of :class:`Directive` entries.  A
line inside a block is handed to the first directive whose pattern matches
it; lines no directive matches are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from comware_aruba.model.interface import (
    VLAN_ALL,
    LagEntry,
    PhysicalInterfaceEntry,
    VlanInterfaceEntry,
)
from comware_aruba.model.vlan import VlanEntry
from comware_aruba.utils.vlans import extract_vlan_ids, format_vlan_ids, to_cidr


class _Describable(Protocol):
    admin_up: bool
    description: str


_T = TypeVar("_T")
_I = TypeVar("_I", bound=_Describable)


@dataclass(frozen=True)
class Directive(Generic[_T]):
    """A recognised configuration line and the field update it performs.

    Attributes:
        name: Short identifier used in debug logs and tests.
        pattern: Regex matched against the stripped line with ``re.match``.
        apply: Callback receiving the entry and the match object.
    """

    name: str
    pattern: re.Pattern[str]
    apply: Callable[[_T, re.Match[str]], None]


def dispatch(directives: Sequence[Directive[_T]], entry: _T, line: str) -> str | None:
    """Apply the first directive matching *line* to *entry*.

    Returns:
        The name of the directive applied, or ``None`` if none matched.
    """
    for directive in directives:
        m = directive.pattern.match(line)
        if m:
            directive.apply(entry, m)
            return directive.name
    return None


# ---------------------------------------------------------------------------
# Setters
# ---------------------------------------------------------------------------

def _shutdown(entry: _I, m: re.Match[str]) -> None:
    entry.admin_up = False


def _description(entry: _I, m: re.Match[str]) -> None:
    entry.description = re.sub(r"['\"]", "", m.group(1)).strip()


def _svi_address(entry: VlanInterfaceEntry, m: re.Match[str]) -> None:
    cidr = to_cidr(m.group(1), m.group(2))
    if "sub" in m.group(3):
        entry.secondary_address = cidr
    else:
        entry.primary_address = cidr


def _svi_dhcp_relay(entry: VlanInterfaceEntry, m: re.Match[str]) -> None:
    entry.dhcp_relay = True


def _vlan_name(entry: VlanEntry, m: re.Match[str]) -> None:
    entry.name = m.group(1).strip()


def _vlan_igmp(entry: VlanEntry, m: re.Match[str]) -> None:
    entry.igmp_snooping = True


def _lag_access(entry: LagEntry, m: re.Match[str]) -> None:
    entry.mode = "access"
    entry.vlans = m.group(1)


def _lag_link_type(entry: LagEntry, m: re.Match[str]) -> None:
    entry.mode = "trunk" if m.group(1) == "trunk" else "access"


def _lag_trunk_permit(entry: LagEntry, m: re.Match[str]) -> None:
    if m.group(0).endswith(VLAN_ALL):
        entry.vlans = VLAN_ALL
        return
    vlan_ids = extract_vlan_ids(m.group(1))
    if vlan_ids:
        entry.vlans = format_vlan_ids(vlan_ids)


def _port_link_type(entry: PhysicalInterfaceEntry, m: re.Match[str]) -> None:
    mode = m.group(1)
    if mode == "trunk":
        entry.mode = "trunk"
    elif mode == "hybrid":
        entry.mode = "hybrid"
    else:
        entry.mode = "access"


def _port_access(entry: PhysicalInterfaceEntry, m: re.Match[str]) -> None:
    entry.mode = "access"
    entry.untagged_vlans = [int(m.group(1))]


def _port_trunk_permit(entry: PhysicalInterfaceEntry, m: re.Match[str]) -> None:
    if m.group(0).endswith(VLAN_ALL):
        entry.tagged_vlans = VLAN_ALL
        return
    entry.merge_tagged(extract_vlan_ids(m.group(1)))


def _port_hybrid_untagged(entry: PhysicalInterfaceEntry, m: re.Match[str]) -> None:
    entry.merge_untagged(extract_vlan_ids(m.group(1)))


def _port_hybrid_tagged(entry: PhysicalInterfaceEntry, m: re.Match[str]) -> None:
    entry.merge_tagged(extract_vlan_ids(m.group(1)))


def _port_voice(entry: PhysicalInterfaceEntry, m: re.Match[str]) -> None:
    entry.voice_vlan = int(m.group(1))


def _port_lldp_med(entry: PhysicalInterfaceEntry, m: re.Match[str]) -> None:
    entry.lldp_med_policy = int(m.group(1))


def _port_loopback(entry: PhysicalInterfaceEntry, m: re.Match[str]) -> None:
    entry.loop_protect_vlans = m.group(1).strip()


def _port_lag(entry: PhysicalInterfaceEntry, m: re.Match[str]) -> None:
    entry.lag = m.group(1)


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

_SHUTDOWN_RE: re.Pattern[str] = re.compile(r"shutdown$")
_DESCRIPTION_RE: re.Pattern[str] = re.compile(r"description (.*)$")

SVI_DIRECTIVES: tuple[Directive[VlanInterfaceEntry], ...] = (
    Directive("shutdown", _SHUTDOWN_RE, _shutdown),
    Directive("description", _DESCRIPTION_RE, _description),
    Directive("ip-address", re.compile(r"ip address (\S+)\s+(\S+)(.*)$"), _svi_address),
    Directive("dhcp-relay", re.compile(r"dhcp select relay"), _svi_dhcp_relay),
)

VLAN_DIRECTIVES: tuple[Directive[VlanEntry], ...] = (
    Directive("name", re.compile(r"name (.+)$"), _vlan_name),
    Directive("igmp-snooping", re.compile(r".*igmp-snooping"), _vlan_igmp),
)

LAG_DIRECTIVES: tuple[Directive[LagEntry], ...] = (
    Directive("shutdown", _SHUTDOWN_RE, _shutdown),
    Directive("description", _DESCRIPTION_RE, _description),
    Directive("access-vlan", re.compile(r"port access vlan\s+(\d+)"), _lag_access),
    Directive("link-type", re.compile(r"port link-type (trunk|access)\b"), _lag_link_type),
    Directive("trunk-permit", re.compile(r"port trunk permit vlan(.*)$"), _lag_trunk_permit),
)

PHYSICAL_DIRECTIVES: tuple[Directive[PhysicalInterfaceEntry], ...] = (
    Directive("shutdown", _SHUTDOWN_RE, _shutdown),
    Directive("description", _DESCRIPTION_RE, _description),
    Directive("link-type", re.compile(r"port link-type (trunk|hybrid|access)\b"), _port_link_type),
    Directive("access-vlan", re.compile(r"port access vlan\s+(\d+)"), _port_access),
    Directive("trunk-permit", re.compile(r"port trunk permit vlan(.*)$"), _port_trunk_permit),
    Directive(
        "hybrid-untagged",
        re.compile(r"port hybrid vlan(.*?)\buntagged\b"),
        _port_hybrid_untagged,
    ),
    Directive(
        "hybrid-tagged",
        re.compile(r"port hybrid vlan(.*?)\btagged\b"),
        _port_hybrid_tagged,
    ),
    Directive("voice-vlan", re.compile(r"voice-vlan\s+(\d+)"), _port_voice),
    Directive(
        "lldp-med-policy",
        re.compile(r"lldp tlv-enable med-tlv network-policy\s+(\d+)"),
        _port_lldp_med,
    ),
    Directive(
        "loopback-detection",
        re.compile(r"loopback-detection enable vlan\s+(.+)$"),
        _port_loopback,
    ),
    Directive("lag-member", re.compile(r"port link-aggregation group\s+(\d+)"), _port_lag),
)
