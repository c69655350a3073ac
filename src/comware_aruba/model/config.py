"""Canonical switch configuration model for comware-aruba."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from comware_aruba.model.interface import LagEntry, PhysicalInterfaceEntry, VlanInterfaceEntry
from comware_aruba.model.vlan import VlanEntry

logger = logging.getLogger(__name__)


@dataclass
class UnmappedPort:
    """A physical interface left out of the target configuration.

    Attributes:
        entry: The entry as parsed, still keyed by its source name.
        reason: Why the mapper rejected it.
    """

    entry: PhysicalInterfaceEntry
    reason: str


@dataclass
class SwitchConfig:
    """Full parsed configuration: SVIs, LAGs, physical ports and VLANs.

    Map iteration order carries no meaning; consumers sort with
    :func:`~comware_aruba.utils.sorting.sorted_items` before emitting.

    Attributes:
        svis: SVI name to :class:`VlanInterfaceEntry`.
        lags: LAG name to :class:`LagEntry`.
        ports: Port key to :class:`PhysicalInterfaceEntry`.  Keys are source
            names until normalization, target addresses afterwards.
        vlans: VLAN ID to :class:`VlanEntry`.
        unmapped: Ports the last normalization pass could not place.
        metadata: Arbitrary string key-value metadata (e.g. source hostname).
    """

    svis: dict[str, VlanInterfaceEntry] = field(default_factory=dict)
    lags: dict[str, LagEntry] = field(default_factory=dict)
    ports: dict[str, PhysicalInterfaceEntry] = field(default_factory=dict)
    vlans: dict[int, VlanEntry] = field(default_factory=dict)
    unmapped: list[UnmappedPort] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)

    def available_lags(self) -> list[str]:
        """Return the numeric LAG ids present in :attr:`lags`, ascending."""
        ids = [lag.lag_id for lag in self.lags.values() if lag.lag_id.isdigit()]
        return sorted(ids, key=int)

    def set_description(self, key: str, description: str) -> None:
        """Replace the description of the SVI, LAG or port stored under *key*.

        Raises:
            KeyError: If no interface is stored under *key*.
        """
        if key in self.svis:
            self.svis[key].description = description
        elif key in self.lags:
            self.lags[key].description = description
        elif key in self.ports:
            self.ports[key].description = description
        else:
            raise KeyError(key)

    def set_lag_membership(self, key: str, lag: str | None) -> None:
        """Assign port *key* to LAG *lag*, or remove it from any LAG with ``None``.

        Raises:
            KeyError: If *key* is not a physical port.
            ValueError: If *lag* is not one of :meth:`available_lags`.
        """
        entry = self.ports[key]
        if lag in (None, "", "-"):
            entry.lag = None
            return
        if lag not in self.available_lags():
            raise ValueError(f"Unknown LAG {lag!r}; expected one of {self.available_lags()}")
        logger.debug("Port %s moved to LAG %s", key, lag)
        entry.lag = lag
