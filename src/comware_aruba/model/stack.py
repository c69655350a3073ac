"""Typed model for stack members of the target switch."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StackUnit:
    """One physical switch of the target stack.

    Attributes:
        unit_number: 1-based stack member number, the first field of a
            target port address.
        model: Hardware model tag as resolved (e.g. ``"48"``).
        total_ports: Number of copper access ports.
        sfp_count: Number of SFP uplink cages, numbered right after the
            access ports.
    """

    unit_number: int
    model: str
    total_ports: int
    sfp_count: int = 4

    @property
    def sfp_start(self) -> int:
        """First SFP port number."""
        return self.total_ports + 1

    @property
    def sfp_end(self) -> int:
        """Last SFP port number (inclusive)."""
        return self.sfp_start + self.sfp_count - 1

    def describe(self) -> str:
        """Summary such as ``"48 ports + 4 SFP (49-52)"``."""
        return (
            f"{self.total_ports} ports + {self.sfp_count} SFP "
            f"({self.sfp_start}-{self.sfp_end})"
        )
