"""Custom exceptions and warnings for comware-aruba."""

from __future__ import annotations

from dataclasses import dataclass


class ConverterError(Exception):
    """Base exception for all comware-aruba errors."""


class SettingsError(ConverterError):
    """Raised when the settings file is unreadable or structurally invalid."""


@dataclass
class UnmappablePortError(ConverterError):
    """Raised when a source port has no address in the target stack.

    Attributes:
        source_name: Source interface name (e.g. ``GigabitEthernet3/0/5``).
        reason: Human-readable explanation.
    """

    source_name: str
    reason: str

    def __post_init__(self) -> None:
        super().__init__(f"Cannot map {self.source_name!r}: {self.reason}")


@dataclass
class SfpExhaustedError(UnmappablePortError):
    """Raised when a stack unit has no free SFP cage left for an uplink port."""

    unit: int = 0


class ConversionWarning(UserWarning):
    """Issued when a conversion completes with omitted interfaces."""
