"""Aruba AOS-CX configuration generator.

Renders a normalized :class:`~comware_aruba.model.config.SwitchConfig` into
AOS-CX CLI text.  Interface blocks are derived here; the banner, system
settings and VLAN catalog come from :class:`ConverterSettings` through the
``aruba.cfg.j2`` Jinja2 template.

Rendering is a pure function of the model, the parameters and the settings,
so it can be repeated for every live-preview refresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from comware_aruba.model.config import SwitchConfig
from comware_aruba.model.interface import VLAN_ALL, LagEntry, PhysicalInterfaceEntry
from comware_aruba.settings import ConverterSettings, load_settings
from comware_aruba.utils.sorting import sorted_items
from comware_aruba.utils.vlans import format_vlan_ids, merge_vlan_ids

logger = logging.getLogger(__name__)

_TEMPLATE_DIR: Path = Path(__file__).parent / "templates"
_TEMPLATE_NAME: str = "aruba.cfg.j2"

# Native VLAN written on trunk LAGs, which carry no untagged VLAN list.
LAG_NATIVE_VLAN: int = 1


@dataclass
class InterfaceBlock:
    """One ``interface ... exit`` stanza.

    Attributes:
        name: Text after ``interface`` (``"lag 3"``, ``"1/1/12"``).
        lines: Body lines without indentation.
    """

    name: str
    lines: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Derivations
# ---------------------------------------------------------------------------

def allowed_vlans(entry: PhysicalInterfaceEntry) -> str | None:
    """Return the ``vlan trunk allowed`` value for a trunk or hybrid port.

    The union of tagged, untagged and voice VLANs, deduplicated and sorted
    numerically; ``"all"`` when the tagged list is the all sentinel;
    ``None`` when the union is empty.
    """
    if isinstance(entry.tagged_vlans, str):
        return VLAN_ALL
    vlan_ids = merge_vlan_ids(entry.tagged_vlans, entry.untagged_vlans)
    if entry.voice_vlan is not None:
        vlan_ids = merge_vlan_ids(vlan_ids, [entry.voice_vlan])
    return format_vlan_ids(vlan_ids) or None


def native_vlan(entry: PhysicalInterfaceEntry) -> int | None:
    """Return the last untagged VLAN in source order, or ``None``."""
    return entry.untagged_vlans[-1] if entry.untagged_vlans else None


def needs_qos_trust(entry: PhysicalInterfaceEntry, settings: ConverterSettings) -> bool:
    """``True`` if the port carries a voice or tagged VLAN configured for DSCP trust."""
    if entry.voice_vlan is not None and entry.voice_vlan in settings.qos_voice_vlans:
        return True
    if isinstance(entry.tagged_vlans, str) or not settings.qos_tagged_vlans:
        return False
    return sorted(entry.tagged_vlans) == sorted(settings.qos_tagged_vlans)


def physical_block(entry: PhysicalInterfaceEntry, settings: ConverterSettings) -> InterfaceBlock:
    """Build the interface block for a physical port.

    LAG members get only their description, admin state, ``lag`` line and
    loop-protect line; VLAN, QoS and spanning-tree lines are written for
    standalone ports only.
    """
    block = InterfaceBlock(name=entry.name)
    if entry.description:
        block.lines.append(f"description {entry.description}")
    block.lines.append("no shutdown" if entry.admin_up else "shutdown")

    if entry.lag is not None:
        block.lines.append(f"lag {entry.lag}")
    else:
        block.lines.extend(_vlan_lines(entry, settings))

    if entry.loop_protect_vlans == settings.loop_protect_trigger:
        block.lines.append(f"loop-protect vlan {settings.loop_protect_vlans}")
    return block


def _vlan_lines(entry: PhysicalInterfaceEntry, settings: ConverterSettings) -> list[str]:
    lines: list[str] = []
    if entry.mode == "access" and entry.untagged_vlans:
        lines.append(f"vlan access {entry.untagged_vlans[0]}")
    elif entry.mode in ("trunk", "hybrid"):
        allowed = allowed_vlans(entry)
        if allowed:
            lines.append(f"vlan trunk allowed {allowed}")
        native = native_vlan(entry)
        if native is not None:
            lines.append(f"vlan trunk native {native}")

    if needs_qos_trust(entry, settings):
        lines.append("qos trust dscp")
    if entry.has_vlan_config:
        lines.append("spanning-tree port-type admin-edge")
    return lines


def lag_block(lag: LagEntry) -> InterfaceBlock:
    """Build the ``interface lag N`` block for a LAG."""
    block = InterfaceBlock(name=f"lag {lag.lag_id}")
    if lag.description:
        block.lines.append(f"description '{lag.description}'")
    block.lines.append("no shutdown" if lag.admin_up else "shutdown")

    if lag.mode == "trunk":
        if lag.vlans:
            block.lines.append(f"vlan trunk allowed {lag.vlans.replace(' ', '')}")
        block.lines.append(f"vlan trunk native {LAG_NATIVE_VLAN}")
    elif lag.mode == "access" and lag.vlans:
        block.lines.append(f"vlan access {lag.vlans}")

    block.lines.append("lacp mode active")
    block.lines.append("lacp rate fast")
    return block


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class ArubaConfigGenerator:
    """Render AOS-CX configuration text from a normalized model.

    Args:
        settings: Site settings; the bundled defaults when omitted.
        template_dir: Directory holding ``aruba.cfg.j2``.
    """

    def __init__(
        self,
        settings: ConverterSettings | None = None,
        template_dir: str | Path = _TEMPLATE_DIR,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def blocks(self, cfg: SwitchConfig) -> list[InterfaceBlock]:
        """Return LAG blocks then physical-port blocks, each in canonical order.

        LAGs whose name carries no number have no AOS-CX identifier and are
        skipped with a warning.
        """
        blocks: list[InterfaceBlock] = []
        for name, lag in sorted_items(cfg.lags):
            if not lag.lag_id:
                logger.warning("Skipping %s: no LAG number", name)
                continue
            blocks.append(lag_block(lag))
        blocks.extend(physical_block(entry, self.settings) for _, entry in sorted_items(cfg.ports))
        return blocks

    def generate(
        self,
        cfg: SwitchConfig,
        *,
        hostname: str | None = None,
        password: str | None = None,
    ) -> str:
        """Render the complete configuration.

        Args:
            cfg: Normalized model.  It is read, never modified.
            hostname: Target hostname; :attr:`ConverterSettings.default_hostname`
                when empty.
            password: Administrator password;
                :attr:`ConverterSettings.default_password` when empty.

        Returns:
            Configuration text ending with a newline.
        """
        blocks = self.blocks(cfg)
        template = self.env.get_template(_TEMPLATE_NAME)
        text = template.render(
            hostname=hostname or self.settings.default_hostname,
            password=password or self.settings.default_password,
            settings=self.settings,
            blocks=blocks,
        )
        lag_count = sum(1 for b in blocks if b.name.startswith("lag "))
        logger.debug("Rendered %d LAG and %d port block(s)", lag_count, len(blocks) - lag_count)
        return text


def render_aruba_config(
    cfg: SwitchConfig,
    *,
    hostname: str | None = None,
    password: str | None = None,
    settings: ConverterSettings | None = None,
) -> str:
    """Render *cfg* with a one-off :class:`ArubaConfigGenerator`."""
    return ArubaConfigGenerator(settings).generate(cfg, hostname=hostname, password=password)
