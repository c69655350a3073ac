"""Site settings: boilerplate and policy constants for generated configurations.

Defaults ship with the package in ``data/defaults.yaml``.  A user YAML file
can override any top-level key; the CLI takes its path from ``--settings`` or
the ``COMWARE_ARUBA_SETTINGS`` environment variable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from comware_aruba.errors import SettingsError
from comware_aruba.model.vlan import CatalogVlan

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR: str = "COMWARE_ARUBA_SETTINGS"

_DEFAULTS_PATH: Path = Path(__file__).parent / "data" / "defaults.yaml"


@dataclass
class ConverterSettings:
    """Boilerplate and policy constants consumed by the generator.

    Attributes:
        default_hostname: Hostname used when none is given or found.
        default_password: Administrator password used when none is given.
        banner_body: MOTD banner lines below the hostname line.
        system_lines: SNMP/NTP/SSH/LLDP lines written after the admin user.
        vlan_catalog: VLANs declared in every output, in order.
        default_route: Final line of the configuration.
        loop_protect_trigger: Comware ``loopback-detection`` range that
            enables loop protection on the target port.
        loop_protect_vlans: VLAN list written on ``loop-protect vlan`` lines.
        qos_voice_vlans: Voice VLANs that get ``qos trust dscp``.
        qos_tagged_vlans: Tagged VLAN list that gets ``qos trust dscp``.
    """

    default_hostname: str = "Switch"
    default_password: str = "admin123"
    banner_body: list[str] = field(default_factory=list)
    system_lines: list[str] = field(default_factory=list)
    vlan_catalog: list[CatalogVlan] = field(default_factory=list)
    default_route: str = ""
    loop_protect_trigger: str = "1 to 4094"
    loop_protect_vlans: str = ""
    qos_voice_vlans: list[int] = field(default_factory=list)
    qos_tagged_vlans: list[int] = field(default_factory=list)


def load_settings(path: str | Path | None = None) -> ConverterSettings:
    """Load the bundled defaults, overlaid with the YAML file at *path*.

    Args:
        path: Optional user settings file.

    Returns:
        The merged :class:`ConverterSettings`.

    Raises:
        SettingsError: If a file cannot be read, is not a YAML mapping, or
            holds unknown keys or values of the wrong type.
    """
    raw = _read_yaml(_DEFAULTS_PATH)
    if path is not None:
        logger.info("Loading settings overrides from %s", path)
        raw.update(_read_yaml(Path(path)))
    return _build_settings(raw)


def load_settings_from_env() -> ConverterSettings:
    """Load settings, honouring ``$COMWARE_ARUBA_SETTINGS`` when set."""
    path = os.environ.get(SETTINGS_ENV_VAR, "").strip()
    return load_settings(path or None)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file {str(path)!r}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in settings file {str(path)!r}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SettingsError(f"Settings root must be a mapping in {str(path)!r}")
    return raw


def _build_settings(raw: dict[str, Any]) -> ConverterSettings:
    known = set(ConverterSettings.__dataclass_fields__)
    unknown = sorted(set(raw) - known)
    if unknown:
        raise SettingsError(f"Unknown settings key(s): {', '.join(unknown)}")

    return ConverterSettings(
        default_hostname=_str(raw, "default_hostname", "Switch"),
        default_password=_str(raw, "default_password", "admin123"),
        banner_body=_str_list(raw, "banner_body"),
        system_lines=_str_list(raw, "system_lines"),
        vlan_catalog=_catalog(raw.get("vlan_catalog") or []),
        default_route=_str(raw, "default_route", ""),
        loop_protect_trigger=_str(raw, "loop_protect_trigger", "1 to 4094"),
        loop_protect_vlans=_str(raw, "loop_protect_vlans", ""),
        qos_voice_vlans=_int_list(raw, "qos_voice_vlans"),
        qos_tagged_vlans=_int_list(raw, "qos_tagged_vlans"),
    )


def _str(raw: dict[str, Any], key: str, default: str) -> str:
    value = raw.get(key, default)
    if value is None:
        return default
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise SettingsError(f"{key} must be a string")
    return str(value)


def _str_list(raw: dict[str, Any], key: str) -> list[str]:
    value = raw.get(key) or []
    if not isinstance(value, list):
        raise SettingsError(f"{key} must be a list of strings")
    return ["" if item is None else str(item) for item in value]


def _int_list(raw: dict[str, Any], key: str) -> list[int]:
    value = raw.get(key) or []
    if not isinstance(value, list):
        raise SettingsError(f"{key} must be a list of integers")
    try:
        return [int(item) for item in value]
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"{key} must be a list of integers") from exc


def _catalog(value: object) -> list[CatalogVlan]:
    if not isinstance(value, list):
        raise SettingsError("vlan_catalog must be a list of mappings")
    catalog: list[CatalogVlan] = []
    for item in value:
        if not isinstance(item, dict) or "id" not in item:
            raise SettingsError(f"Each vlan_catalog entry needs an id, got {item!r}")
        try:
            vlan_id = int(item["id"])
        except (TypeError, ValueError) as exc:
            raise SettingsError(f"vlan_catalog id must be an integer, got {item['id']!r}") from exc
        description = item.get("description")
        catalog.append(
            CatalogVlan(
                vlan_id=vlan_id,
                name=str(item.get("name") or ""),
                description=str(description) if description else None,
                voice=bool(item.get("voice", False)),
                igmp_snooping=bool(item.get("igmp_snooping", True)),
            )
        )
    return catalog
