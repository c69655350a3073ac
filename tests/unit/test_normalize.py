"""Unit tests for comware_aruba.utils.normalize."""

from __future__ import annotations

import logging

import pytest

from comware_aruba.model.config import SwitchConfig
from comware_aruba.model.interface import LagEntry, PhysicalInterfaceEntry
from comware_aruba.utils.normalize import normalize_switch_config
from comware_aruba.utils.topology import build_stack


def _config(*names: str) -> SwitchConfig:
    cfg = SwitchConfig()
    for name in names:
        cfg.ports[name] = PhysicalInterfaceEntry(name=name)
    return cfg


def test_rekeys_ports_to_targets() -> None:
    cfg = normalize_switch_config(_config("GigabitEthernet1/0/7"), build_stack(["48"]))
    assert list(cfg.ports) == ["1/1/7"]
    entry = cfg.ports["1/1/7"]
    assert entry.name == "1/1/7"
    assert entry.source_name == "GigabitEthernet1/0/7"


def test_returns_same_object() -> None:
    cfg = _config("GigabitEthernet1/0/7")
    assert normalize_switch_config(cfg, build_stack(["48"])) is cfg


def test_sfp_order_follows_canonical_source_order() -> None:
    cfg = _config("Ten-GigabitEthernet1/0/54", "Ten-GigabitEthernet1/0/53")
    normalize_switch_config(cfg, build_stack(["48"]))
    assert cfg.ports["1/1/49"].source_name == "Ten-GigabitEthernet1/0/53"
    assert cfg.ports["1/1/50"].source_name == "Ten-GigabitEthernet1/0/54"


def test_unmappable_ports_recorded(caplog: pytest.LogCaptureFixture) -> None:
    cfg = _config("GigabitEthernet1/0/1", "GigabitEthernet2/0/1")
    with caplog.at_level(logging.WARNING, logger="comware_aruba.utils.normalize"):
        normalize_switch_config(cfg, build_stack(["48"]))
    assert list(cfg.ports) == ["1/1/1"]
    assert len(cfg.unmapped) == 1
    assert cfg.unmapped[0].entry.source_name == "GigabitEthernet2/0/1"
    assert "unit 2" in cfg.unmapped[0].reason
    assert "Skipping GigabitEthernet2/0/1" in caplog.text


def test_sfp_exhaustion_is_unmapped_not_raised() -> None:
    cfg = _config(*(f"Ten-GigabitEthernet1/0/{p}" for p in range(49, 54)))
    normalize_switch_config(cfg, build_stack(["48"]))
    assert sorted(cfg.ports) == ["1/1/49", "1/1/50", "1/1/51", "1/1/52"]
    assert [u.entry.source_name for u in cfg.unmapped] == ["Ten-GigabitEthernet1/0/53"]


def test_duplicate_target_is_unmapped() -> None:
    cfg = SwitchConfig()
    cfg.ports["a"] = PhysicalInterfaceEntry(name="a", source_name="GigabitEthernet1/0/1")
    cfg.ports["b"] = PhysicalInterfaceEntry(name="b", source_name="GigabitEthernet1/0/1")
    normalize_switch_config(cfg, build_stack(["48"]))
    assert list(cfg.ports) == ["1/1/1"]
    assert "already used" in cfg.unmapped[0].reason


def test_renormalize_recovers_unmapped_and_keeps_edits() -> None:
    cfg = _config("GigabitEthernet1/0/1", "GigabitEthernet2/0/3")
    normalize_switch_config(cfg, build_stack(["48"]))
    cfg.ports["1/1/1"].description = "edited"

    normalize_switch_config(cfg, build_stack(["48", "24"]))
    assert sorted(cfg.ports) == ["1/1/1", "2/1/3"]
    assert cfg.ports["1/1/1"].description == "edited"
    assert cfg.unmapped == []


def test_renormalize_to_smaller_stack() -> None:
    cfg = _config("GigabitEthernet1/0/30")
    normalize_switch_config(cfg, build_stack(["48"]))
    normalize_switch_config(cfg, build_stack(["24"]))
    assert cfg.ports == {}
    assert cfg.unmapped[0].entry.name == "GigabitEthernet1/0/30"


def test_other_sections_untouched() -> None:
    cfg = _config("GigabitEthernet1/0/1")
    cfg.lags["Bridge-Aggregation1"] = LagEntry(name="Bridge-Aggregation1")
    normalize_switch_config(cfg, build_stack(["48"]))
    assert list(cfg.lags) == ["Bridge-Aggregation1"]
