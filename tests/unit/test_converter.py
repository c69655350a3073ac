"""Unit tests for comware_aruba.converter."""

from __future__ import annotations

import pathlib

import pytest

from comware_aruba import ComwareToArubaConverter, convert
from comware_aruba.errors import ConversionWarning, ConverterError

FIXTURES = pathlib.Path(__file__).parent.parent / "fixtures"
SAMPLE = (FIXTURES / "comware_sample.cfg").read_text(encoding="utf-8")


@pytest.fixture
def converter() -> ComwareToArubaConverter:
    conv = ComwareToArubaConverter(["48"])
    conv.load(SAMPLE)
    return conv


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


def test_config_before_load_raises() -> None:
    with pytest.raises(ConverterError, match="call load"):
        _ = ComwareToArubaConverter().config


def test_hostname_from_sysname(converter: ComwareToArubaConverter) -> None:
    assert converter.hostname == "SW-BAT8-01"
    assert "hostname SW-BAT8-01" in converter.render()


def test_explicit_hostname_wins(converter: ComwareToArubaConverter) -> None:
    converter.hostname = "NEW-NAME"
    assert "hostname NEW-NAME" in converter.render()


def test_hostname_default_without_sysname() -> None:
    conv = ComwareToArubaConverter()
    conv.load("interface GigabitEthernet1/0/1\n")
    assert conv.hostname == conv.settings.default_hostname


def test_unmapped(converter: ComwareToArubaConverter) -> None:
    names = {u.entry.source_name for u in converter.unmapped}
    assert names == {"GigabitEthernet2/0/5", "M-GigabitEthernet0/0/0"}


def test_load_replaces_model(converter: ComwareToArubaConverter) -> None:
    converter.load("interface GigabitEthernet1/0/7\n")
    assert list(converter.config.ports) == ["1/1/7"]


# ---------------------------------------------------------------------------
# Edits
# ---------------------------------------------------------------------------


def test_set_description_rerenders(converter: ComwareToArubaConverter) -> None:
    text = converter.set_description("1/1/10", "Imprimante")
    assert "interface 1/1/10\n   description Imprimante\n" in text


def test_set_description_on_lag(converter: ComwareToArubaConverter) -> None:
    text = converter.set_description("Bridge-Aggregation2", "Serveurs")
    assert "description 'Serveurs'" in text


def test_set_description_unknown_key(converter: ComwareToArubaConverter) -> None:
    with pytest.raises(KeyError):
        converter.set_description("9/9/9", "nope")


def test_set_lag_membership(converter: ComwareToArubaConverter) -> None:
    text = converter.set_lag_membership("1/1/1", "2")
    assert "interface 1/1/1\n   no shutdown\n   lag 2\nexit\n" in text


def test_detach_from_lag(converter: ComwareToArubaConverter) -> None:
    text = converter.set_lag_membership("1/1/4", None)
    assert "interface 1/1/4\n   shutdown\n   vlan access 10\n" in text


def test_unknown_lag_rejected(converter: ComwareToArubaConverter) -> None:
    with pytest.raises(ValueError, match="Unknown LAG"):
        converter.set_lag_membership("1/1/1", "9")


def test_set_stack_keeps_edits(converter: ComwareToArubaConverter) -> None:
    converter.set_description("1/1/1", "kept")
    converter.set_stack(["48", "24"])
    assert converter.config.ports["1/1/1"].description == "kept"
    assert converter.config.ports["2/1/5"].source_name == "GigabitEthernet2/0/5"
    assert [u.entry.source_name for u in converter.unmapped] == ["M-GigabitEthernet0/0/0"]


def test_set_stack_to_smaller_unit(converter: ComwareToArubaConverter) -> None:
    converter.set_stack(["6100-12"])
    assert "1/1/1" in converter.config.ports
    assert "1/1/10" in converter.config.ports
    assert converter.config.ports["1/1/13"].source_name == "Ten-GigabitEthernet1/0/53"


def test_tables(converter: ComwareToArubaConverter) -> None:
    assert [r["interface"] for r in converter.tables()["lag"]] == [
        "Bridge-Aggregation1",
        "Bridge-Aggregation2",
    ]


# ---------------------------------------------------------------------------
# convert()
# ---------------------------------------------------------------------------


def test_convert_warns_about_omitted_ports() -> None:
    with pytest.warns(ConversionWarning, match="2 interface"):
        result = convert(SAMPLE, hostname="SW", password="pw")
    assert "hostname SW" in result.text
    assert len(result.unmapped) == 2
    assert "1/1/49" in result.config.ports


def test_convert_without_omissions_does_not_warn(recwarn: pytest.WarningsRecorder) -> None:
    result = convert("interface GigabitEthernet1/0/1\n port access vlan 10\n")
    assert result.unmapped == []
    assert not [w for w in recwarn if issubclass(w.category, ConversionWarning)]
    assert "vlan access 10" in result.text


def test_convert_empty_input() -> None:
    result = convert("")
    assert "interface 1/" not in result.text
    assert result.text.startswith("banner motd !")
