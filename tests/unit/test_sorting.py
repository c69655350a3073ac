"""Unit tests for comware_aruba.utils.sorting."""

from __future__ import annotations

from comware_aruba.utils.sorting import compare_interface_names, sorted_items, sorted_names


def test_numeric_not_lexicographic() -> None:
    names = ["GigabitEthernet1/0/10", "GigabitEthernet1/0/2", "GigabitEthernet1/0/1"]
    assert sorted_names(names) == [
        "GigabitEthernet1/0/1",
        "GigabitEthernet1/0/2",
        "GigabitEthernet1/0/10",
    ]


def test_unit_sorts_before_port() -> None:
    assert compare_interface_names("GigabitEthernet1/0/48", "GigabitEthernet2/0/1") < 0


def test_family_order() -> None:
    names = [
        "Ten-GigabitEthernet1/0/49",
        "GigabitEthernet1/0/1",
        "Bridge-Aggregation1",
        "Vlan-interface10",
    ]
    assert sorted_names(names) == [
        "Vlan-interface10",
        "Bridge-Aggregation1",
        "GigabitEthernet1/0/1",
        "Ten-GigabitEthernet1/0/49",
    ]


def test_unknown_family_sorts_last() -> None:
    names = ["M-GigabitEthernet0/0/0", "Ten-GigabitEthernet1/0/53"]
    assert sorted_names(names) == ["Ten-GigabitEthernet1/0/53", "M-GigabitEthernet0/0/0"]


def test_target_addresses_sort_numerically() -> None:
    assert sorted_names(["1/1/49", "2/1/1", "1/1/9"]) == ["1/1/9", "1/1/49", "2/1/1"]


def test_equal_names_compare_zero() -> None:
    assert compare_interface_names("Bridge-Aggregation3", "Bridge-Aggregation3") == 0


def test_distinct_names_never_equal() -> None:
    # Same numbers, different zero padding.
    assert compare_interface_names("1/1/01", "1/1/1") != 0
    assert compare_interface_names("1/1/01", "1/1/1") == -compare_interface_names(
        "1/1/1", "1/1/01"
    )


def test_missing_numbers_count_as_zero() -> None:
    assert compare_interface_names("Bridge-Aggregation", "Bridge-Aggregation1") < 0


def test_sorted_items_vlan_ids() -> None:
    items = sorted_items({1090: "a", 2: "b", 42: "c"})
    assert [k for k, _ in items] == [2, 42, 1090]
