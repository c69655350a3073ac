"""Canonical ordering of interface and VLAN identifiers."""

from __future__ import annotations

import functools
import re
from collections.abc import Mapping
from typing import TypeVar

from comware_aruba.vendor.comware.mappings import PREFIX_ORDER

_V = TypeVar("_V")
_K = TypeVar("_K", str, int)

_NUMBER_RE: re.Pattern[str] = re.compile(r"\d+")
_PREFIX_STRIP_RE: re.Pattern[str] = re.compile(r"[\d/\-]")

# Rank given to prefixes absent from PREFIX_ORDER (target addresses included).
_UNKNOWN_RANK: int = 999


def _prefix(name: str) -> str:
    return _PREFIX_STRIP_RE.sub("", name)


def _numbers(name: str) -> list[int]:
    return [int(n) for n in _NUMBER_RE.findall(name)] or [0]


def compare_interface_names(a: str, b: str) -> int:
    """Three-way compare two interface identifiers.

    Ordering rules, in turn:

    1. Interface family rank (SVI, LAG, Gigabit, Ten-Gigabit, then others).
    2. Family name, alphabetically, for families without a rank.
    3. The embedded numbers compared left to right, a missing number
       counting as ``0`` (``GigabitEthernet1/0/2`` < ``GigabitEthernet1/0/10``).
    4. The raw string, so that distinct names never compare equal.

    Returns:
        A negative number, zero, or a positive number.
    """
    prefix_a, prefix_b = _prefix(a), _prefix(b)
    if prefix_a != prefix_b:
        rank_a = PREFIX_ORDER.get(prefix_a, _UNKNOWN_RANK)
        rank_b = PREFIX_ORDER.get(prefix_b, _UNKNOWN_RANK)
        if rank_a != rank_b:
            return rank_a - rank_b
        return -1 if prefix_a < prefix_b else 1

    nums_a, nums_b = _numbers(a), _numbers(b)
    for i in range(max(len(nums_a), len(nums_b))):
        num_a = nums_a[i] if i < len(nums_a) else 0
        num_b = nums_b[i] if i < len(nums_b) else 0
        if num_a != num_b:
            return num_a - num_b

    if a == b:
        return 0
    return -1 if a < b else 1


interface_sort_key = functools.cmp_to_key(compare_interface_names)


def sorted_names(names: list[str]) -> list[str]:
    """Return *names* in canonical interface order."""
    return sorted(names, key=interface_sort_key)


def sorted_items(mapping: Mapping[_K, _V]) -> list[tuple[_K, _V]]:
    """Return the items of *mapping* sorted by key in canonical order.

    Integer keys (VLAN ids) are compared through their decimal string.
    """
    return sorted(mapping.items(), key=lambda kv: interface_sort_key(str(kv[0])))
