"""VLAN list and address helpers shared by the parser and the generator."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable

_DIGITS_RE: re.Pattern[str] = re.compile(r"\d+")


def extract_vlan_ids(text: str) -> list[int]:
    """Return every positive integer token in *text*, in order of appearance.

    Non-numeric tokens (``to``, ``tagged``, typos) are simply absent from
    the result.
    """
    return [vid for vid in (int(tok) for tok in _DIGITS_RE.findall(text)) if vid > 0]


def merge_vlan_ids(current: Iterable[int], new: Iterable[int]) -> list[int]:
    """Union *new* into *current* without duplicates, keeping first-seen order.

    Example:
        >>> merge_vlan_ids([3], [5, 3])
        [3, 5]
    """
    merged = list(current)
    for vid in new:
        if vid not in merged:
            merged.append(vid)
    return merged


def format_vlan_ids(vlan_ids: Iterable[int]) -> str:
    """Render VLAN ids as a sorted, comma-joined, space-free string."""
    return ",".join(str(vid) for vid in sorted(set(vlan_ids)))


def to_cidr(address: str, mask: str) -> str:
    """Combine a dotted-quad address and mask into ``address/prefixlen``.

    A mask that is not a valid IPv4 netmask is kept literally
    (``10.0.0.1/255.0.255.0``) rather than failing the conversion.
    """
    try:
        prefixlen = ipaddress.IPv4Network(f"0.0.0.0/{mask}").prefixlen
    except ValueError:
        return f"{address}/{mask}"
    return f"{address}/{prefixlen}"
