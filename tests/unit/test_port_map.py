"""Unit tests for comware_aruba.utils.port_map."""

from __future__ import annotations

import pytest

from comware_aruba.errors import SfpExhaustedError, UnmappablePortError
from comware_aruba.utils.port_map import PortMapper, SfpAllocator
from comware_aruba.utils.topology import build_stack


@pytest.fixture
def mapper() -> PortMapper:
    return PortMapper(build_stack(["48", "24"]))


# ---------------------------------------------------------------------------
# Standard ports
# ---------------------------------------------------------------------------


def test_standard_port_shifts_subslot(mapper: PortMapper) -> None:
    assert mapper.map("GigabitEthernet1/0/1") == "1/1/1"
    assert mapper.map("GigabitEthernet2/0/24") == "2/1/24"


def test_standard_port_out_of_range(mapper: PortMapper) -> None:
    with pytest.raises(UnmappablePortError) as exc_info:
        mapper.map("GigabitEthernet2/0/25")
    assert exc_info.value.source_name == "GigabitEthernet2/0/25"
    assert "out of range" in exc_info.value.reason


def test_unit_not_in_stack(mapper: PortMapper) -> None:
    with pytest.raises(UnmappablePortError, match="unit 3 is not in the stack"):
        mapper.map("GigabitEthernet3/0/1")


def test_unrecognised_prefix(mapper: PortMapper) -> None:
    with pytest.raises(UnmappablePortError, match="unrecognised interface type"):
        mapper.map("M-GigabitEthernet0/0/0")


def test_malformed_address(mapper: PortMapper) -> None:
    with pytest.raises(UnmappablePortError, match="malformed port address"):
        mapper.map("GigabitEthernet1/1")


# ---------------------------------------------------------------------------
# Uplink ports and SFP allocation
# ---------------------------------------------------------------------------


def test_first_uplink_gets_first_sfp(mapper: PortMapper) -> None:
    assert mapper.map("Ten-GigabitEthernet1/0/53") == "1/1/49"


def test_uplinks_allocated_in_request_order(mapper: PortMapper) -> None:
    assert mapper.map("Ten-GigabitEthernet1/0/53") == "1/1/49"
    assert mapper.map("Ten-GigabitEthernet1/0/54") == "1/1/50"


def test_uplink_allocation_is_idempotent(mapper: PortMapper) -> None:
    first = mapper.map("Ten-GigabitEthernet1/0/53")
    mapper.map("Ten-GigabitEthernet1/0/54")
    assert mapper.map("Ten-GigabitEthernet1/0/53") == first


def test_sfp_cursor_is_per_unit(mapper: PortMapper) -> None:
    assert mapper.map("Ten-GigabitEthernet1/0/49") == "1/1/49"
    assert mapper.map("Ten-GigabitEthernet2/0/25") == "2/1/25"
    assert mapper.map("Ten-GigabitEthernet1/0/50") == "1/1/50"


def test_fifth_uplink_on_a_unit_fails(mapper: PortMapper) -> None:
    for port in range(49, 53):
        mapper.map(f"Ten-GigabitEthernet1/0/{port}")
    with pytest.raises(SfpExhaustedError) as exc_info:
        mapper.map("Ten-GigabitEthernet1/0/53")
    assert exc_info.value.unit == 1
    assert isinstance(exc_info.value, UnmappablePortError)


def test_allocator_assignments() -> None:
    allocator = SfpAllocator()
    unit = build_stack(["12"])[0]
    assert allocator.allocate("Ten-GigabitEthernet1/0/2", unit) == 13
    assert allocator.allocate("Ten-GigabitEthernet1/0/1", unit) == 14
    assert allocator.assignments == {
        "Ten-GigabitEthernet1/0/2": 13,
        "Ten-GigabitEthernet1/0/1": 14,
    }


def test_assignments_returns_copy() -> None:
    allocator = SfpAllocator()
    allocator.allocate("Ten-GigabitEthernet1/0/1", build_stack(["48"])[0])
    allocator.assignments.clear()
    assert len(allocator.assignments) == 1


def test_fresh_allocator_per_mapper() -> None:
    stack = build_stack(["48"])
    PortMapper(stack).map("Ten-GigabitEthernet1/0/54")
    assert PortMapper(stack).map("Ten-GigabitEthernet1/0/53") == "1/1/49"


def test_shared_allocator() -> None:
    stack = build_stack(["48"])
    allocator = SfpAllocator()
    PortMapper(stack, allocator).map("Ten-GigabitEthernet1/0/54")
    assert PortMapper(stack, allocator).map("Ten-GigabitEthernet1/0/53") == "1/1/50"
