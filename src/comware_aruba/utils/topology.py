"""Stack topology resolution: hardware model tags to per-unit port facts."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from comware_aruba.model.stack import StackUnit
from comware_aruba.vendor.aruba.platforms import DEFAULT_MODEL, PORT_COUNTS, SFP_COUNT

logger = logging.getLogger(__name__)


def resolve_model(token: str) -> str:
    """Return the supported model tag for *token*.

    Vendor-style tokens keep only the part after the first ``-``
    (``"6100-48"`` -> ``"48"``).  Unknown tokens fall back to
    :data:`~comware_aruba.vendor.aruba.platforms.DEFAULT_MODEL`.
    """
    tag = token.strip()
    if "-" in tag:
        tag = tag.split("-")[1]
    if tag not in PORT_COUNTS:
        logger.warning("Unknown switch model %r; using %s-port default", token, DEFAULT_MODEL)
        return DEFAULT_MODEL
    return tag


def resolve_stack(units: Iterable[tuple[int, str]]) -> list[StackUnit]:
    """Build one :class:`StackUnit` per ``(unit_number, model_token)`` pair.

    Args:
        units: Ordered pairs of 1-based unit number and hardware model token.

    Returns:
        Stack units in the order given.

    Raises:
        ValueError: If a unit number is below 1 or repeated.
    """
    stack: list[StackUnit] = []
    seen: set[int] = set()
    for number, token in units:
        if number < 1:
            raise ValueError(f"Stack unit numbers start at 1, got {number}")
        if number in seen:
            raise ValueError(f"Stack unit {number} listed twice")
        seen.add(number)
        model = resolve_model(token)
        stack.append(
            StackUnit(
                unit_number=number,
                model=model,
                total_ports=PORT_COUNTS[model],
                sfp_count=SFP_COUNT,
            )
        )
    return stack


def build_stack(models: Sequence[str]) -> list[StackUnit]:
    """Resolve a stack whose units are numbered 1..N in the order of *models*.

    Raises:
        ValueError: If *models* is empty.
    """
    if not models:
        raise ValueError("A stack needs at least one unit")
    return resolve_stack(enumerate(models, start=1))
