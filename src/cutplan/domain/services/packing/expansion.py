"""Expansion of part requests into individually tracked unit parts."""

from __future__ import annotations

from typing import Sequence

from cutplan.domain.value_objects import PartRequest, UnitPart


def expand_requests(requests: Sequence[PartRequest]) -> list[UnitPart]:
    """Expand requests with quantity N into N unit parts.

    Working dimensions start equal to the requested ones; rotation is decided
    later by the strategy that places the part. Nothing is rejected here:
    parts with non-positive dimensions are expanded and simply never placed,
    and a non-positive quantity yields no units.

    Args:
        requests: Part requests in caller order.

    Returns:
        Unit parts in request order, ids ``"<request index>-<unit index>"``.
    """
    expanded: list[UnitPart] = []
    for request_index, request in enumerate(requests):
        for unit_index in range(request.quantity):
            expanded.append(
                UnitPart(
                    id=f"{request_index}-{unit_index}",
                    request_index=request_index,
                    original_width=request.width,
                    original_height=request.height,
                    width=request.width,
                    height=request.height,
                    rotatable=request.rotatable,
                    label=request.label,
                )
            )
    return expanded
