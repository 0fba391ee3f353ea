"""One-dimensional allocation of same-height parts across a band.

A band is a full-width horizontal strip of fixed height. The allocator takes
every part that can be oriented to exactly the band height and packs them
left to right, largest area first, into free spans. It never leaves an
offcut narrower than the sliver threshold.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from cutplan.domain.value_objects import EPSILON, PlacedPart, Span, UnitPart, same_length

logger = logging.getLogger(__name__)


def sliver_threshold(
    parts: Iterable[UnitPart],
    kerf: float,
    sliver_factor: float,
) -> float:
    """Minimum width a leftover span must have to be worth keeping.

    Computed as ``(min part dimension + kerf) * sliver_factor`` where the
    minimum runs over all given parts with positive dimensions, not only the
    parts that could land in a particular span.

    Args:
        parts: Remaining parts of the run.
        kerf: Saw blade kerf.
        sliver_factor: Safety multiplier.

    Returns:
        The threshold; ``kerf * sliver_factor`` when no part has positive area.
    """
    dimensions = [p.shortest_side for p in parts if not p.is_degenerate]
    min_dimension = min(dimensions) if dimensions else 0.0
    return (min_dimension + kerf) * sliver_factor


def orient_to_height(part: UnitPart, height: float) -> UnitPart | None:
    """Return the part oriented so its height equals ``height``.

    The working orientation is preferred; the rotated one is used only for
    rotatable parts whose width matches.
    """
    if part.is_degenerate:
        return None
    if same_length(part.height, height):
        return part
    if part.rotatable and same_length(part.width, height):
        return part.turned()
    return None


def is_sliver(width: float, threshold: float) -> bool:
    """Check if a leftover width is positive but too narrow to use."""
    return EPSILON < width < threshold


@dataclass(frozen=True)
class BandAllocation:
    """Outcome of allocating parts into one band.

    Attributes:
        height: Band height.
        width: Band width (the sheet width).
        placements: Placed parts with x relative to the band start and y = 0.
        remaining: Input parts not taken by this band, in input order.
        spans: Free spans left after allocation.
    """

    height: float
    width: float
    placements: tuple[PlacedPart, ...]
    remaining: tuple[UnitPart, ...]
    spans: tuple[Span, ...]

    @property
    def used_area(self) -> float:
        return sum(p.area for p in self.placements)

    @property
    def utilization(self) -> float:
        """Fraction of the band area covered by parts."""
        band_area = self.width * self.height
        if band_area <= 0:
            return 0.0
        return self.used_area / band_area

    @property
    def is_empty(self) -> bool:
        return not self.placements

    def sliver_count(self, threshold: float) -> int:
        """Number of leftover spans narrower than the threshold."""
        return sum(1 for span in self.spans if is_sliver(span.width, threshold))

    def is_valid(self, threshold: float) -> bool:
        """A band with any sliver span must never be finalized."""
        return self.sliver_count(threshold) == 0


class SpanAllocator:
    """First-fit, largest-area-first packing of parts into a band.

    Attributes:
        kerf: Saw kerf inserted before every part not at the band's left edge.
    """

    def __init__(self, kerf: float) -> None:
        self.kerf = kerf

    def allocate(
        self,
        parts: Sequence[UnitPart],
        band_height: float,
        band_width: float,
        threshold: float,
    ) -> BandAllocation:
        """Pack parts matching ``band_height`` into a band.

        Args:
            parts: Candidate parts, any orientation.
            band_height: Height of the band.
            band_width: Width of the band.
            threshold: Sliver threshold for leftover spans.

        Returns:
            BandAllocation with placements, the parts not taken and the
            final span list.
        """
        candidates: list[UnitPart] = []
        for part in parts:
            oriented = orient_to_height(part, band_height)
            if oriented is not None and oriented.width <= band_width + EPSILON:
                candidates.append(oriented)

        # sorted() is stable, so equal keys keep input order
        candidates = sorted(
            candidates,
            key=lambda p: (p.area, p.longest_side),
            reverse=True,
        )

        spans: list[Span] = [Span(start=0.0, width=band_width)]
        placements: list[PlacedPart] = []

        for part in candidates:
            choice = self._choose_span(part, spans, threshold)
            if choice is None:
                continue
            index, leftover = choice
            span = spans[index]
            x = span.start + self._lead(span)
            placements.append(PlacedPart(part=part, x=x, y=0.0))
            if leftover == 0.0:
                del spans[index]
            else:
                spans[index] = Span(start=x + part.width, width=leftover)

        placed_ids = {p.id for p in placements}
        remaining = tuple(p for p in parts if p.id not in placed_ids)

        return BandAllocation(
            height=band_height,
            width=band_width,
            placements=tuple(placements),
            remaining=remaining,
            spans=tuple(spans),
        )

    def _lead(self, span: Span) -> float:
        """Kerf needed before a part placed at the start of ``span``."""
        return 0.0 if span.start <= EPSILON else self.kerf

    def _choose_span(
        self,
        part: UnitPart,
        spans: list[Span],
        threshold: float,
    ) -> tuple[int, float] | None:
        """Find the span with the smallest sliver-free leftover.

        Returns:
            Tuple of (span index, leftover) or None when every span is too
            narrow or would leave a sliver.
        """
        best: tuple[int, float] | None = None
        for index, span in enumerate(spans):
            needed = part.width + self._lead(span)
            if needed > span.width + EPSILON:
                continue
            leftover = span.width - needed
            if leftover <= EPSILON:
                leftover = 0.0
            elif leftover < threshold:
                logger.debug(
                    "Part %s skipped in span at %.1f: leftover %.1f is a sliver",
                    part.id,
                    span.start,
                    leftover,
                )
                continue
            if best is None or leftover < best[1]:
                best = (index, leftover)
        return best
