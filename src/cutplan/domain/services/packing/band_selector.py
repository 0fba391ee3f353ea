"""Band height selection with a lexicographic score and one-level lookahead.

For the free height left on a sheet the selector tries the tallest few
distinct part heights as band heights, allocates each candidate band with the
SpanAllocator, and keeps the band with the best score. The score prefers
sliver-free bands, then bands that leave fewer free spans (cleaner cuts),
then higher utilization. A weighted estimate of the best band that could
follow in the remaining height steers the choice away from heights that look
good now but strand the rest of the sheet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from cutplan.domain.services.packing.config import (
    INTEGER_FIT_BONUS,
    SLIVER_WEIGHT,
    SPAN_WEIGHT,
    UTILIZATION_WEIGHT,
    PackingConfig,
)
from cutplan.domain.services.packing.span_allocator import (
    BandAllocation,
    SpanAllocator,
    sliver_threshold,
)
from cutplan.domain.value_objects import EPSILON, UnitPart, quantize

logger = logging.getLogger(__name__)

# Score of a hypothetical band that places nothing: one untouched span.
EMPTY_BAND_SCORE: float = -SPAN_WEIGHT


@dataclass(frozen=True)
class BandChoice:
    """The band picked for the current vertical offset.

    Attributes:
        allocation: Allocation of the chosen band.
        base_score: Score of the band on its own.
        lookahead_score: Best approximate score of the band that could follow.
        total_score: ``base_score + lambda * lookahead_score``.
    """

    allocation: BandAllocation
    base_score: float
    lookahead_score: float
    total_score: float

    @property
    def height(self) -> float:
        return self.allocation.height


def candidate_heights(
    parts: Sequence[UnitPart],
    band_width: float,
    available_height: float,
    top_k: int,
) -> list[float]:
    """Distinct band heights worth trying, tallest first.

    A height qualifies when some part, in the orientation that gives that
    height, is no wider than the band and the height fits the free space.

    Args:
        parts: Remaining parts.
        band_width: Width of the sheet.
        available_height: Free vertical space.
        top_k: Maximum number of heights returned.

    Returns:
        Up to ``top_k`` heights sorted descending.
    """
    heights: dict[float, float] = {}
    for part in parts:
        if part.is_degenerate:
            continue
        orientations = [(part.height, part.width)]
        if part.rotatable:
            orientations.append((part.width, part.height))
        for height, width in orientations:
            if height > available_height + EPSILON or width > band_width + EPSILON:
                continue
            heights.setdefault(quantize(height), height)
    ordered = sorted(heights.values(), reverse=True)
    return ordered[:top_k]


def score_band(allocation: BandAllocation, threshold: float) -> float:
    """Lexicographic value of a band on its own.

    ``-(slivers * 1e6) - (spans * 1e3) + utilization * 10 + integer fit bonus``
    """
    span_count = len(allocation.spans)
    score = (
        -allocation.sliver_count(threshold) * SLIVER_WEIGHT
        - span_count * SPAN_WEIGHT
        + allocation.utilization * UTILIZATION_WEIGHT
    )
    if span_count == 0:
        score += INTEGER_FIT_BONUS
    return score


class BandSelector:
    """Chooses the band height and allocation for one step of a sheet.

    Attributes:
        config: Tuning of the current planning attempt.
        kerf: Saw kerf.
        allocator: SpanAllocator sharing the same kerf.
    """

    def __init__(self, config: PackingConfig, kerf: float) -> None:
        self.config = config
        self.kerf = kerf
        self.allocator = SpanAllocator(kerf)

    def select(
        self,
        parts: Sequence[UnitPart],
        band_width: float,
        available_height: float,
    ) -> BandChoice | None:
        """Pick the best band for the free height.

        Args:
            parts: Remaining parts.
            band_width: Sheet width.
            available_height: Free height starting at the band position.

        Returns:
            The winning BandChoice, or None when no candidate height yields a
            valid, non-empty band.
        """
        threshold = sliver_threshold(parts, self.kerf, self.config.sliver_factor)
        best: BandChoice | None = None

        for height in candidate_heights(
            parts, band_width, available_height, self.config.top_k
        ):
            allocation = self.allocator.allocate(parts, height, band_width, threshold)
            if allocation.is_empty or not allocation.is_valid(threshold):
                continue

            base = score_band(allocation, threshold)
            lookahead = self.approximate_next_score(
                allocation.remaining,
                band_width,
                available_height - height - self.kerf,
            )
            total = base + self.config.lookahead_weight * lookahead

            logger.debug(
                "Band candidate h=%.1f: %d parts, base %.3f, lookahead %.3f",
                height,
                len(allocation.placements),
                base,
                lookahead,
            )

            # strict comparison keeps the first-seen (taller) candidate on ties
            if best is None or total > best.total_score:
                best = BandChoice(
                    allocation=allocation,
                    base_score=base,
                    lookahead_score=lookahead,
                    total_score=total,
                )

        return best

    def approximate_next_score(
        self,
        parts: Sequence[UnitPart],
        band_width: float,
        available_height: float,
    ) -> float:
        """Best base score of a hypothetical next band, without lookahead.

        This never recurses further: the next band is judged on its own.

        Returns:
            0.0 when nothing remains to place, EMPTY_BAND_SCORE when parts
            remain but no valid band fits, otherwise the best base score.
        """
        if not parts:
            return 0.0
        threshold = sliver_threshold(parts, self.kerf, self.config.sliver_factor)
        best = EMPTY_BAND_SCORE
        found = False
        for height in candidate_heights(
            parts, band_width, available_height, self.config.top_k
        ):
            allocation = self.allocator.allocate(parts, height, band_width, threshold)
            if allocation.is_empty or not allocation.is_valid(threshold):
                continue
            score = score_band(allocation, threshold)
            if not found or score > best:
                best = score
                found = True
        return best
