"""Local repair of a sheet's last, under-utilized band."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cutplan.domain.services.packing.band_selector import candidate_heights
from cutplan.domain.services.packing.config import TAIL_RETRY_ALTERNATES, PackingConfig
from cutplan.domain.services.packing.span_allocator import (
    BandAllocation,
    SpanAllocator,
    sliver_threshold,
)
from cutplan.domain.value_objects import quantize

if TYPE_CHECKING:
    from cutplan.domain.services.packing.sheet_builder import SheetDraft

logger = logging.getLogger(__name__)


class TailRetryController:
    """Replaces a poor final band with a better alternate height.

    When the last band's utilization is below the configured threshold, the
    draft as it was before that band is re-evaluated with up to two other
    candidate heights. The best alternate is kept only if it covers strictly
    more area than the original band. Nothing else on the sheet changes.

    Attributes:
        config: Tuning of the current planning attempt.
        kerf: Saw kerf.
    """

    def __init__(self, config: PackingConfig, kerf: float) -> None:
        self.config = config
        self.kerf = kerf
        self.allocator = SpanAllocator(kerf)

    def should_retry(self, band: BandAllocation) -> bool:
        """Check whether the band is poor enough to trigger a retry."""
        return band.utilization < self.config.tail_utilization_threshold

    def repair(
        self,
        before: SheetDraft,
        band: BandAllocation,
        after: SheetDraft,
    ) -> SheetDraft:
        """Try to swap the last band for a fuller one.

        Args:
            before: Draft snapshot taken just before the last band was added.
            band: The last band as originally chosen.
            after: Draft including the original last band.

        Returns:
            The draft with the replacement band, or ``after`` unchanged.
        """
        if not self.should_retry(band):
            return after

        attempts = min(TAIL_RETRY_ALTERNATES, self.config.max_retries)
        if attempts <= 0:
            return after

        chosen_key = quantize(band.height)
        alternates = [
            height
            for height in candidate_heights(
                before.remaining,
                before.width,
                before.available_height,
                self.config.top_k,
            )
            if quantize(height) != chosen_key
        ][:attempts]

        threshold = sliver_threshold(
            before.remaining, self.kerf, self.config.sliver_factor
        )
        best: BandAllocation | None = None
        best_area = band.used_area

        for height in alternates:
            allocation = self.allocator.allocate(
                before.remaining, height, before.width, threshold
            )
            if allocation.is_empty or not allocation.is_valid(threshold):
                continue
            if allocation.used_area > best_area:
                best = allocation
                best_area = allocation.used_area

        if best is None:
            logger.debug(
                "Tail retry kept band h=%.1f (utilization %.2f)",
                band.height,
                band.utilization,
            )
            return after

        logger.debug(
            "Tail retry replaced band h=%.1f with h=%.1f (%.0f -> %.0f used area)",
            band.height,
            best.height,
            band.used_area,
            best.used_area,
        )
        return before.with_band(best)
