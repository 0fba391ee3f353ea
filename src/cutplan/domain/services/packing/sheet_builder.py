"""Sheet construction from successive horizontal bands."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from cutplan.domain.entities import Sheet
from cutplan.domain.services.packing.band_selector import BandSelector
from cutplan.domain.services.packing.cancellation import CancellationToken
from cutplan.domain.services.packing.config import PackingConfig
from cutplan.domain.services.packing.span_allocator import BandAllocation
from cutplan.domain.services.packing.tail_retry import TailRetryController
from cutplan.domain.value_objects import EPSILON, PlacedPart, UnitPart, quantize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetDraft:
    """Immutable state of a sheet under construction.

    Each accepted band produces a new draft, so any earlier draft doubles as
    a rollback snapshot.

    Attributes:
        width: Sheet width.
        height: Sheet height.
        kerf: Saw kerf between bands.
        remaining: Parts not yet placed, in input order.
        placed: Parts placed so far.
        cuts_x: Distinct X cut coordinates so far.
        cuts_y: Distinct Y cut coordinates so far.
        next_y: Y position where the next band would start.
        band_count: Number of bands accepted.
    """

    width: float
    height: float
    kerf: float
    remaining: tuple[UnitPart, ...]
    placed: tuple[PlacedPart, ...] = ()
    cuts_x: frozenset[float] = field(default_factory=frozenset)
    cuts_y: frozenset[float] = field(default_factory=frozenset)
    next_y: float = 0.0
    band_count: int = 0

    @property
    def available_height(self) -> float:
        """Free height below the last band."""
        return self.height - self.next_y

    def with_band(self, band: BandAllocation) -> SheetDraft:
        """Return a new draft with the band placed at ``next_y``.

        Registers the band's bottom edge as a Y cut and every part's right
        edge as an X cut, unless flush with the sheet edge.
        """
        y = self.next_y
        placements = tuple(
            PlacedPart(part=p.part, x=p.x, y=y) for p in band.placements
        )

        cuts_x = set(self.cuts_x)
        for placement in placements:
            if placement.right_edge < self.width - EPSILON:
                cuts_x.add(quantize(placement.right_edge))

        cuts_y = set(self.cuts_y)
        band_bottom = y + band.height
        if band_bottom < self.height - EPSILON:
            cuts_y.add(quantize(band_bottom))

        return SheetDraft(
            width=self.width,
            height=self.height,
            kerf=self.kerf,
            remaining=band.remaining,
            placed=self.placed + placements,
            cuts_x=frozenset(cuts_x),
            cuts_y=frozenset(cuts_y),
            next_y=band_bottom + self.kerf,
            band_count=self.band_count + 1,
        )

    def finalize(self) -> Sheet:
        return Sheet(
            width=self.width,
            height=self.height,
            placed=self.placed,
            cuts_x=tuple(sorted(self.cuts_x)),
            cuts_y=tuple(sorted(self.cuts_y)),
        )


class SheetBuilder:
    """Fills one sheet band by band.

    Attributes:
        config: Tuning of the current planning attempt.
        sheet_width: Board width.
        sheet_height: Board height.
        kerf: Saw kerf.
    """

    def __init__(
        self,
        config: PackingConfig,
        sheet_width: float,
        sheet_height: float,
        kerf: float,
    ) -> None:
        self.config = config
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        self.kerf = kerf
        self.selector = BandSelector(config, kerf)
        self.tail_retry = TailRetryController(config, kerf)

    def build(
        self,
        parts: Sequence[UnitPart],
        cancel_token: CancellationToken | None = None,
    ) -> tuple[Sheet | None, tuple[UnitPart, ...]]:
        """Build one sheet from the remaining parts.

        Args:
            parts: Parts still to place.
            cancel_token: Optional token checked before every band.

        Returns:
            Tuple of (sheet, remaining parts). The sheet is None when not a
            single band could be placed, which means no further progress.

        Raises:
            PackingCancelledError: If the token is cancelled.
        """
        draft = SheetDraft(
            width=self.sheet_width,
            height=self.sheet_height,
            kerf=self.kerf,
            remaining=tuple(parts),
        )
        last: tuple[SheetDraft, BandAllocation] | None = None

        while draft.remaining and draft.available_height > EPSILON:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            choice = self.selector.select(
                draft.remaining, self.sheet_width, draft.available_height
            )
            if choice is None:
                break

            last = (draft, choice.allocation)
            draft = draft.with_band(choice.allocation)

        if last is None:
            return None, tuple(parts)

        before, band = last
        draft = self.tail_retry.repair(before, band, draft)

        sheet = draft.finalize()
        logger.debug(
            "Sheet built: %d bands, %d parts, %.1f%% efficiency, %d cuts",
            draft.band_count,
            sheet.piece_count,
            sheet.efficiency,
            sheet.cutting_count,
        )
        return sheet, draft.remaining
