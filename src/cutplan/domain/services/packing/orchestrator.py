"""Strategy orchestration for guillotine cutting layouts.

The banded strategy (bands chosen by score with lookahead, spans filled
without slivers, a tail retry per sheet) runs first with a baseline
configuration. Unless it places every part that fits a board on as few sheets
as the part area allows, the orchestrator escalates: lookahead sweep, a
conservative configuration, and finally the width-strip strategy, which places
anything that fits a sheet. The attempt with the fewest unplaced parts wins,
then the one with the fewest sheets.
"""

from __future__ import annotations

import logging
import math
from functools import partial
from typing import Callable, Sequence

from cutplan.domain.entities import PackingResult, Sheet
from cutplan.domain.services.packing.cancellation import CancellationToken
from cutplan.domain.services.packing.config import PackingConfig, StrategyPlan
from cutplan.domain.services.packing.expansion import expand_requests
from cutplan.domain.services.packing.sheet_builder import SheetBuilder
from cutplan.domain.services.packing.width_strip import WidthStripPacker
from cutplan.domain.value_objects import EPSILON, PackingMode, PartRequest, UnitPart

logger = logging.getLogger(__name__)

HORIZONTAL_TAG = "horizontal"
AUTO_PREFIX = "auto"


def _rank(result: PackingResult) -> tuple[int, int, float]:
    """Sort key for attempts: fewer unplaced parts, fewer sheets, then efficiency."""
    return (len(result.unplaced), result.sheet_count, -result.total_efficiency)


class GuillotineCutPlanner:
    """Plans guillotine cutting layouts for a board size and kerf.

    Example:
        >>> planner = GuillotineCutPlanner(2440, 1220, kerf=4.2)
        >>> result = planner.pack([PartRequest(600, 400, 4)])
        >>> result.sheet_count
        1

    Attributes:
        board_width: Board width after any trimming.
        board_height: Board height after any trimming.
        kerf: Saw kerf (negative values are treated as 0).
        plan: Escalation plan and baseline tuning.
    """

    def __init__(
        self,
        board_width: float,
        board_height: float,
        kerf: float = 0.0,
        plan: StrategyPlan | None = None,
    ) -> None:
        if kerf < 0:
            logger.warning("Negative kerf %.3f treated as 0", kerf)
            kerf = 0.0
        self.board_width = board_width
        self.board_height = board_height
        self.kerf = kerf
        self.plan = plan or StrategyPlan()

    def pack(
        self,
        requests: Sequence[PartRequest],
        mode: PackingMode | str = PackingMode.AUTO,
        cancel_token: CancellationToken | None = None,
    ) -> PackingResult:
        """Compute sheets for the requested parts.

        Args:
            requests: Part requests in caller order.
            mode: "auto" for the full escalation chain, "horizontal" for the
                width-strip strategy alone.
            cancel_token: Optional cooperative cancellation token.

        Returns:
            PackingResult with sheets, unplaced parts and the strategy tag.

        Raises:
            ValueError: If ``mode`` is not a known mode.
            PackingCancelledError: If the token is cancelled mid-run.
        """
        mode = PackingMode(mode)
        parts = expand_requests(requests)

        logger.info(
            "Packing %d parts on %gx%g boards (kerf %g, mode %s)",
            len(parts),
            self.board_width,
            self.board_height,
            self.kerf,
            mode.value,
        )

        if mode is PackingMode.HORIZONTAL:
            result = self.pack_width_strips(parts, HORIZONTAL_TAG, cancel_token)
        else:
            result = self._pack_auto(parts, cancel_token)

        if result.unplaced:
            logger.warning(
                "%d of %d parts could not be placed", len(result.unplaced), len(parts)
            )
        return result

    def pack_banded(
        self,
        parts: Sequence[UnitPart],
        config: PackingConfig,
        cancel_token: CancellationToken | None = None,
    ) -> PackingResult:
        """Run the banded strategy with one configuration.

        Sheets are opened until everything is placed or a fresh sheet
        cannot take a single band.
        """
        builder = SheetBuilder(config, self.board_width, self.board_height, self.kerf)
        sheets: list[Sheet] = []
        remaining: tuple[UnitPart, ...] = tuple(parts)

        while remaining:
            sheet, remaining = builder.build(remaining, cancel_token)
            if sheet is None:
                break
            sheets.append(sheet)

        return PackingResult.from_sheets(
            sheets, remaining, mode=f"{AUTO_PREFIX}:{config.name}"
        )

    def pack_width_strips(
        self,
        parts: Sequence[UnitPart],
        tag: str = HORIZONTAL_TAG,
        cancel_token: CancellationToken | None = None,
    ) -> PackingResult:
        """Run the width-strip strategy."""
        packer = WidthStripPacker(self.board_width, self.board_height, self.kerf)
        sheets, remaining = packer.pack(parts, cancel_token)
        return PackingResult.from_sheets(sheets, remaining, mode=tag)

    def minimum_sheets(self, parts: Sequence[UnitPart]) -> int:
        """Lower bound on the sheets needed for every part that fits a board.

        The bound only counts area, so it ignores kerf and geometry.
        """
        sheet_area = self.board_width * self.board_height
        if sheet_area <= 0:
            return 0
        fitting_area = sum(
            part.area
            for part in parts
            if part.oriented_to_fit(self.board_width, self.board_height) is not None
        )
        return math.ceil(fitting_area / sheet_area - EPSILON)

    def _is_final(self, result: PackingResult, minimum_sheets: int) -> bool:
        """Check whether no later attempt could beat this result.

        Escalation only stops early when every unplaced part is too large for
        the board in any allowed orientation and the sheet count has reached
        the area lower bound.
        """
        stranded = any(
            part.oriented_to_fit(self.board_width, self.board_height) is not None
            for part in result.unplaced
        )
        return not stranded and result.sheet_count <= minimum_sheets

    def _pack_auto(
        self,
        parts: Sequence[UnitPart],
        cancel_token: CancellationToken | None,
    ) -> PackingResult:
        minimum = self.minimum_sheets(parts)

        best = self.pack_banded(parts, self.plan.baseline, cancel_token)
        self._log_attempt(best)
        if self._is_final(best, minimum):
            return best

        attempts: list[Callable[[], PackingResult]] = [
            *(
                partial(self.pack_banded, parts, config, cancel_token)
                for config in self.plan.sweep_configs()
            ),
            partial(
                self.pack_banded, parts, self.plan.conservative_config(), cancel_token
            ),
            partial(
                self.pack_width_strips,
                parts,
                f"{AUTO_PREFIX}:{HORIZONTAL_TAG}",
                cancel_token,
            ),
        ]
        for attempt in attempts:
            candidate = attempt()
            self._log_attempt(candidate)
            if _rank(candidate) < _rank(best):
                best = candidate
            if self._is_final(best, minimum):
                break
        return best

    def _log_attempt(self, result: PackingResult) -> None:
        logger.info(
            "Attempt %s: %d sheets, %d unplaced, %.1f%% efficiency",
            result.mode,
            result.sheet_count,
            len(result.unplaced),
            result.total_efficiency,
        )
