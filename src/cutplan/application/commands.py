"""Application commands (use cases) for cut planning."""

from __future__ import annotations

import logging

from cutplan.application.config.adapter import (
    config_to_plan,
    config_to_requests,
    effective_board,
)
from cutplan.application.config.schema import CutPlanConfiguration
from cutplan.domain.entities import PackingResult
from cutplan.domain.services import CancellationToken, GuillotineCutPlanner
from cutplan.domain.value_objects import PackingMode

logger = logging.getLogger(__name__)


class PlanCutsCommand:
    """Command to compute the cutting layout of a job.

    Translates a validated job configuration into planner arguments: the
    trimmed board, the kerf, the part requests and the engine tuning.
    """

    def execute(
        self,
        config: CutPlanConfiguration,
        mode: PackingMode | str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> PackingResult:
        """Execute the planning command.

        Args:
            config: Validated job configuration.
            mode: Optional override of the job's packing mode.
            cancel_token: Optional token to stop the run between bands.

        Returns:
            PackingResult with sheets in the trimmed board's coordinates.

        Raises:
            PackingCancelledError: If the token is cancelled mid-run.
        """
        board_width, board_height = effective_board(config)
        planner = GuillotineCutPlanner(
            board_width,
            board_height,
            kerf=config.kerf,
            plan=config_to_plan(config.engine),
        )
        selected_mode = PackingMode(mode) if mode is not None else config.mode

        logger.debug(
            "Planning job: %d part rows, %d units, trim %g",
            len(config.parts),
            config.total_quantity,
            config.board.trim_margin,
        )
        return planner.pack(config_to_requests(config), selected_mode, cancel_token)
