"""Cut planning endpoint."""

from fastapi import APIRouter, Query

from cutplan.application.config import CutPlanConfiguration
from cutplan.domain.value_objects import PackingMode
from cutplan.web.dependencies import PlanCommandDep
from cutplan.web.schemas.responses import PackingResultSchema

router = APIRouter(prefix="/pack", tags=["pack"])


@router.post("", response_model=PackingResultSchema)
def pack_job(
    config: CutPlanConfiguration,
    command: PlanCommandDep,
    mode: PackingMode | None = Query(default=None, description="Override the job mode"),
) -> PackingResultSchema:
    """Compute the cutting plan of a job.

    Declared sync so FastAPI runs the computation on its worker thread pool
    instead of blocking the event loop.

    Args:
        config: Job configuration (same schema as job files).
        command: Planning command.
        mode: Optional packing mode override.

    Returns:
        Sheets with placements and cuts, unplaced parts and totals.
    """
    result = command.execute(config, mode=mode)
    return PackingResultSchema.from_result(result)
