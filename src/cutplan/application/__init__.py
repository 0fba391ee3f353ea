"""Application layer - use cases and orchestration."""

from cutplan.application.commands import PlanCutsCommand
from cutplan.application.jobs import PackingJob

__all__ = [
    "PackingJob",
    "PlanCutsCommand",
]
