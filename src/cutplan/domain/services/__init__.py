"""Domain services for cutting-layout planning."""

from cutplan.domain.services.packing import (
    CancellationToken,
    GuillotineCutPlanner,
    PackingCancelledError,
    PackingConfig,
    StrategyPlan,
)

__all__ = [
    "CancellationToken",
    "GuillotineCutPlanner",
    "PackingCancelledError",
    "PackingConfig",
    "StrategyPlan",
]
