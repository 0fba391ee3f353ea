"""Guillotine cutting-layout planner.

Packs rectangular parts onto stock boards in layouts a panel saw can cut
with straight edge-to-edge passes, accounting for blade kerf.
"""

from cutplan.domain import PackingMode, PackingResult, PartRequest, Sheet
from cutplan.domain.services import (
    CancellationToken,
    GuillotineCutPlanner,
    PackingCancelledError,
    PackingConfig,
    StrategyPlan,
)

__version__ = "1.0.0"

__all__ = [
    "CancellationToken",
    "GuillotineCutPlanner",
    "PackingCancelledError",
    "PackingConfig",
    "PackingMode",
    "PackingResult",
    "PartRequest",
    "Sheet",
    "StrategyPlan",
    "__version__",
]
