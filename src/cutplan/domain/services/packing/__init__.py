"""Guillotine cutting-layout engine.

This package turns a board size, a kerf and a part list into sheets with
exact placements and cut coordinates:

- expansion: part requests to unit parts
- span_allocator: same-height parts across one band, sliver-free
- band_selector: band height choice with score and one-level lookahead
- sheet_builder: bands stacked into a sheet
- tail_retry: repair of a poor last band
- width_strip: strip-based fallback that always makes progress
- orchestrator: the escalation chain and public GuillotineCutPlanner
"""

from cutplan.domain.services.packing.band_selector import (
    BandChoice,
    BandSelector,
    candidate_heights,
    score_band,
)
from cutplan.domain.services.packing.cancellation import (
    CancellationToken,
    PackingCancelledError,
)
from cutplan.domain.services.packing.config import PackingConfig, StrategyPlan
from cutplan.domain.services.packing.expansion import expand_requests
from cutplan.domain.services.packing.orchestrator import GuillotineCutPlanner
from cutplan.domain.services.packing.sheet_builder import SheetBuilder, SheetDraft
from cutplan.domain.services.packing.span_allocator import (
    BandAllocation,
    SpanAllocator,
    sliver_threshold,
)
from cutplan.domain.services.packing.tail_retry import TailRetryController
from cutplan.domain.services.packing.width_strip import WidthStripPacker

__all__ = [
    "BandAllocation",
    "BandChoice",
    "BandSelector",
    "CancellationToken",
    "GuillotineCutPlanner",
    "PackingCancelledError",
    "PackingConfig",
    "SheetBuilder",
    "SheetDraft",
    "SpanAllocator",
    "StrategyPlan",
    "TailRetryController",
    "WidthStripPacker",
    "candidate_heights",
    "expand_requests",
    "score_band",
    "sliver_threshold",
]
