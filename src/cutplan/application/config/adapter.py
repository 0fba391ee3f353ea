"""Conversion of validated job files into domain objects."""

from cutplan.application.config.schema import CutPlanConfiguration, EngineConfigSchema
from cutplan.domain.services import PackingConfig, StrategyPlan
from cutplan.domain.value_objects import PartRequest


def config_to_requests(config: CutPlanConfiguration) -> list[PartRequest]:
    """Convert the part list to PartRequests, preserving order."""
    return [
        PartRequest(
            width=part.width,
            height=part.height,
            quantity=part.quantity,
            rotatable=part.rotatable,
            label=part.label,
        )
        for part in config.parts
    ]


def config_to_plan(engine: EngineConfigSchema) -> StrategyPlan:
    """Convert engine tuning to the orchestrator's StrategyPlan."""
    baseline = PackingConfig(
        top_k=engine.top_k,
        lookahead_weight=engine.lookahead_weight,
        tail_utilization_threshold=engine.tail_utilization_threshold,
        sliver_factor=engine.sliver_factor,
        max_retries=engine.max_retries,
    )
    return StrategyPlan(
        baseline=baseline,
        sweep_weights=tuple(engine.sweep_weights),
    )


def effective_board(config: CutPlanConfiguration) -> tuple[float, float]:
    """Board size the engine sees: the stock board minus the trim margin."""
    return config.board.usable_width, config.board.usable_height
