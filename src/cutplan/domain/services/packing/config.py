"""Tuning configuration for the banded packing strategy.

Every planning attempt receives its own frozen PackingConfig; the
orchestrator derives sweep and conservative variants with
``dataclasses.replace`` instead of mutating shared scoring behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

# Lexicographic score weights for band evaluation.
SLIVER_WEIGHT: float = 1_000_000.0
SPAN_WEIGHT: float = 1_000.0
UTILIZATION_WEIGHT: float = 10.0
INTEGER_FIT_BONUS: float = 1.0

# Alternate heights a tail retry evaluates per trigger.
TAIL_RETRY_ALTERNATES: int = 2


@dataclass(frozen=True)
class PackingConfig:
    """Configuration for one run of the banded strategy.

    Attributes:
        name: Short tag identifying the configuration in results.
        top_k: Maximum number of candidate band heights evaluated per band.
        lookahead_weight: Weight (lambda) of the one-level lookahead score.
        tail_utilization_threshold: Last-band utilization below which the
            tail retry runs.
        sliver_factor: Multiplier applied to the sliver threshold.
        max_retries: Maximum alternate-height attempts per sheet.
    """

    name: str = "baseline"
    top_k: int = 5
    lookahead_weight: float = 0.4
    tail_utilization_threshold: float = 0.55
    sliver_factor: float = 1.0
    max_retries: int = 3

    def __post_init__(self) -> None:
        if self.top_k < 1:
            raise ValueError("top_k must be at least 1")
        if self.lookahead_weight < 0:
            raise ValueError("Lookahead weight must be non-negative")
        if not 0 <= self.tail_utilization_threshold <= 1:
            raise ValueError("Tail utilization threshold must be between 0 and 1")
        if self.sliver_factor < 0:
            raise ValueError("Sliver factor must be non-negative")
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")


@dataclass(frozen=True)
class StrategyPlan:
    """Escalation plan followed by the strategy orchestrator.

    Attributes:
        baseline: Configuration of the first banded attempt.
        sweep_weights: Lookahead weights tried when the baseline falls short.
        conservative_top_k: Candidate limit of the conservative attempt.
        conservative_sliver_factor: Sliver factor of the conservative attempt.
    """

    baseline: PackingConfig = field(default_factory=PackingConfig)
    sweep_weights: tuple[float, ...] = (0.2, 0.6)
    conservative_top_k: int = 2
    conservative_sliver_factor: float = 1.2

    def sweep_configs(self) -> list[PackingConfig]:
        """Baseline variants with swept lookahead weights."""
        return [
            replace(self.baseline, name=f"sweep-{weight:g}", lookahead_weight=weight)
            for weight in self.sweep_weights
        ]

    def conservative_config(self) -> PackingConfig:
        """Baseline variant with fewer candidates and a wider sliver margin."""
        return replace(
            self.baseline,
            name="conservative",
            top_k=self.conservative_top_k,
            sliver_factor=self.conservative_sliver_factor,
        )
