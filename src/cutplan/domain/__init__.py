"""Domain layer - cutting-layout value objects, entities and services."""

from cutplan.domain.entities import PackingResult, Sheet, calculate_total_efficiency
from cutplan.domain.value_objects import (
    EPSILON,
    PackingMode,
    PartRequest,
    PlacedPart,
    Span,
    UnitPart,
    quantize,
    same_length,
)

__all__ = [
    "EPSILON",
    "PackingMode",
    "PackingResult",
    "PartRequest",
    "PlacedPart",
    "Sheet",
    "Span",
    "UnitPart",
    "calculate_total_efficiency",
    "quantize",
    "same_length",
]
