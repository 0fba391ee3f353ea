"""Request and response schemas for the REST API."""

from cutplan.web.schemas.requests import ConfigValidateRequest
from cutplan.web.schemas.responses import (
    PackingResultSchema,
    PlacementSchema,
    SheetSchema,
    UnplacedPartSchema,
    ValidationResultSchema,
)

__all__ = [
    "ConfigValidateRequest",
    "PackingResultSchema",
    "PlacementSchema",
    "SheetSchema",
    "UnplacedPartSchema",
    "ValidationResultSchema",
]
