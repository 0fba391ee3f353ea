"""API routers for the REST API."""

from cutplan.web.routers.pack import router as pack_router
from cutplan.web.routers.validate import router as validate_router

__all__ = [
    "pack_router",
    "validate_router",
]
