"""REST API for cutplan."""

from cutplan.web.app import create_app

__all__ = ["create_app"]
