"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class ConfigValidateRequest(BaseModel):
    """Request to validate a raw job configuration."""

    config: dict[str, Any] = Field(..., description="Job configuration to validate")
