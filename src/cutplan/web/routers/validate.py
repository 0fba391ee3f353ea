"""Job validation endpoint."""

from fastapi import APIRouter

from cutplan.application.config import load_config_from_dict, validate_config
from cutplan.web.schemas.requests import ConfigValidateRequest
from cutplan.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_job(request: ConfigValidateRequest) -> ValidationResultSchema:
    """Validate a job without planning it.

    Schema failures are answered with 422 by the ConfigError handler.
    """
    config = load_config_from_dict(request.config)
    result = validate_config(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[{"message": w.message, "path": w.path} for w in result.warnings],
    )
