"""Job file configuration: schema, loading, validation and adaptation."""

from cutplan.application.config.adapter import (
    config_to_plan,
    config_to_requests,
    effective_board,
)
from cutplan.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from cutplan.application.config.schema import (
    SUPPORTED_VERSIONS,
    BoardConfig,
    CutPlanConfiguration,
    EngineConfigSchema,
    PartConfig,
)
from cutplan.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "BoardConfig",
    "ConfigError",
    "CutPlanConfiguration",
    "EngineConfigSchema",
    "PartConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_plan",
    "config_to_requests",
    "effective_board",
    "load_config",
    "load_config_from_dict",
    "validate_config",
]
