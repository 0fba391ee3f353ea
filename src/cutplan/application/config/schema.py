"""Pydantic configuration schema models for cutting jobs.

This module defines the schema of JSON job files: the board, the saw kerf,
the part list and optional engine tuning. It uses Pydantic v2 for validation
and serialization.

The PackingMode enum is reused from the domain layer to ensure consistency
and avoid duplication.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cutplan.domain.value_objects import PackingMode

# Supported schema versions for job files
# Version 1.0: Initial schema with board, kerf, parts and engine tuning
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

# Hard limits for job files, in millimetres
MIN_BOARD_SIDE: float = 100.0
MAX_BOARD_SIDE: float = 5000.0
MAX_KERF: float = 10.0
MAX_TRIM_MARGIN: float = 50.0
MAX_QUANTITY: int = 999
MAX_PART_ROWS: int = 500

# Default board: a full 2440 x 1220 mm panel cut with a 4.2 mm blade
DEFAULT_BOARD_WIDTH: float = 2440.0
DEFAULT_BOARD_HEIGHT: float = 1220.0
DEFAULT_KERF: float = 4.2


class BoardConfig(BaseModel):
    """Stock board dimensions.

    Attributes:
        width: Board width in millimetres.
        height: Board height in millimetres.
        trim_margin: Edge strip trimmed off every side before cutting.
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(
        default=DEFAULT_BOARD_WIDTH,
        ge=MIN_BOARD_SIDE,
        le=MAX_BOARD_SIDE,
        description="Board width in mm",
    )
    height: float = Field(
        default=DEFAULT_BOARD_HEIGHT,
        ge=MIN_BOARD_SIDE,
        le=MAX_BOARD_SIDE,
        description="Board height in mm",
    )
    trim_margin: float = Field(
        default=0.0,
        ge=0,
        le=MAX_TRIM_MARGIN,
        description="Edge trim on each side in mm",
    )

    @model_validator(mode="after")
    def validate_usable_area(self) -> "BoardConfig":
        """Ensure trimming leaves a board with positive area."""
        if self.usable_width <= 0 or self.usable_height <= 0:
            raise ValueError(
                f"Trim margin {self.trim_margin} leaves no usable board area"
            )
        return self

    @property
    def usable_width(self) -> float:
        """Board width after trimming both edges."""
        return self.width - 2 * self.trim_margin

    @property
    def usable_height(self) -> float:
        """Board height after trimming both edges."""
        return self.height - 2 * self.trim_margin


class PartConfig(BaseModel):
    """One part order line.

    Attributes:
        width: Part width in millimetres.
        height: Part height in millimetres.
        quantity: Number of identical parts.
        rotatable: Whether the part may be turned 90 degrees.
        label: Optional name carried to placements and the unplaced list.
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0, description="Part width in mm")
    height: float = Field(..., gt=0, description="Part height in mm")
    quantity: int = Field(default=1, ge=1, le=MAX_QUANTITY)
    rotatable: bool = Field(default=True, description="Allow 90 degree rotation")
    label: str | None = Field(default=None, max_length=100)


class EngineConfigSchema(BaseModel):
    """Tuning of the packing engine.

    Defaults match the built-in baseline; most jobs never set this section.

    Attributes:
        top_k: Candidate band heights evaluated per band.
        lookahead_weight: Weight of the one-level lookahead score.
        tail_utilization_threshold: Last-band utilization that triggers a retry.
        sliver_factor: Multiplier on the sliver threshold.
        max_retries: Alternate heights a tail retry may try.
        sweep_weights: Lookahead weights tried when the baseline falls short.
    """

    model_config = ConfigDict(extra="forbid")

    top_k: int = Field(default=5, ge=1, le=20)
    lookahead_weight: float = Field(default=0.4, ge=0, le=5)
    tail_utilization_threshold: float = Field(default=0.55, ge=0, le=1)
    sliver_factor: float = Field(default=1.0, ge=0, le=5)
    max_retries: int = Field(default=3, ge=0, le=10)
    sweep_weights: list[float] = Field(default_factory=lambda: [0.2, 0.6])

    @field_validator("sweep_weights")
    @classmethod
    def validate_sweep_weights(cls, v: list[float]) -> list[float]:
        """Validate that swept lookahead weights are non-negative."""
        for weight in v:
            if weight < 0:
                raise ValueError("Sweep weights must be non-negative")
        return v


class CutPlanConfiguration(BaseModel):
    """Root model of a cutting job file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        board: Stock board dimensions and trim
        kerf: Saw blade kerf in millimetres
        mode: Packing mode ("auto" or "horizontal")
        parts: Part order lines, in cutting priority order
        engine: Optional engine tuning

    Example:
        >>> config = CutPlanConfiguration(
        ...     schema_version="1.0",
        ...     parts=[PartConfig(width=600, height=400, quantity=4)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    board: BoardConfig = Field(default_factory=BoardConfig)
    kerf: float = Field(default=DEFAULT_KERF, ge=0, le=MAX_KERF)
    mode: PackingMode = PackingMode.AUTO
    parts: list[PartConfig] = Field(..., min_length=1, max_length=MAX_PART_ROWS)
    engine: EngineConfigSchema = Field(default_factory=EngineConfigSchema)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @property
    def total_quantity(self) -> int:
        """Number of unit parts the job expands to."""
        return sum(part.quantity for part in self.parts)
