"""Validation structures and cutting advisory checks.

Schema validation already rejects malformed jobs. The checks here look at a
valid job the way a shop would: parts that can never be cut from the board,
parts too small to handle safely, and rotation locks that make a part
unplaceable.
"""

from dataclasses import dataclass, field
from typing import Any

from cutplan.application.config.adapter import effective_board
from cutplan.application.config.schema import CutPlanConfiguration, PartConfig

# Smallest part side that can be cut and handled safely, in millimetres
MIN_PART_SIDE: float = 10.0


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "parts[0].width")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: List of blocking validation errors
        warnings: List of non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the configuration has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def _fits(width: float, height: float, board_width: float, board_height: float) -> bool:
    return width <= board_width and height <= board_height


def _check_part(
    index: int,
    part: PartConfig,
    board_width: float,
    board_height: float,
) -> ValidationResult:
    result = ValidationResult()
    path = f"parts[{index}]"
    size = f"{part.width:g}x{part.height:g}"

    fits_upright = _fits(part.width, part.height, board_width, board_height)
    fits_rotated = _fits(part.height, part.width, board_width, board_height)

    if not fits_upright and not fits_rotated:
        result.add_warning(
            path=path,
            message=(
                f"Part {size} does not fit the usable board "
                f"{board_width:g}x{board_height:g}; all {part.quantity} "
                "will be left unplaced"
            ),
            suggestion="Use a larger board or split the part",
        )
    elif not fits_upright and not part.rotatable:
        result.add_warning(
            path=f"{path}.rotatable",
            message=(
                f"Part {size} only fits the board rotated but rotation is "
                "disabled; it will be left unplaced"
            ),
            suggestion="Allow rotation or swap width and height",
        )

    if min(part.width, part.height) < MIN_PART_SIDE:
        result.add_warning(
            path=path,
            message=(
                f"Part {size} has a side below {MIN_PART_SIDE:g} mm and may be "
                "unsafe to cut"
            ),
        )

    return result


def validate_config(config: CutPlanConfiguration) -> ValidationResult:
    """Check a schema-valid job for cutting problems.

    Args:
        config: A validated job configuration.

    Returns:
        ValidationResult with warnings for parts that cannot or should not
        be cut as requested.
    """
    result = ValidationResult()
    board_width, board_height = effective_board(config)

    for index, part in enumerate(config.parts):
        result.merge(_check_part(index, part, board_width, board_height))

    return result
