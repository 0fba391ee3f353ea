"""Value objects for the cutting-layout domain.

All classes are frozen dataclasses. Unlike the validated value objects of the
configuration layer, these accept degenerate values (zero or negative sizes
and quantities) without raising: the engine treats such parts as
unplaceable instead of failing the whole job.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

# Tolerance for comparing millimetre dimensions produced by float arithmetic.
EPSILON: float = 1e-6

# Decimal places used to turn float dimensions into stable mapping keys.
QUANTIZE_DIGITS: int = 6


def quantize(value: float) -> float:
    """Return a dimension rounded to a stable key for grouping and matching."""
    return round(value, QUANTIZE_DIGITS)


def same_length(a: float, b: float) -> bool:
    """Check whether two dimensions are equal within tolerance."""
    return abs(a - b) <= EPSILON


class PackingMode(str, Enum):
    """Strategy selector accepted by the planner."""

    AUTO = "auto"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class PartRequest:
    """A compact part order line: dimensions, quantity and rotation freedom.

    Attributes:
        width: Part width in millimetres.
        height: Part height in millimetres.
        quantity: Number of identical parts required.
        rotatable: Whether the part may be turned 90 degrees on the sheet.
        label: Optional caller-supplied name, copied to every unit.
    """

    width: float
    height: float
    quantity: int
    rotatable: bool = True
    label: str | None = None

    @property
    def area(self) -> float:
        """Total area of all units in this request."""
        return self.width * self.height * max(self.quantity, 0)


@dataclass(frozen=True)
class UnitPart:
    """One physical part expanded from a PartRequest.

    ``width``/``height`` are the working dimensions and may be swapped with
    respect to the original request; ``rotated`` records that swap.

    Attributes:
        id: Unique identifier ``"<request index>-<unit index>"``.
        request_index: Position of the originating request.
        original_width: Width as requested.
        original_height: Height as requested.
        width: Current working width.
        height: Current working height.
        rotatable: Whether rotation is allowed.
        rotated: True when the working dimensions are swapped.
        label: Name of the originating request, if any.
    """

    id: str
    request_index: int
    original_width: float
    original_height: float
    width: float
    height: float
    rotatable: bool = True
    rotated: bool = False
    label: str | None = None

    @property
    def area(self) -> float:
        """Working area of the part."""
        return self.width * self.height

    @property
    def longest_side(self) -> float:
        return max(self.width, self.height)

    @property
    def shortest_side(self) -> float:
        return min(self.width, self.height)

    @property
    def is_degenerate(self) -> bool:
        """True when the part has no positive area and can never be cut."""
        return self.width <= 0 or self.height <= 0

    def turned(self) -> UnitPart:
        """Return this part rotated by 90 degrees."""
        return replace(
            self,
            width=self.height,
            height=self.width,
            rotated=not self.rotated,
        )

    def fits_within(self, width: float, height: float) -> bool:
        """Check if the working orientation fits inside a width x height area."""
        return (
            not self.is_degenerate
            and self.width <= width + EPSILON
            and self.height <= height + EPSILON
        )

    def oriented_to_fit(self, width: float, height: float) -> UnitPart | None:
        """Return the part in an orientation that fits, preferring no rotation.

        Returns:
            The part as-is if it fits, the rotated part if only that fits and
            rotation is allowed, otherwise None.
        """
        if self.fits_within(width, height):
            return self
        if self.rotatable:
            rotated = self.turned()
            if rotated.fits_within(width, height):
                return rotated
        return None


@dataclass(frozen=True)
class PlacedPart:
    """A unit part at its final position on a sheet.

    Coordinates are measured from the sheet's top-left corner. Kerf is
    already accounted for in the coordinates, so the rectangles of two parts
    on one sheet never overlap.

    Attributes:
        part: The unit part in its final orientation.
        x: Left edge position.
        y: Top edge position.
    """

    part: UnitPart
    x: float
    y: float

    @property
    def id(self) -> str:
        return self.part.id

    @property
    def width(self) -> float:
        return self.part.width

    @property
    def height(self) -> float:
        return self.part.height

    @property
    def rotated(self) -> bool:
        return self.part.rotated

    @property
    def original_width(self) -> float:
        return self.part.original_width

    @property
    def original_height(self) -> float:
        return self.part.original_height

    @property
    def label(self) -> str | None:
        return self.part.label

    @property
    def right_edge(self) -> float:
        """X coordinate of the part's right edge."""
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        """Y coordinate of the part's bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def overlaps(self, other: PlacedPart) -> bool:
        """Check whether the interiors of two placed rectangles intersect.

        Rectangles that only share an edge do not overlap.
        """
        return (
            self.x < other.right_edge - EPSILON
            and other.x < self.right_edge - EPSILON
            and self.y < other.bottom_edge - EPSILON
            and other.y < self.bottom_edge - EPSILON
        )


@dataclass(frozen=True)
class Span:
    """A free horizontal interval inside a band.

    Attributes:
        start: X position where the interval begins.
        width: Length of the interval.
    """

    start: float
    width: float

    @property
    def end(self) -> float:
        return self.start + self.width
