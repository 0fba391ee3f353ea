"""Result entities produced by the cutting-layout engine.

A Sheet is one physical board with its placements and the distinct cut
coordinates recorded while it was built. A PackingResult collects the sheets
of one planning run together with the parts that could not be placed.
"""

from __future__ import annotations

from dataclasses import dataclass

from cutplan.domain.value_objects import PlacedPart, UnitPart


@dataclass(frozen=True)
class Sheet:
    """A finalized board layout.

    Attributes:
        width: Board width (after any external trimming).
        height: Board height (after any external trimming).
        placed: Placed parts in placement order.
        cuts_x: Sorted distinct X coordinates of vertical cuts.
        cuts_y: Sorted distinct Y coordinates of horizontal cuts.
    """

    width: float
    height: float
    placed: tuple[PlacedPart, ...]
    cuts_x: tuple[float, ...] = ()
    cuts_y: tuple[float, ...] = ()

    @property
    def used_area(self) -> float:
        """Total area covered by placed parts."""
        return sum(p.area for p in self.placed)

    @property
    def total_area(self) -> float:
        return self.width * self.height

    @property
    def efficiency(self) -> float:
        """Used area as a percentage of the board area."""
        if self.total_area <= 0:
            return 0.0
        return self.used_area / self.total_area * 100

    @property
    def cutting_count(self) -> int:
        """Number of distinct cut lines on this sheet."""
        return len(self.cuts_x) + len(self.cuts_y)

    @property
    def piece_count(self) -> int:
        return len(self.placed)


@dataclass(frozen=True)
class PackingResult:
    """Complete outcome of a planning run.

    Attributes:
        bins: Sheets in cutting order.
        unplaced: Unit parts that no strategy could place.
        total_efficiency: Area-weighted efficiency across all sheets (0-100).
        mode: Tag of the strategy configuration that produced the result.
    """

    bins: tuple[Sheet, ...]
    unplaced: tuple[UnitPart, ...]
    total_efficiency: float
    mode: str

    @classmethod
    def from_sheets(
        cls,
        sheets: list[Sheet] | tuple[Sheet, ...],
        unplaced: list[UnitPart] | tuple[UnitPart, ...],
        mode: str,
    ) -> PackingResult:
        """Build a result, deriving the total efficiency from the sheets."""
        return cls(
            bins=tuple(sheets),
            unplaced=tuple(unplaced),
            total_efficiency=calculate_total_efficiency(sheets),
            mode=mode,
        )

    @property
    def sheet_count(self) -> int:
        return len(self.bins)

    @property
    def placed_count(self) -> int:
        """Total number of unit parts placed across all sheets."""
        return sum(sheet.piece_count for sheet in self.bins)

    @property
    def total_cuts(self) -> int:
        """Sum of cutting counts across all sheets."""
        return sum(sheet.cutting_count for sheet in self.bins)

    @property
    def all_placed(self) -> bool:
        return not self.unplaced


def calculate_total_efficiency(sheets: list[Sheet] | tuple[Sheet, ...]) -> float:
    """Area-weighted efficiency percentage across sheets.

    Returns:
        0.0 for an empty sheet list, otherwise total used area over total
        board area, times 100.
    """
    if not sheets:
        return 0.0
    total_area = sum(sheet.total_area for sheet in sheets)
    if total_area <= 0:
        return 0.0
    total_used = sum(sheet.used_area for sheet in sheets)
    return total_used / total_area * 100
