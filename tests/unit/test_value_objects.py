"""Tests for cutting-layout value objects and result entities."""

from __future__ import annotations

import pytest

from cutplan.domain.entities import PackingResult, Sheet, calculate_total_efficiency
from cutplan.domain.value_objects import (
    PackingMode,
    PartRequest,
    PlacedPart,
    Span,
    UnitPart,
    quantize,
    same_length,
)


def _unit(part_id: str, width: float, height: float, rotatable: bool = True) -> UnitPart:
    return UnitPart(
        id=part_id,
        request_index=0,
        original_width=width,
        original_height=height,
        width=width,
        height=height,
        rotatable=rotatable,
    )


# =============================================================================
# Helpers
# =============================================================================


class TestQuantize:
    """Tests for float keys and tolerant comparison."""

    def test_quantize_absorbs_float_noise(self) -> None:
        """0.1 + 0.2 and 0.3 map to the same key."""
        assert quantize(0.1 + 0.2) == quantize(0.3)

    def test_same_length_within_tolerance(self) -> None:
        assert same_length(500.0, 500.0000001)
        assert not same_length(500.0, 500.01)


class TestPackingMode:
    """Tests for the PackingMode enum."""

    def test_values(self) -> None:
        assert PackingMode("auto") is PackingMode.AUTO
        assert PackingMode("horizontal") is PackingMode.HORIZONTAL

    def test_unknown_mode_raises(self) -> None:
        with pytest.raises(ValueError):
            PackingMode("diagonal")


# =============================================================================
# PartRequest / UnitPart
# =============================================================================


class TestPartRequest:
    """Tests for PartRequest."""

    def test_defaults_to_rotatable(self) -> None:
        assert PartRequest(100, 50, 2).rotatable is True

    def test_area_covers_all_units(self) -> None:
        assert PartRequest(100, 50, 3).area == 15000

    def test_negative_quantity_has_no_area(self) -> None:
        """Degenerate requests are accepted, not rejected."""
        assert PartRequest(100, 50, -1).area == 0


class TestUnitPart:
    """Tests for UnitPart orientation helpers."""

    def test_turned_swaps_dimensions(self) -> None:
        part = _unit("0-0", 500, 100)
        turned = part.turned()
        assert (turned.width, turned.height) == (100, 500)
        assert turned.rotated is True
        assert (turned.original_width, turned.original_height) == (500, 100)

    def test_turned_twice_restores_orientation(self) -> None:
        part = _unit("0-0", 500, 100)
        assert part.turned().turned() == part

    def test_side_properties(self) -> None:
        part = _unit("0-0", 300, 700)
        assert part.longest_side == 700
        assert part.shortest_side == 300
        assert part.area == 210000

    @pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-5, 100)])
    def test_degenerate_parts(self, width: float, height: float) -> None:
        part = _unit("0-0", width, height)
        assert part.is_degenerate
        assert not part.fits_within(1000, 1000)

    def test_oriented_to_fit_prefers_original(self) -> None:
        part = _unit("0-0", 100, 200)
        assert part.oriented_to_fit(1000, 1000) is part

    def test_oriented_to_fit_rotates_when_needed(self) -> None:
        part = _unit("0-0", 500, 100)
        fitted = part.oriented_to_fit(200, 600)
        assert fitted is not None
        assert fitted.rotated
        assert (fitted.width, fitted.height) == (100, 500)

    def test_oriented_to_fit_respects_rotation_lock(self) -> None:
        part = _unit("0-0", 500, 100, rotatable=False)
        assert part.oriented_to_fit(200, 600) is None


class TestPlacedPart:
    """Tests for PlacedPart geometry."""

    def test_edges(self) -> None:
        placed = PlacedPart(part=_unit("0-0", 300, 200), x=10, y=20)
        assert placed.right_edge == 310
        assert placed.bottom_edge == 220

    def test_shared_edge_is_not_overlap(self) -> None:
        left = PlacedPart(part=_unit("0-0", 100, 100), x=0, y=0)
        right = PlacedPart(part=_unit("0-1", 100, 100), x=100, y=0)
        assert not left.overlaps(right)

    def test_overlap_detected(self) -> None:
        a = PlacedPart(part=_unit("0-0", 100, 100), x=0, y=0)
        b = PlacedPart(part=_unit("0-1", 100, 100), x=50, y=50)
        assert a.overlaps(b)
        assert b.overlaps(a)

    def test_span_end(self) -> None:
        assert Span(start=100, width=250).end == 350


# =============================================================================
# Sheet / PackingResult
# =============================================================================


class TestSheet:
    """Tests for the Sheet entity."""

    def test_efficiency_and_counts(self) -> None:
        sheet = Sheet(
            width=1000,
            height=1000,
            placed=(PlacedPart(part=_unit("0-0", 500, 500), x=0, y=0),),
            cuts_x=(500.0,),
            cuts_y=(500.0,),
        )
        assert sheet.used_area == 250000
        assert sheet.total_area == 1000000
        assert sheet.efficiency == pytest.approx(25.0)
        assert sheet.cutting_count == 2
        assert sheet.piece_count == 1

    def test_empty_sheet(self) -> None:
        sheet = Sheet(width=1000, height=1000, placed=())
        assert sheet.efficiency == 0.0
        assert sheet.cutting_count == 0


class TestPackingResult:
    """Tests for PackingResult and total efficiency."""

    def test_total_efficiency_is_area_weighted(self) -> None:
        full = Sheet(
            width=100,
            height=100,
            placed=(PlacedPart(part=_unit("0-0", 100, 100), x=0, y=0),),
        )
        half = Sheet(
            width=100,
            height=100,
            placed=(PlacedPart(part=_unit("1-0", 50, 100), x=0, y=0),),
        )
        assert calculate_total_efficiency([full, half]) == pytest.approx(75.0)

    def test_no_sheets_means_zero_efficiency(self) -> None:
        assert calculate_total_efficiency([]) == 0.0

    def test_from_sheets(self) -> None:
        sheet = Sheet(
            width=100,
            height=100,
            placed=(PlacedPart(part=_unit("0-0", 100, 50), x=0, y=0),),
            cuts_y=(50.0,),
        )
        leftover = _unit("1-0", 500, 500)
        result = PackingResult.from_sheets([sheet], [leftover], mode="auto:baseline")

        assert result.sheet_count == 1
        assert result.placed_count == 1
        assert result.total_cuts == 1
        assert result.total_efficiency == pytest.approx(50.0)
        assert result.unplaced == (leftover,)
        assert not result.all_placed
        assert result.mode == "auto:baseline"
