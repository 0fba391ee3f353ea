"""Tests for the width-strip fallback strategy."""

from __future__ import annotations

import pytest

from cutplan.domain.services.packing import (
    CancellationToken,
    PackingCancelledError,
    WidthStripPacker,
    expand_requests,
)
from cutplan.domain.value_objects import PartRequest, UnitPart


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


class TestWidthStripPacker:
    """Tests for WidthStripPacker."""

    def test_equal_width_parts_form_strips(self) -> None:
        parts = [_unit("0-0", 500, 1000), _unit("0-1", 500, 1000)]
        sheets, remaining = WidthStripPacker(1000, 1000, kerf=0).pack(parts)

        assert remaining == ()
        assert len(sheets) == 1
        sheet = sheets[0]
        assert [(p.x, p.y) for p in sheet.placed] == [(0, 0), (500, 0)]
        assert sheet.cuts_x == (500.0,)
        assert sheet.cuts_y == ()
        assert sheet.efficiency == pytest.approx(100.0)

    def test_rotates_only_parts_that_need_it(self) -> None:
        parts = [_unit("0-0", 1200, 100), _unit("1-0", 300, 200)]
        sheets, remaining = WidthStripPacker(1000, 2000, kerf=0).pack(parts)

        assert remaining == ()
        placed = {p.id: p for p in sheets[0].placed}
        assert placed["0-0"].rotated
        assert (placed["0-0"].width, placed["0-0"].height) == (100, 1200)
        assert not placed["1-0"].rotated

    def test_rotation_lock_leaves_part_unplaced(self) -> None:
        locked = _unit("0-0", 1200, 100, rotatable=False)
        sheets, remaining = WidthStripPacker(1000, 2000, kerf=0).pack([locked])

        assert sheets == []
        assert remaining == (locked,)

    def test_fills_space_below_strips(self) -> None:
        """A part that does not get its own strip goes below another strip."""
        wide = _unit("0-0", 990, 500, rotatable=False)
        small = _unit("1-0", 20, 20)
        sheets, remaining = WidthStripPacker(1000, 1000, kerf=0).pack([wide, small])

        assert remaining == ()
        assert len(sheets) == 1
        placed = {p.id: p for p in sheets[0].placed}
        assert (placed["0-0"].x, placed["0-0"].y) == (0, 0)
        assert (placed["1-0"].x, placed["1-0"].y) == (0, 500)

    def test_long_run_is_stacked_with_kerf(self) -> None:
        """35 parts of 400 x 300 on a 1220 x 2440 board with a 4.2 mm kerf."""
        parts = expand_requests([PartRequest(400, 300, 35)])
        sheets, remaining = WidthStripPacker(1220, 2440, kerf=4.2).pack(parts)

        assert remaining == ()
        assert [s.piece_count for s in sheets] == [24, 11]
        first = sheets[0]
        assert len(first.cuts_x) == 3
        assert len(first.cuts_y) == 8
        assert first.cutting_count == 11
        assert first.cuts_x == pytest.approx((400.0, 804.2, 1208.4))
        assert first.cuts_y[-1] == pytest.approx(2429.4)

    def test_cancelled_token(self) -> None:
        token = CancellationToken()
        token.cancel()
        with pytest.raises(PackingCancelledError):
            WidthStripPacker(1000, 1000, kerf=0).pack([_unit("0-0", 100, 100)], token)
