"""Tests for part request expansion."""

from __future__ import annotations

from cutplan.domain.services.packing import expand_requests
from cutplan.domain.value_objects import PartRequest


class TestExpandRequests:
    """Tests for expand_requests."""

    def test_one_unit_per_quantity(self) -> None:
        units = expand_requests([PartRequest(100, 50, 2), PartRequest(30, 20, 1)])

        assert [u.id for u in units] == ["0-0", "0-1", "1-0"]
        assert [u.request_index for u in units] == [0, 0, 1]

    def test_units_start_unrotated(self) -> None:
        (unit,) = expand_requests([PartRequest(700, 500, 1, rotatable=False)])

        assert (unit.width, unit.height) == (700, 500)
        assert (unit.original_width, unit.original_height) == (700, 500)
        assert unit.rotated is False
        assert unit.rotatable is False

    def test_label_is_copied_to_every_unit(self) -> None:
        units = expand_requests([PartRequest(400, 300, 2, label="Shelf")])

        assert [u.label for u in units] == ["Shelf", "Shelf"]
        assert units[0].turned().label == "Shelf"

    def test_non_positive_quantity_yields_nothing(self) -> None:
        assert expand_requests([PartRequest(100, 50, 0), PartRequest(100, 50, -3)]) == []

    def test_degenerate_parts_are_still_expanded(self) -> None:
        """Zero-size parts are kept so they can be reported as unplaced."""
        units = expand_requests([PartRequest(0, 50, 2)])
        assert len(units) == 2
        assert all(u.is_degenerate for u in units)

    def test_empty_input(self) -> None:
        assert expand_requests([]) == []
