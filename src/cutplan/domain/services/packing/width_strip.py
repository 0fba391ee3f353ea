"""Width-strip fallback strategy.

Parts of equal width are stacked into full-height vertical strips laid out
left to right. Whatever is left is then row-packed into the free rectangles
below each strip and to the right of the last strip. The layout is plain but
any part that fits the sheet in some orientation gets placed, so a run of
this strategy always makes progress.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from cutplan.domain.entities import Sheet
from cutplan.domain.services.packing.cancellation import CancellationToken
from cutplan.domain.value_objects import EPSILON, PlacedPart, UnitPart, quantize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _FreeRect:
    """Free rectangle left over after strip placement."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height


class _SheetLayout:
    """Mutable accumulator for one width-strip sheet."""

    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.placed: list[PlacedPart] = []
        self.cuts_x: set[float] = set()
        self.cuts_y: set[float] = set()

    def place(
        self,
        part: UnitPart,
        x: float,
        y: float,
        right_limit: float,
        bottom_limit: float,
    ) -> PlacedPart:
        placement = PlacedPart(part=part, x=x, y=y)
        self.placed.append(placement)
        if placement.right_edge < right_limit - EPSILON:
            self.cuts_x.add(quantize(placement.right_edge))
        if placement.bottom_edge < bottom_limit - EPSILON:
            self.cuts_y.add(quantize(placement.bottom_edge))
        return placement

    def to_sheet(self) -> Sheet:
        return Sheet(
            width=self.width,
            height=self.height,
            placed=tuple(self.placed),
            cuts_x=tuple(sorted(self.cuts_x)),
            cuts_y=tuple(sorted(self.cuts_y)),
        )


class WidthStripPacker:
    """Strip-based packer that trades layout quality for guaranteed progress.

    Attributes:
        sheet_width: Board width.
        sheet_height: Board height.
        kerf: Saw kerf between strips and between stacked parts.
    """

    def __init__(self, sheet_width: float, sheet_height: float, kerf: float) -> None:
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        self.kerf = kerf

    def pack(
        self,
        parts: Sequence[UnitPart],
        cancel_token: CancellationToken | None = None,
    ) -> tuple[list[Sheet], tuple[UnitPart, ...]]:
        """Fill sheets until every part is placed or no progress is made.

        Returns:
            Tuple of (sheets, parts that could not be placed).
        """
        sheets: list[Sheet] = []
        remaining = tuple(parts)
        while remaining:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            sheet, remaining = self.pack_sheet(remaining)
            if sheet is None:
                break
            sheets.append(sheet)
        return sheets, remaining

    def pack_sheet(
        self,
        parts: Sequence[UnitPart],
    ) -> tuple[Sheet | None, tuple[UnitPart, ...]]:
        """Lay out one sheet.

        Args:
            parts: Parts still to place.

        Returns:
            Tuple of (sheet, remaining parts in input order). The sheet is
            None when nothing could be placed.
        """
        layout = _SheetLayout(self.sheet_width, self.sheet_height)

        # Group by width after turning parts that only fit rotated
        groups: dict[float, list[UnitPart]] = {}
        for part in parts:
            oriented = part.oriented_to_fit(self.sheet_width, self.sheet_height)
            if oriented is None:
                continue
            groups.setdefault(quantize(oriented.width), []).append(oriented)

        ordered_groups = sorted(
            groups.values(),
            key=lambda group: (len(group), group[0].width),
            reverse=True,
        )

        free_rects: list[_FreeRect] = []
        leftovers: list[UnitPart] = []
        current_x = 0.0

        for group in ordered_groups:
            strip_width = group[0].width
            items = sorted(group, key=lambda p: p.height, reverse=True)

            while items:
                lead = 0.0 if current_x == 0 else self.kerf
                if current_x + lead + strip_width > self.sheet_width + EPSILON:
                    break
                strip_x = current_x + lead

                stacked, strip_bottom = self._fill_strip(layout, items, strip_x)
                if not stacked:
                    break
                items = [p for p in items if p.id not in stacked]

                if strip_x + strip_width < self.sheet_width - EPSILON:
                    layout.cuts_x.add(quantize(strip_x + strip_width))

                below_y = strip_bottom + self.kerf
                if self.sheet_height - below_y > EPSILON:
                    free_rects.append(
                        _FreeRect(
                            x=strip_x,
                            y=below_y,
                            width=strip_width,
                            height=self.sheet_height - below_y,
                        )
                    )
                current_x = strip_x + strip_width

            leftovers.extend(items)

        right_x = 0.0 if current_x == 0 else current_x + self.kerf
        if self.sheet_width - right_x > EPSILON:
            free_rects.append(
                _FreeRect(
                    x=right_x,
                    y=0.0,
                    width=self.sheet_width - right_x,
                    height=self.sheet_height,
                )
            )

        for rect in sorted(free_rects, key=lambda r: r.area, reverse=True):
            if not leftovers:
                break
            leftovers = self._fill_rect(layout, rect, leftovers)

        if not layout.placed:
            return None, tuple(parts)

        placed_ids = {p.id for p in layout.placed}
        remaining = tuple(p for p in parts if p.id not in placed_ids)
        sheet = layout.to_sheet()

        logger.debug(
            "Width-strip sheet: %d parts, %.1f%% efficiency, %d cuts",
            sheet.piece_count,
            sheet.efficiency,
            sheet.cutting_count,
        )
        return sheet, remaining

    def _fill_strip(
        self,
        layout: _SheetLayout,
        items: list[UnitPart],
        strip_x: float,
    ) -> tuple[set[str], float]:
        """Stack items into a strip, shortest first, while height remains.

        Returns:
            Tuple of (ids stacked, y of the strip's last bottom edge).
        """
        stacked: set[str] = set()
        current_y = 0.0
        for item in reversed(items):
            lead = 0.0 if current_y == 0 else self.kerf
            if current_y + lead + item.height > self.sheet_height + EPSILON:
                continue
            y = current_y + lead
            layout.place(item, strip_x, y, self.sheet_width, self.sheet_height)
            current_y = y + item.height
            stacked.add(item.id)
        return stacked, current_y

    def _fill_rect(
        self,
        layout: _SheetLayout,
        rect: _FreeRect,
        items: list[UnitPart],
    ) -> list[UnitPart]:
        """Row-pack items into a free rectangle.

        Rows run left to right; a new row opens below the previous one when
        the next item does not fit. Items are tried tallest first.

        Returns:
            Items that were not placed, in their original order.
        """
        oriented: list[UnitPart] = []
        for item in items:
            fitted = item.oriented_to_fit(rect.width, rect.height)
            if fitted is not None:
                oriented.append(fitted)
        oriented.sort(key=lambda p: (p.height, p.width), reverse=True)

        taken: set[str] = set()
        row_y = rect.y
        row_height = 0.0
        cursor_x = rect.x

        for item in oriented:
            lead = 0.0 if cursor_x == rect.x else self.kerf
            fits_row = (
                row_height > 0
                and item.height <= row_height + EPSILON
                and cursor_x + lead + item.width <= rect.right + EPSILON
            )
            if fits_row:
                x = cursor_x + lead
            else:
                new_row_y = rect.y if row_height == 0 else row_y + row_height + self.kerf
                if new_row_y + item.height > rect.bottom + EPSILON:
                    continue
                row_y = new_row_y
                row_height = item.height
                x = rect.x

            layout.place(item, x, row_y, rect.right, rect.bottom)
            cursor_x = x + item.width
            taken.add(item.id)

        return [item for item in items if item.id not in taken]
