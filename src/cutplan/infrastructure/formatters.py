"""Output formatters and exporters for packing results."""

from __future__ import annotations

import json
from collections import Counter
from typing import Any

from cutplan.domain.entities import PackingResult, Sheet
from cutplan.domain.value_objects import PlacedPart, UnitPart


def _size_label(width: float, height: float) -> str:
    return f"{width:g}x{height:g}"


class PackingSummaryFormatter:
    """Formats a packing result as a plain-text report.

    One row per sheet with its part count, cut count and efficiency,
    followed by totals and the unplaced parts grouped by requested size.
    """

    def format(self, result: PackingResult) -> str:
        lines = [
            "CUTTING PLAN",
            "=" * 60,
            f"Strategy: {result.mode}",
        ]

        if result.bins:
            sheet = result.bins[0]
            lines.append(f"Board:    {_size_label(sheet.width, sheet.height)} mm")
        lines.append("")

        lines.append(f"{'Sheet':<8} {'Parts':<8} {'Cuts':<8} {'Efficiency'}")
        lines.append("-" * 60)
        for index, sheet in enumerate(result.bins, start=1):
            lines.append(
                f"{index:<8} {sheet.piece_count:<8} {sheet.cutting_count:<8} "
                f"{sheet.efficiency:.1f}%"
            )
        lines.append("-" * 60)
        lines.append(
            f"{'TOTAL':<8} {result.placed_count:<8} {result.total_cuts:<8} "
            f"{result.total_efficiency:.1f}%"
        )

        if result.unplaced:
            lines.append("")
            lines.append(f"UNPLACED PARTS ({len(result.unplaced)})")
            lines.append("-" * 60)
            lines.extend(self._format_unplaced(result.unplaced))

        return "\n".join(lines)

    def format_sheet(self, sheet: Sheet, number: int = 1) -> str:
        """Format one sheet's placements as a table."""
        lines = [
            f"SHEET {number}: {sheet.piece_count} parts, {sheet.efficiency:.1f}%",
            f"{'Part':<10} {'X':>9} {'Y':>9} {'Width':>9} {'Height':>9}  "
            f"{'Rotated':<8} Label",
        ]
        for placed in sheet.placed:
            lines.append(
                f"{placed.id:<10} {placed.x:>9.1f} {placed.y:>9.1f} "
                f"{placed.width:>9.1f} {placed.height:>9.1f}  "
                f"{'yes' if placed.rotated else 'no':<8} {placed.label or ''}".rstrip()
            )
        return "\n".join(lines)

    def _format_unplaced(self, unplaced: tuple[UnitPart, ...]) -> list[str]:
        counts = Counter(
            (_size_label(part.original_width, part.original_height), part.label)
            for part in unplaced
        )
        return [
            f"  {size:<20} x {count}" + (f"  {label}" if label else "")
            for (size, label), count in counts.items()
        ]


class JsonExporter:
    """Exports packing results to JSON format."""

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def export(self, result: PackingResult) -> str:
        """Export a packing result as a JSON document."""
        return json.dumps(self.to_dict(result), indent=self.indent)

    def to_dict(self, result: PackingResult) -> dict[str, Any]:
        return {
            "mode": result.mode,
            "sheet_count": result.sheet_count,
            "placed_count": result.placed_count,
            "total_cuts": result.total_cuts,
            "total_efficiency": round(result.total_efficiency, 2),
            "sheets": [self._format_sheet(sheet) for sheet in result.bins],
            "unplaced": [self._format_unit(part) for part in result.unplaced],
        }

    def _format_sheet(self, sheet: Sheet) -> dict[str, Any]:
        return {
            "width": sheet.width,
            "height": sheet.height,
            "used_area": sheet.used_area,
            "total_area": sheet.total_area,
            "efficiency": round(sheet.efficiency, 2),
            "cutting_count": sheet.cutting_count,
            "cuts_x": list(sheet.cuts_x),
            "cuts_y": list(sheet.cuts_y),
            "placed": [self._format_placement(p) for p in sheet.placed],
        }

    def _format_placement(self, placed: PlacedPart) -> dict[str, Any]:
        return {
            "id": placed.id,
            "x": placed.x,
            "y": placed.y,
            "width": placed.width,
            "height": placed.height,
            "rotated": placed.rotated,
            "original_width": placed.original_width,
            "original_height": placed.original_height,
            "label": placed.label,
        }

    def _format_unit(self, part: UnitPart) -> dict[str, Any]:
        return {
            "id": part.id,
            "width": part.original_width,
            "height": part.original_height,
            "rotatable": part.rotatable,
            "label": part.label,
        }
