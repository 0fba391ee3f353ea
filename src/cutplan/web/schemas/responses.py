"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from cutplan.domain.entities import PackingResult, Sheet


class PlacementSchema(BaseModel):
    """A part at its position on a sheet."""

    id: str = Field(..., description="Unit part id '<row>-<unit>'")
    x: float = Field(..., description="Left edge in mm from the sheet's left side")
    y: float = Field(..., description="Top edge in mm from the sheet's top side")
    width: float = Field(..., description="Width as placed in mm")
    height: float = Field(..., description="Height as placed in mm")
    rotated: bool = Field(..., description="Whether the part was turned 90 degrees")
    original_width: float = Field(..., description="Requested width in mm")
    original_height: float = Field(..., description="Requested height in mm")
    label: str | None = Field(default=None, description="Label of the part row")


class SheetSchema(BaseModel):
    """One board of the cutting plan."""

    width: float = Field(..., description="Usable board width in mm")
    height: float = Field(..., description="Usable board height in mm")
    used_area: float = Field(..., description="Area covered by parts in mm2")
    total_area: float = Field(..., description="Board area in mm2")
    efficiency: float = Field(..., description="Used area percentage")
    cutting_count: int = Field(..., description="Distinct cut lines")
    cuts_x: list[float] = Field(default_factory=list, description="Vertical cut positions")
    cuts_y: list[float] = Field(default_factory=list, description="Horizontal cut positions")
    placed: list[PlacementSchema] = Field(default_factory=list)

    @classmethod
    def from_sheet(cls, sheet: Sheet) -> "SheetSchema":
        return cls(
            width=sheet.width,
            height=sheet.height,
            used_area=sheet.used_area,
            total_area=sheet.total_area,
            efficiency=round(sheet.efficiency, 2),
            cutting_count=sheet.cutting_count,
            cuts_x=list(sheet.cuts_x),
            cuts_y=list(sheet.cuts_y),
            placed=[
                PlacementSchema(
                    id=p.id,
                    x=p.x,
                    y=p.y,
                    width=p.width,
                    height=p.height,
                    rotated=p.rotated,
                    original_width=p.original_width,
                    original_height=p.original_height,
                    label=p.label,
                )
                for p in sheet.placed
            ],
        )


class UnplacedPartSchema(BaseModel):
    """A part no strategy could place."""

    id: str = Field(..., description="Unit part id '<row>-<unit>'")
    width: float = Field(..., description="Requested width in mm")
    height: float = Field(..., description="Requested height in mm")
    label: str | None = Field(default=None, description="Label of the part row")


class PackingResultSchema(BaseModel):
    """Response for cut planning."""

    mode: str = Field(..., description="Strategy that produced the plan")
    sheet_count: int = Field(..., description="Number of boards used")
    placed_count: int = Field(..., description="Number of parts placed")
    total_cuts: int = Field(..., description="Cut lines across all boards")
    total_efficiency: float = Field(..., description="Area-weighted efficiency percentage")
    sheets: list[SheetSchema] = Field(default_factory=list)
    unplaced: list[UnplacedPartSchema] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: PackingResult) -> "PackingResultSchema":
        return cls(
            mode=result.mode,
            sheet_count=result.sheet_count,
            placed_count=result.placed_count,
            total_cuts=result.total_cuts,
            total_efficiency=round(result.total_efficiency, 2),
            sheets=[SheetSchema.from_sheet(sheet) for sheet in result.bins],
            unplaced=[
                UnplacedPartSchema(
                    id=part.id,
                    width=part.original_width,
                    height=part.original_height,
                    label=part.label,
                )
                for part in result.unplaced
            ],
        )


class ValidationResultSchema(BaseModel):
    """Response for job validation."""

    is_valid: bool = Field(..., description="Whether the job is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )
