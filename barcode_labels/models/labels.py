"""
Form input structs and response models for barcode label generation.

Form values arrive exactly as typed (strings). They are parsed into numbers
by the sequence and layout modules, never coerced here.
"""

from typing import Literal
from pydantic import BaseModel, ConfigDict, Field


class SequenceInput(BaseModel):
    """Range fields of the label form."""

    model_config = ConfigDict(frozen=True)

    prefix: str = Field("", max_length=200, description="Text placed before the number")
    suffix: str = Field("", max_length=200, description="Text placed after the number")
    start: str = Field(..., max_length=32, description="First number of the range")
    end: str = Field(..., max_length=32, description="Last number of the range (inclusive)")
    increment: str = Field("1", max_length=32, description="Step between numbers; invalid or empty means 1")
    padding: str = Field("0", max_length=32, description="Minimum digit count, zero-padded")


class LayoutInput(BaseModel):
    """Page and barcode geometry for the standard PDF export."""

    model_config = ConfigDict(frozen=True)

    page_width: str = Field("8.5", description="Page width in inches")
    page_height: str = Field("11", description="Page height in inches")
    barcode_width: str = Field("150", description="Barcode width in points")
    barcode_height: str = Field("50", description="Barcode height in points")
    move_x: str = Field("0.5", description="Left offset in inches")
    move_y: str = Field("0.5", description="Top offset in inches")
    gap_horizontal: str = Field("180", description="Horizontal distance between codes in points")
    gap_vertical: str = Field("100", description="Vertical distance between the pair in points")


class PreviewItem(BaseModel):
    """One rendered preview entry."""

    code: str
    status: Literal["ok", "invalid"]
    svg: str | None = None
    message: str | None = None


class PreviewResponse(BaseModel):
    """Response schema for the preview endpoint."""

    total_codes: int
    items: list[PreviewItem]
    message: str | None = None


class ProcessTextResponse(BaseModel):
    """Response schema for the parameter-block endpoint."""

    manual_data: str = Field(..., description="Manual entry text with generated codes appended")
    parameters: str = Field("", description="Parameter input after processing (cleared)")
    generated_codes: list[str]
