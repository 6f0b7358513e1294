"""
Page layout arithmetic for barcode labels.

Every function here is pure: it turns codes and geometry into pages of
placements and never touches a canvas. Coordinates are PDF user space in
points with the origin at the bottom-left corner of the page, and each
placement's (x, y) is the bottom-left corner of the barcode.
"""

import math
from dataclasses import dataclass, field
from typing import Literal

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch

from barcode_labels.exceptions import InputValidationError
from barcode_labels.models.labels import LayoutInput
from barcode_labels.sequence.generator import parse_float

NO_CODES = "No barcodes to lay out."
NON_FINITE = "Please ensure all layout settings are valid numbers."


@dataclass(frozen=True)
class Placement:
    """One barcode drawn at one position on a page."""
    code: str
    x: float
    y: float
    width: float
    height: float
    slot: int  # Index of the code on its page
    row: int
    col: int
    position: Literal["top", "bottom", "cell"] = "cell"


@dataclass
class Page:
    """Placements of one page, in drawing order."""
    index: int
    placements: list[Placement] = field(default_factory=list)

    @property
    def codes(self) -> list[str]:
        """Codes on the page in order, counting each duplicate pair once."""
        return [p.code for p in self.placements if p.position != "bottom"]


def _require_finite(**dimensions: float) -> None:
    bad = {name: value for name, value in dimensions.items() if not math.isfinite(value)}
    if bad:
        raise InputValidationError("invalid_layout", NON_FINITE, {"non_finite": sorted(bad)})


def _require_codes(codes: list[str]) -> None:
    if not codes:
        raise InputValidationError("no_codes", NO_CODES)


def paginate(codes: list[str], per_page: int) -> list[list[str]]:
    """Split codes into consecutive chunks of per_page."""
    if per_page < 1:
        raise ValueError(f"per_page must be positive: {per_page}")
    return [codes[i:i + per_page] for i in range(0, len(codes), per_page)]


def preview_layout(codes: list[str], limit: int = 10) -> list[str]:
    """Codes shown in the preview: the first `limit` of them."""
    return codes[:limit]


def duplicate_pair_layout(
    codes: list[str],
    page_width: float,
    page_height: float,
    item_width: float,
    item_height: float,
    offset_x: float,
    offset_y: float,
    gap_horizontal: float,
    gap_vertical: float,
    codes_per_page: int = 3,
    text_allowance: float = 15.0
) -> list[Page]:
    """
    Lay out codes for the standard export.

    Each page holds `codes_per_page` codes side by side. Every code is
    placed twice: once on the top row and once `gap_vertical` below it.

    Args:
        codes: Codes in output order
        page_width: Page width in points
        page_height: Page height in points
        item_width: Barcode width in points
        item_height: Barcode height in points
        offset_x: Left margin in points
        offset_y: Top margin in points
        gap_horizontal: Distance between the left edges of neighbouring codes
        gap_vertical: Distance between the top and bottom copies
        codes_per_page: Codes per page
        text_allowance: Space kept above the top row for the label text

    Returns:
        Pages in order

    Raises:
        InputValidationError: If codes is empty or a dimension is not finite
    """
    _require_codes(codes)
    _require_finite(
        page_width=page_width,
        page_height=page_height,
        item_width=item_width,
        item_height=item_height,
        offset_x=offset_x,
        offset_y=offset_y,
        gap_horizontal=gap_horizontal,
        gap_vertical=gap_vertical
    )

    top_y = page_height - offset_y - item_height - text_allowance
    bottom_y = top_y - gap_vertical
    _require_finite(top_y=top_y, bottom_y=bottom_y)

    pages = []
    for page_index, page_codes in enumerate(paginate(codes, codes_per_page)):
        page = Page(index=page_index)
        for j, code in enumerate(page_codes):
            x = offset_x + j * gap_horizontal
            page.placements.append(Placement(code, x, top_y, item_width, item_height, j, 0, j, "top"))
            page.placements.append(Placement(code, x, bottom_y, item_width, item_height, j, 1, j, "bottom"))
        pages.append(page)

    return pages


def dense_grid_layout(
    codes: list[str],
    page_width: float = A4[0],
    page_height: float = A4[1],
    margin: float = 72.0,
    columns: int = 4,
    rows: int = 5
) -> list[Page]:
    """
    Lay out codes on a fixed grid for the combined export.

    The page inside `margin` is split into `columns` x `rows` cells. Each
    barcode takes 80% of the cell width and 50% of the cell height and is
    centered in its cell. Slots fill left to right, top to bottom.

    Raises:
        InputValidationError: If codes is empty or a dimension is not finite
    """
    _require_codes(codes)

    col_width = (page_width - 2 * margin) / columns
    row_height = (page_height - 2 * margin) / rows
    item_width = col_width * 0.8
    item_height = row_height * 0.5
    _require_finite(
        col_width=col_width,
        row_height=row_height,
        item_width=item_width,
        item_height=item_height
    )

    pages = []
    for page_index, page_codes in enumerate(paginate(codes, columns * rows)):
        page = Page(index=page_index)
        for slot, code in enumerate(page_codes):
            row, col = divmod(slot, columns)
            x = margin + col * col_width + (col_width - item_width) / 2
            top = margin + row * row_height + (row_height - item_height) / 2
            y = page_height - top - item_height
            page.placements.append(Placement(code, x, y, item_width, item_height, slot, row, col))
        pages.append(page)

    return pages


@dataclass(frozen=True)
class StandardLayout:
    """Geometry of the standard export, in points."""
    page_width: float
    page_height: float
    item_width: float
    item_height: float
    offset_x: float
    offset_y: float
    gap_horizontal: float
    gap_vertical: float

    @property
    def page_size(self) -> tuple[float, float]:
        return (self.page_width, self.page_height)


def parse_layout_input(layout: LayoutInput) -> StandardLayout:
    """
    Parse the layout form fields.

    Page size and offsets are entered in inches and converted to points;
    barcode size and gaps are entered in points.

    Raises:
        InputValidationError: If any field is not a finite number
    """
    raw = {
        "page_width": (layout.page_width, inch),
        "page_height": (layout.page_height, inch),
        "item_width": (layout.barcode_width, 1.0),
        "item_height": (layout.barcode_height, 1.0),
        "offset_x": (layout.move_x, inch),
        "offset_y": (layout.move_y, inch),
        "gap_horizontal": (layout.gap_horizontal, 1.0),
        "gap_vertical": (layout.gap_vertical, 1.0),
    }

    values = {}
    invalid = []
    for name, (text, scale) in raw.items():
        value = parse_float(text)
        if value is None:
            invalid.append(name)
        else:
            values[name] = value * scale

    if invalid:
        raise InputValidationError("invalid_layout", NON_FINITE, {"invalid": invalid})

    return StandardLayout(**values)
