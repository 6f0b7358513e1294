"""
PDF label generation with Code 128 barcodes.
Creates the standard (duplicate pair) and manual (dense grid) label sheets.

Placements are in PDF user space: points, origin at the bottom-left corner,
Y growing upward. The standard sheet therefore puts the top copy of each
pair `offset_y + item_height + text_allowance` below the top edge and the
bottom copy `gap_vertical` lower, with each code's text printed above its
barcode. A top-left origin reading of the same formula would instead mirror
the sheet vertically and print the text below each barcode.
"""

import io
from dataclasses import dataclass, field

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from barcode_labels.config import settings
from barcode_labels.exceptions import BarcodeRenderError, ExportError
from barcode_labels.label_generation.barcode_renderer import (
    BarcodeRenderer,
    MANUAL_PDF_OPTIONS,
    STANDARD_PDF_OPTIONS,
)
from barcode_labels.label_generation.layout import (
    Page,
    StandardLayout,
    dense_grid_layout,
    duplicate_pair_layout,
)
from barcode_labels.logger import get_logger

logger = get_logger(__name__)

PDF_EXPORT_FAILED = "Failed to create PDF file."


@dataclass
class LabelDocument:
    """A finished label PDF."""
    content: bytes
    page_count: int
    code_count: int
    skipped: list[str] = field(default_factory=list)


class PDFLabelGenerator:
    """Generates barcode label PDFs."""

    LABEL_FONT = "Helvetica"

    def __init__(self, renderer: BarcodeRenderer | None = None):
        self.renderer = renderer or BarcodeRenderer()

    def generate_standard_pdf(self, codes: list[str], layout: StandardLayout) -> LabelDocument:
        """
        Generate the standard label PDF.

        Args:
            codes: Codes in output order
            layout: Page and barcode geometry in points

        Returns:
            Finished document

        Label layout (one page, 3 codes):
        +--------------------------------------+
        |  CODE-1      CODE-2      CODE-3      |
        |  ||||||      ||||||      ||||||      |
        |                                      |
        |  CODE-1      CODE-2      CODE-3      |
        |  ||||||      ||||||      ||||||      |
        +--------------------------------------+
        """
        pages = duplicate_pair_layout(
            codes,
            layout.page_width,
            layout.page_height,
            layout.item_width,
            layout.item_height,
            layout.offset_x,
            layout.offset_y,
            layout.gap_horizontal,
            layout.gap_vertical,
            codes_per_page=settings.standard_codes_per_page,
            text_allowance=settings.standard_text_allowance
        )

        document = self._compose(pages, layout.page_size, self._draw_standard_page, len(codes))

        logger.info("Standard labels PDF generated", extra={
            "total_codes": len(codes),
            "pages": document.page_count,
            "skipped": len(document.skipped)
        })

        return document

    def generate_manual_pdf(self, codes: list[str]) -> LabelDocument:
        """
        Generate the manual label PDF: 20 barcodes per A4 page in a 4 x 5 grid.

        Args:
            codes: Codes in output order

        Returns:
            Finished document
        """
        pages = dense_grid_layout(
            codes,
            page_width=A4[0],
            page_height=A4[1],
            margin=settings.manual_margin,
            columns=settings.manual_columns,
            rows=settings.manual_rows
        )

        document = self._compose(pages, A4, self._draw_manual_page, len(codes))

        logger.info("Manual labels PDF generated", extra={
            "total_codes": len(codes),
            "pages": document.page_count,
            "codes_per_page": settings.manual_codes_per_page,
            "skipped": len(document.skipped)
        })

        return document

    def _compose(self, pages: list[Page], page_size: tuple, draw_page, code_count: int) -> LabelDocument:
        """Draw every page onto one canvas and finalize it."""
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=page_size)
        skipped: list[str] = []

        for page in pages:
            if page.index > 0:
                c.showPage()
            draw_page(c, page, skipped)

        try:
            c.save()
        except Exception as e:
            logger.error("Failed to finalize PDF", extra={"error": str(e)}, exc_info=True)
            raise ExportError("pdf_export_failed", PDF_EXPORT_FAILED, {"error": str(e)}) from e

        return LabelDocument(
            content=buffer.getvalue(),
            page_count=len(pages),
            code_count=code_count,
            skipped=skipped
        )

    def _draw_standard_page(self, c: canvas.Canvas, page: Page, skipped: list[str]):
        """Draw both copies of each code with the code text above each barcode."""
        renderable = self._renderable_codes(page, skipped)
        for placement in page.placements:
            if placement.code not in renderable:
                continue

            self.renderer.draw_on_canvas(
                c,
                placement.code,
                placement.x,
                placement.y,
                placement.width,
                placement.height,
                **STANDARD_PDF_OPTIONS
            )

            c.setFont(self.LABEL_FONT, settings.standard_font_size)
            c.drawCentredString(
                placement.x + placement.width / 2,
                placement.y + placement.height + settings.standard_text_offset,
                placement.code
            )

    def _draw_manual_page(self, c: canvas.Canvas, page: Page, skipped: list[str]):
        """Draw one barcode per grid cell."""
        renderable = self._renderable_codes(page, skipped)
        for placement in page.placements:
            if placement.code not in renderable:
                continue

            self.renderer.draw_on_canvas(
                c,
                placement.code,
                placement.x,
                placement.y,
                placement.width,
                placement.height,
                **MANUAL_PDF_OPTIONS
            )

    def _renderable_codes(self, page: Page, skipped: list[str]) -> set[str]:
        """Validate the codes of a page, recording the ones that cannot be encoded."""
        renderable = set()
        for code in page.codes:
            try:
                self.renderer.validate(code)
            except BarcodeRenderError as e:
                logger.warning("Failed to generate barcode, leaving slot empty", extra={
                    "code": code,
                    "error": e.message
                })
                skipped.append(code)
                continue
            renderable.add(code)
        return renderable
