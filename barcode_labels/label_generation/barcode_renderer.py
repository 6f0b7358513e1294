"""
Code 128 barcode rendering for previews, PDF labels and SVG files.
"""

from reportlab.graphics import renderPDF, renderSVG
from reportlab.graphics.barcode import createBarcodeDrawing
from reportlab.graphics.shapes import Drawing
from reportlab.pdfgen import canvas

from barcode_labels.config import settings
from barcode_labels.exceptions import BarcodeRenderError


# Rendering presets, one per output
PREVIEW_OPTIONS = {"humanReadable": True, "fontSize": 16, "barWidth": 2, "barHeight": 100}
STANDARD_PDF_OPTIONS = {"humanReadable": False, "quiet": False}
MANUAL_PDF_OPTIONS = {
    "humanReadable": True,
    "fontSize": 10,
    "barWidth": 2,
    "barHeight": 50,
    "lquiet": 10,
    "rquiet": 10
}
SVG_EXPORT_OPTIONS = {
    "humanReadable": True,
    "fontSize": 20,
    "barWidth": 2,
    "barHeight": 100,
    "lquiet": 10,
    "rquiet": 10
}


class BarcodeRenderer:
    """Renders codes as Code 128 barcodes."""

    def __init__(self, symbology: str | None = None):
        self.symbology = symbology or settings.barcode_symbology

    def validate(self, code: str) -> None:
        """
        Check that a code can be encoded.

        Code 128 covers the ASCII character set only.

        Raises:
            BarcodeRenderError: If the code is empty or has characters outside ASCII
        """
        if not code:
            raise BarcodeRenderError(code, "Cannot encode an empty code")

        invalid = sorted({c for c in code if ord(c) > 127})
        if invalid:
            raise BarcodeRenderError(
                code,
                f"Invalid {self.symbology} characters in {code!r}: {''.join(invalid)!r}"
            )

    def build_drawing(
        self,
        code: str,
        width: float | None = None,
        height: float | None = None,
        **options
    ) -> Drawing:
        """
        Build a vector drawing of a barcode.

        Args:
            code: Text to encode
            width: Scale the drawing to this width in points (natural width if None)
            height: Scale the drawing to this height in points (natural height if None)
            **options: reportlab barcode widget options (humanReadable, fontSize, ...)

        Returns:
            reportlab Drawing

        Raises:
            BarcodeRenderError: If the code cannot be encoded
        """
        self.validate(code)

        try:
            return createBarcodeDrawing(
                self.symbology,
                value=code,
                width=width,
                height=height,
                **options
            )
        except ValueError as e:
            raise BarcodeRenderError(code, str(e)) from e

    def render_svg(self, code: str, **options) -> str:
        """
        Render a barcode as SVG text.

        Example:
            >>> svg = BarcodeRenderer().render_svg("A-0001", **SVG_EXPORT_OPTIONS)
            >>> "<svg" in svg
            True
        """
        drawing = self.build_drawing(code, **options)
        return renderSVG.drawToString(drawing)

    def draw_on_canvas(
        self,
        c: canvas.Canvas,
        code: str,
        x: float,
        y: float,
        width: float,
        height: float,
        **options
    ) -> None:
        """Draw a barcode with its bottom-left corner at (x, y), scaled to width x height."""
        drawing = self.build_drawing(code, width=width, height=height, **options)
        renderPDF.draw(drawing, c, x, y)

