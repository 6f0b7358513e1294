"""
Label generation handler.
Turns form input into codes and drives preview, PDF and ZIP export.
"""

import time
from dataclasses import dataclass, field

from barcode_labels.config import settings
from barcode_labels.exceptions import BarcodeRenderError, InputValidationError
from barcode_labels.label_generation import BarcodeRenderer, PDFLabelGenerator, SVGArchiveBuilder
from barcode_labels.label_generation.barcode_renderer import PREVIEW_OPTIONS
from barcode_labels.label_generation.layout import parse_layout_input, preview_layout
from barcode_labels.logger import get_logger
from barcode_labels.models.labels import (
    LayoutInput,
    PreviewItem,
    PreviewResponse,
    ProcessTextResponse,
    SequenceInput,
)
from barcode_labels.sequence import codes_from_manual_entry, generate_from_fields, process_text

logger = get_logger(__name__)

NO_PREVIEW_DATA = "No data to preview."
NO_STANDARD_CODES = "No barcodes to export."
NO_MANUAL_PDF_CODES = "Please enter barcode data for PDF export."
NO_SVG_CODES = "Please enter barcode data for SVG export."


@dataclass
class ExportArtifact:
    """A downloadable file produced by an export."""
    filename: str
    content: bytes
    media_type: str
    code_count: int
    skipped: list[str] = field(default_factory=list)


def timestamped_filename(kind: str, extension: str, now: float | None = None) -> str:
    """Build `barcodes-<kind>-<milliseconds since epoch>.<extension>`."""
    millis = int((time.time() if now is None else now) * 1000)
    return f"barcodes-{kind}-{millis}.{extension}"


class LabelGenerationHandler:
    """Handles preview, export and parameter-block requests."""

    def __init__(self):
        self.renderer = BarcodeRenderer()
        self.pdf_generator = PDFLabelGenerator(self.renderer)

    def _range_codes(self, sequence: SequenceInput) -> list[str]:
        return generate_from_fields(
            sequence,
            max_codes=settings.max_codes_per_request,
            max_padding=settings.max_padding
        )

    def _manual_codes(self, manual_data: str, empty_message: str) -> list[str]:
        codes = codes_from_manual_entry(manual_data)
        if not codes:
            raise InputValidationError("no_codes", empty_message)
        if len(codes) > settings.max_codes_per_request:
            raise InputValidationError(
                "too_many_codes",
                f"Manual entry has {len(codes)} codes; the limit is {settings.max_codes_per_request}.",
                {"count": len(codes), "limit": settings.max_codes_per_request}
            )
        return codes

    async def preview(self, sequence: SequenceInput) -> PreviewResponse:
        """
        Render the first codes of a range for on-screen preview.

        Codes that cannot be encoded are marked inline; the rest still render.

        Args:
            sequence: Range fields

        Returns:
            Preview items, or a placeholder message when the range is empty
        """
        codes = self._range_codes(sequence)
        if not codes:
            return PreviewResponse(total_codes=0, items=[], message=NO_PREVIEW_DATA)

        items = []
        for code in preview_layout(codes, settings.preview_limit):
            try:
                svg = self.renderer.render_svg(code, **PREVIEW_OPTIONS)
                items.append(PreviewItem(code=code, status="ok", svg=svg))
            except BarcodeRenderError as e:
                logger.warning("Failed to generate barcode for preview", extra={
                    "code": code,
                    "error": e.message
                })
                items.append(PreviewItem(code=code, status="invalid", message=f"Invalid code: {code}"))

        logger.info("Preview generated", extra={
            "total_codes": len(codes),
            "previewed": len(items)
        })

        return PreviewResponse(total_codes=len(codes), items=items)

    async def export_standard_pdf(self, sequence: SequenceInput, layout: LayoutInput) -> ExportArtifact:
        """
        Export range codes as the standard PDF (duplicate pairs, 3 codes per page).

        Raises:
            InputValidationError: If the range or layout fields are invalid, or no codes result
            ExportError: If the PDF cannot be finalized
        """
        codes = self._range_codes(sequence)
        if not codes:
            raise InputValidationError("no_codes", NO_STANDARD_CODES)

        geometry = parse_layout_input(layout)
        document = self.pdf_generator.generate_standard_pdf(codes, geometry)

        return ExportArtifact(
            filename=timestamped_filename("standard", "pdf"),
            content=document.content,
            media_type="application/pdf",
            code_count=len(codes),
            skipped=document.skipped
        )

    async def export_manual_pdf(self, manual_data: str) -> ExportArtifact:
        """
        Export manual entry codes as the combined PDF (4 x 5 grid on A4).

        Raises:
            InputValidationError: If the manual entry has no codes
            ExportError: If the PDF cannot be finalized
        """
        codes = self._manual_codes(manual_data, NO_MANUAL_PDF_CODES)
        document = self.pdf_generator.generate_manual_pdf(codes)

        return ExportArtifact(
            filename=timestamped_filename("manual", "pdf"),
            content=document.content,
            media_type="application/pdf",
            code_count=len(codes),
            skipped=document.skipped
        )

    async def export_svg_zip(self, manual_data: str) -> ExportArtifact:
        """
        Export manual entry codes as a ZIP of SVG files.

        Raises:
            InputValidationError: If the manual entry has no codes
            ExportError: If the archive cannot be written
        """
        codes = self._manual_codes(manual_data, NO_SVG_CODES)

        builder = SVGArchiveBuilder(self.renderer)
        builder.add_codes(codes)
        content = builder.build()

        return ExportArtifact(
            filename=timestamped_filename("svg", "zip"),
            content=content,
            media_type="application/zip",
            code_count=len(codes),
            skipped=builder.skipped
        )

    async def process_text(self, parameters: str, manual_data: str) -> ProcessTextResponse:
        """
        Generate codes from a parameter block and append them to the manual entry.

        Raises:
            InputValidationError: With the message of the first failed check
        """
        result = process_text(
            parameters,
            manual_data,
            max_codes=settings.max_codes_per_request,
            max_padding=settings.max_padding
        )

        return ProcessTextResponse(
            manual_data=result.manual_data,
            parameters=result.parameters,
            generated_codes=result.generated_codes
        )
