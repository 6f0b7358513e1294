"""
ZIP archive of one SVG barcode file per code.
"""

import io
import re
import zipfile

from barcode_labels.exceptions import BarcodeRenderError, ExportError
from barcode_labels.label_generation.barcode_renderer import BarcodeRenderer, SVG_EXPORT_OPTIONS
from barcode_labels.logger import get_logger

logger = get_logger(__name__)

ZIP_EXPORT_FAILED = "Failed to create ZIP file. See console for details."

_UNSAFE_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def safe_filename(code: str) -> str:
    """Entry name for a code: non-alphanumerics become '_', lowercased, '.svg' appended."""
    return f"{_UNSAFE_CHARS.sub('_', code).lower()}.svg"


class SVGArchiveBuilder:
    """Accumulates SVG entries and finalizes them into one ZIP archive."""

    def __init__(self, renderer: BarcodeRenderer | None = None):
        self.renderer = renderer or BarcodeRenderer()
        self.entries: dict[str, str] = {}
        self.skipped: list[str] = []

    def add_code(self, code: str) -> str | None:
        """
        Render a code and add it as an entry.

        A code whose entry name is already present replaces that entry.

        Returns:
            Entry name, or None if the code could not be rendered
        """
        try:
            svg = self.renderer.render_svg(code, **SVG_EXPORT_OPTIONS)
        except BarcodeRenderError as e:
            logger.warning("Could not generate barcode, skipping", extra={
                "code": code,
                "error": e.message
            })
            self.skipped.append(code)
            return None

        name = safe_filename(code)
        self.entries[name] = svg
        return name

    def add_codes(self, codes: list[str]) -> None:
        for code in codes:
            self.add_code(code)

    def build(self) -> bytes:
        """
        Compress all entries into a ZIP archive.

        Raises:
            ExportError: If the archive cannot be written
        """
        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
                for name, svg in self.entries.items():
                    zf.writestr(name, svg)
        except Exception as e:
            logger.error("Error creating ZIP file", extra={"error": str(e)}, exc_info=True)
            raise ExportError("zip_export_failed", ZIP_EXPORT_FAILED, {"error": str(e)}) from e

        logger.info("SVG archive built", extra={
            "entries": len(self.entries),
            "skipped": len(self.skipped)
        })

        return buffer.getvalue()
