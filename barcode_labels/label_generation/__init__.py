"""
Label generation package - barcode rendering, page layout, PDF and ZIP export.
"""

from barcode_labels.label_generation.barcode_renderer import BarcodeRenderer
from barcode_labels.label_generation.pdf_layout import PDFLabelGenerator, LabelDocument
from barcode_labels.label_generation.svg_archive import SVGArchiveBuilder

__all__ = ["BarcodeRenderer", "PDFLabelGenerator", "LabelDocument", "SVGArchiveBuilder"]
