"""
Error types raised while generating and exporting barcode labels.
"""


class LabelGenerationError(Exception):
    """Base class for label generation failures."""

    def __init__(self, error_code: str, message: str, details: dict | None = None):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InputValidationError(LabelGenerationError, ValueError):
    """User input failed validation. The operation is aborted with no output."""


class BarcodeRenderError(LabelGenerationError, ValueError):
    """A single code cannot be encoded in the chosen symbology."""

    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__("invalid_code", message, {"code": code})


class ExportError(LabelGenerationError):
    """Document or archive finalization failed. Partial work is discarded."""
