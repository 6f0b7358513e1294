"""
Label generation routes.
Preview, standard/manual PDF and SVG ZIP export, and parameter-block processing.
"""

from fastapi import APIRouter, HTTPException, status, Response
from pydantic import BaseModel, Field

from barcode_labels.exceptions import ExportError, InputValidationError
from barcode_labels.handlers.label_generation_handler import ExportArtifact, LabelGenerationHandler
from barcode_labels.logger import get_logger
from barcode_labels.models.common import ErrorResponse
from barcode_labels.models.labels import (
    LayoutInput,
    PreviewResponse,
    ProcessTextResponse,
    SequenceInput,
)

logger = get_logger(__name__)

router = APIRouter()


# Request Models
class PreviewRequest(BaseModel):
    """Request to preview range codes."""
    sequence: SequenceInput


class StandardPdfRequest(BaseModel):
    """Request to export range codes as the standard PDF."""
    sequence: SequenceInput
    layout: LayoutInput = Field(default_factory=LayoutInput)


class ManualEntryRequest(BaseModel):
    """Request carrying the manual entry text (one code per line)."""
    manual_data: str = Field("", description="Codes, one per line; blank lines are ignored")


class ProcessTextRequest(BaseModel):
    """Request to generate codes from a parameter block."""
    parameters: str = Field("", description="key: value lines (prefix, suffix, range, increment, padding)")
    manual_data: str = Field("", description="Current manual entry text")


ARTIFACT_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or no codes"},
    500: {"model": ErrorResponse, "description": "Generation failed"}
}


def _artifact_response(artifact: ExportArtifact) -> Response:
    """Wrap an export as a download."""
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{artifact.filename}"',
            "X-Skipped-Codes": str(len(artifact.skipped))
        }
    )


def _validation_failed(e: InputValidationError) -> HTTPException:
    logger.warning("Invalid label request", extra={
        "error_code": e.error_code,
        "error": e.message
    })
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": e.error_code, "message": e.message}
    )


def _export_failed(e: ExportError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": e.error_code, "message": e.message}
    )


def _generation_failed(action: str, e: Exception) -> HTTPException:
    logger.error(f"{action} failed", extra={
        "error": str(e)
    }, exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "generation_failed", "message": f"{action} failed"}
    )


@router.post(
    "/labels/preview",
    response_model=PreviewResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid range fields"},
        500: {"model": ErrorResponse, "description": "Generation failed"}
    },
    summary="Preview range barcodes",
    description="""
    Render the first 10 codes of a numeric range as SVG barcodes.

    Codes that cannot be encoded are returned with status "invalid"
    and do not stop the rest of the preview.
    """
)
async def preview_labels(request: PreviewRequest):
    """
    Preview range barcodes.

    Args:
        request: Range fields

    Returns:
        Preview items

    Raises:
        HTTPException: If the range fields are invalid
    """
    handler = LabelGenerationHandler()

    try:
        return await handler.preview(request.sequence)

    except InputValidationError as e:
        raise _validation_failed(e)

    except Exception as e:
        raise _generation_failed("Preview generation", e)


@router.post(
    "/labels/standard/pdf",
    response_class=Response,
    status_code=status.HTTP_200_OK,
    responses=ARTIFACT_RESPONSES,
    summary="Export standard labels PDF",
    description="""
    Generate a PDF from a numeric range.

    - 3 codes per page, side by side
    - Every code printed twice (top and bottom copy) with its text above
    - Page size and offsets in inches, barcode size and gaps in points

    Returns barcodes-standard-<timestamp>.pdf.
    """
)
async def export_standard_pdf(request: StandardPdfRequest):
    """
    Export the standard labels PDF.

    Args:
        request: Range fields and layout settings

    Returns:
        PDF file (application/pdf)

    Raises:
        HTTPException: If validation or generation fails
    """
    handler = LabelGenerationHandler()

    try:
        artifact = await handler.export_standard_pdf(request.sequence, request.layout)

        logger.info("Standard labels PDF exported", extra={
            "filename": artifact.filename,
            "code_count": artifact.code_count,
            "skipped": len(artifact.skipped)
        })

        return _artifact_response(artifact)

    except InputValidationError as e:
        raise _validation_failed(e)

    except ExportError as e:
        raise _export_failed(e)

    except Exception as e:
        raise _generation_failed("Standard labels PDF generation", e)


@router.post(
    "/labels/manual/pdf",
    response_class=Response,
    status_code=status.HTTP_200_OK,
    responses=ARTIFACT_RESPONSES,
    summary="Export manual labels PDF",
    description="""
    Generate an A4 PDF from the manual entry.

    - 20 barcodes per page in a 4 x 5 grid
    - One code per non-blank line of the manual entry

    Returns barcodes-manual-<timestamp>.pdf.
    """
)
async def export_manual_pdf(request: ManualEntryRequest):
    """
    Export the manual labels PDF.

    Args:
        request: Manual entry text

    Returns:
        PDF file (application/pdf)

    Raises:
        HTTPException: If validation or generation fails
    """
    handler = LabelGenerationHandler()

    try:
        artifact = await handler.export_manual_pdf(request.manual_data)

        logger.info("Manual labels PDF exported", extra={
            "filename": artifact.filename,
            "code_count": artifact.code_count,
            "skipped": len(artifact.skipped)
        })

        return _artifact_response(artifact)

    except InputValidationError as e:
        raise _validation_failed(e)

    except ExportError as e:
        raise _export_failed(e)

    except Exception as e:
        raise _generation_failed("Manual labels PDF generation", e)


@router.post(
    "/labels/svg/zip",
    response_class=Response,
    status_code=status.HTTP_200_OK,
    responses=ARTIFACT_RESPONSES,
    summary="Export SVG barcodes as ZIP",
    description="""
    Generate one SVG file per manual entry code and return them as a ZIP.

    File names are the code with non-alphanumeric characters replaced
    by "_", lowercased. Codes that cannot be encoded are skipped.

    Returns barcodes-svg-<timestamp>.zip.
    """
)
async def export_svg_zip(request: ManualEntryRequest):
    """
    Export SVG barcodes as a ZIP archive.

    Args:
        request: Manual entry text

    Returns:
        ZIP file (application/zip)

    Raises:
        HTTPException: If validation or archive creation fails
    """
    handler = LabelGenerationHandler()

    try:
        artifact = await handler.export_svg_zip(request.manual_data)

        logger.info("SVG archive exported", extra={
            "filename": artifact.filename,
            "code_count": artifact.code_count,
            "skipped": len(artifact.skipped)
        })

        return _artifact_response(artifact)

    except InputValidationError as e:
        raise _validation_failed(e)

    except ExportError as e:
        raise _export_failed(e)

    except Exception as e:
        raise _generation_failed("SVG archive generation", e)


@router.post(
    "/labels/process-text",
    response_model=ProcessTextResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid parameters"}
    },
    summary="Generate codes from a parameter block",
    description="""
    Parse key: value lines and append the generated codes to the manual entry.

    Recognized keys: prefix, suffix, range (start-end), increment, padding.
    Example:

        prefix: SN-
        range: 1-100
        padding: 4
    """
)
async def process_parameter_text(request: ProcessTextRequest):
    """
    Process a parameter block.

    Args:
        request: Parameter block and current manual entry

    Returns:
        Updated manual entry and the generated codes

    Raises:
        HTTPException: If the parameters are invalid
    """
    handler = LabelGenerationHandler()

    try:
        return await handler.process_text(request.parameters, request.manual_data)

    except InputValidationError as e:
        raise _validation_failed(e)
