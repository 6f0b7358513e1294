"""
Integration tests for API routes.
"""

import re
import zipfile
from io import BytesIO
from unittest.mock import patch

from pypdf import PdfReader

from barcode_labels.exceptions import ExportError


class TestServiceRoutes:
    """Tests for service information routes."""

    def test_health_check(self, client):
        """Test health check endpoint."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "Barcode Label Service"
        assert data["docs"] == "/docs"

    def test_request_id_echoed(self, client):
        """Test a supplied request ID is returned, and one is generated otherwise."""
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["x-request-id"] == "req-123"

        response = client.get("/health")
        assert len(response.headers["x-request-id"]) == 32


class TestPreviewRoutes:
    """Tests for the preview route."""

    def test_preview_first_ten(self, client):
        """Test only the first ten codes are rendered."""
        response = client.post("/api/v1/labels/preview", json={
            "sequence": {"prefix": "P-", "start": "1", "end": "25"}
        })

        assert response.status_code == 200
        data = response.json()
        assert data["total_codes"] == 25
        assert [item["code"] for item in data["items"]] == [f"P-{i}" for i in range(1, 11)]
        assert all(item["status"] == "ok" and "<svg" in item["svg"] for item in data["items"])

    def test_preview_empty_range(self, client):
        """Test an inverted range shows the placeholder message."""
        response = client.post("/api/v1/labels/preview", json={
            "sequence": {"start": "10", "end": "1"}
        })

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["message"] == "No data to preview."

    def test_preview_invalid_code_marked_inline(self, client):
        """Test codes that cannot be encoded are marked, not fatal."""
        response = client.post("/api/v1/labels/preview", json={
            "sequence": {"prefix": "É", "start": "1", "end": "2"}
        })

        assert response.status_code == 200
        items = response.json()["items"]
        assert [item["status"] for item in items] == ["invalid", "invalid"]
        assert items[0]["message"] == "Invalid code: É1"
        assert items[0]["svg"] is None

    def test_preview_invalid_fields(self, client):
        """Test non-numeric range fields are rejected."""
        response = client.post("/api/v1/labels/preview", json={
            "sequence": {"start": "one", "end": "5"}
        })

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "invalid_range_fields"
        assert detail["message"] == "Please ensure Start, End, and Increment are valid numbers."

    def test_preview_oversized_end_rejected(self, client):
        """Test an end field too long to be a number is rejected, not a server error."""
        response = client.post("/api/v1/labels/preview", json={
            "sequence": {"start": "1", "end": "9" * 5000}
        })

        assert response.status_code == 422

    def test_preview_padding_limit(self, client):
        """Test padding wider than the limit is rejected before generation."""
        response = client.post("/api/v1/labels/preview", json={
            "sequence": {"start": "1", "end": "2", "padding": "200000"}
        })

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "padding_too_large"


class TestStandardPdfRoutes:
    """Tests for the standard PDF export route."""

    def test_export_standard_pdf(self, client, sequence_fields, layout_fields):
        """Test a PDF download with a timestamped filename."""
        response = client.post("/api/v1/labels/standard/pdf", json={
            "sequence": sequence_fields.model_dump(),
            "layout": layout_fields.model_dump()
        })

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert re.fullmatch(
            r'attachment; filename="barcodes-standard-\d+\.pdf"',
            response.headers["content-disposition"]
        )
        assert response.headers["x-skipped-codes"] == "0"
        assert len(PdfReader(BytesIO(response.content)).pages) == 3

    def test_default_layout(self, client):
        """Test the layout block is optional."""
        response = client.post("/api/v1/labels/standard/pdf", json={
            "sequence": {"start": "1", "end": "4"}
        })

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")

    def test_empty_range_rejected(self, client, layout_fields):
        """Test an inverted range is a blocking error with no file."""
        response = client.post("/api/v1/labels/standard/pdf", json={
            "sequence": {"start": "5", "end": "1"},
            "layout": layout_fields.model_dump()
        })

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "No barcodes to export."
        assert "content-disposition" not in response.headers

    def test_invalid_layout_rejected(self, client, sequence_fields):
        """Test a non-numeric layout field is rejected."""
        response = client.post("/api/v1/labels/standard/pdf", json={
            "sequence": sequence_fields.model_dump(),
            "layout": {"page_width": "wide"}
        })

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Please ensure all layout settings are valid numbers."

    def test_skipped_codes_header(self, client, layout_fields):
        """Test codes that cannot be encoded are counted in a header."""
        response = client.post("/api/v1/labels/standard/pdf", json={
            "sequence": {"prefix": "Ø", "start": "1", "end": "2"},
            "layout": layout_fields.model_dump()
        })

        assert response.status_code == 200
        assert response.headers["x-skipped-codes"] == "2"

    @patch("barcode_labels.handlers.label_generation_handler.PDFLabelGenerator.generate_standard_pdf")
    def test_export_failure(self, mock_generate, client, sequence_fields):
        """Test finalization failures return the user-facing message."""
        mock_generate.side_effect = ExportError("pdf_export_failed", "Failed to create PDF file.")

        response = client.post("/api/v1/labels/standard/pdf", json={
            "sequence": sequence_fields.model_dump()
        })

        assert response.status_code == 500
        assert response.json()["detail"]["message"] == "Failed to create PDF file."

    @patch("barcode_labels.handlers.label_generation_handler.PDFLabelGenerator.generate_standard_pdf")
    def test_unexpected_failure(self, mock_generate, client, sequence_fields):
        """Test unexpected errors are reported as generation failures."""
        mock_generate.side_effect = RuntimeError("boom")

        response = client.post("/api/v1/labels/standard/pdf", json={
            "sequence": sequence_fields.model_dump()
        })

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "generation_failed"


class TestManualExportRoutes:
    """Tests for manual entry exports."""

    def test_export_manual_pdf(self, client, manual_data):
        """Test 25 manual codes produce a 2 page PDF."""
        response = client.post("/api/v1/labels/manual/pdf", json={"manual_data": manual_data})

        assert response.status_code == 200
        assert re.fullmatch(
            r'attachment; filename="barcodes-manual-\d+\.pdf"',
            response.headers["content-disposition"]
        )
        assert len(PdfReader(BytesIO(response.content)).pages) == 2

    def test_manual_pdf_empty(self, client):
        """Test an empty manual entry is rejected."""
        response = client.post("/api/v1/labels/manual/pdf", json={"manual_data": " \n \n"})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Please enter barcode data for PDF export."

    def test_export_svg_zip(self, client, manual_data, sample_codes):
        """Test one SVG per code in a timestamped ZIP."""
        response = client.post("/api/v1/labels/svg/zip", json={"manual_data": manual_data})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert re.fullmatch(
            r'attachment; filename="barcodes-svg-\d+\.zip"',
            response.headers["content-disposition"]
        )
        with zipfile.ZipFile(BytesIO(response.content)) as zf:
            assert zf.namelist() == [f"{code.lower().replace('-', '_')}.svg" for code in sample_codes]

    def test_svg_zip_empty(self, client):
        """Test an empty manual entry is rejected."""
        response = client.post("/api/v1/labels/svg/zip", json={"manual_data": ""})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Please enter barcode data for SVG export."

    def test_svg_zip_skips_invalid(self, client):
        """Test invalid codes are skipped and counted."""
        response = client.post("/api/v1/labels/svg/zip", json={"manual_data": "A1\nÅ2\nB3"})

        assert response.status_code == 200
        assert response.headers["x-skipped-codes"] == "1"
        with zipfile.ZipFile(BytesIO(response.content)) as zf:
            assert zf.namelist() == ["a1.svg", "b3.svg"]


class TestProcessTextRoutes:
    """Tests for the parameter-block route."""

    def test_process_text(self, client):
        """Test generated codes are appended and the parameters cleared."""
        response = client.post("/api/v1/labels/process-text", json={
            "parameters": "range: 1-3\npadding: 2",
            "manual_data": "X-9"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["generated_codes"] == ["01", "02", "03"]
        assert data["manual_data"] == "X-9\n01\n02\n03"
        assert data["parameters"] == ""

    def test_process_text_invalid_range(self, client):
        """Test a malformed range is rejected with its message."""
        response = client.post("/api/v1/labels/process-text", json={
            "parameters": "prefix: A\nrange: 1to5",
            "manual_data": "keep"
        })

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "invalid_range"
        assert detail["message"] == "Invalid range. Please use the format: range: 1-100"

    def test_process_text_empty(self, client):
        """Test empty parameters are rejected."""
        response = client.post("/api/v1/labels/process-text", json={"parameters": "  "})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Please enter processing parameters."

    def test_process_text_oversized_range(self, client):
        """Test a range bound too long to convert is an invalid range."""
        response = client.post("/api/v1/labels/process-text", json={
            "parameters": "range: 1-" + "9" * 5000
        })

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_range"

    def test_process_text_padding_limit(self, client):
        """Test padding wider than the limit is rejected."""
        response = client.post("/api/v1/labels/process-text", json={
            "parameters": "range: 1-3\npadding: 2000000"
        })

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "padding_too_large"
