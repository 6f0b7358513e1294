"""
Pytest configuration and fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from barcode_labels.main import app
from barcode_labels.models.labels import LayoutInput, SequenceInput


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def sequence_fields():
    """Range fields producing SN-001 .. SN-007."""
    return SequenceInput(prefix="SN-", suffix="", start="1", end="7", increment="1", padding="3")


@pytest.fixture
def layout_fields():
    """Letter page, 150x50pt barcodes."""
    return LayoutInput(
        page_width="8.5",
        page_height="11",
        barcode_width="150",
        barcode_height="50",
        move_x="0.5",
        move_y="0.5",
        gap_horizontal="180",
        gap_vertical="100"
    )


@pytest.fixture
def sample_codes():
    """Twenty-five manual entry codes."""
    return [f"LOC-{i:03d}" for i in range(1, 26)]


@pytest.fixture
def manual_data(sample_codes):
    """Manual entry text with blank lines and stray whitespace."""
    lines = []
    for i, code in enumerate(sample_codes):
        lines.append(f"  {code} " if i % 5 == 0 else code)
        if i % 7 == 0:
            lines.append("   ")
    return "\n".join(lines)
