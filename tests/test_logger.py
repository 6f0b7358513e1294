"""
Tests for structured logging processors.
"""

from barcode_labels.logger import SERVICE_NAME, add_service_context, flatten_extra


def test_flatten_extra():
    """Test the extra payload is merged into the event."""
    event = flatten_extra(None, "info", {"event": "Labels exported", "extra": {"code_count": 20}})

    assert event == {"event": "Labels exported", "code_count": 20}


def test_flatten_extra_keeps_event_keys():
    """Test explicit event keys are not overwritten by extra."""
    event = flatten_extra(None, "info", {"event": "Export", "extra": {"event": "other", "pages": 2}})

    assert event["event"] == "Export"
    assert event["pages"] == 2


def test_flatten_extra_without_payload():
    """Test events without extra pass through unchanged."""
    assert flatten_extra(None, "info", {"event": "Started"}) == {"event": "Started"}


def test_service_context():
    """Test the service name and environment are stamped on events."""
    event = add_service_context(None, "info", {"event": "Started"})

    assert event["service"] == SERVICE_NAME
    assert "environment" in event
