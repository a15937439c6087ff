"""Tests for personal data redaction in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from salon_api.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    hash_identifier,
    set_request_id,
)


@pytest.fixture
def capture():
    logger = logging.getLogger("test_redaction")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    yield logger, stream

    logger.handlers.clear()
    clear_request_id()


def test_redacts_client_contact_details(capture):
    logger, stream = capture

    logger.info(
        "booking.received",
        extra={
            "booking_ref": "CHS-261018-AB12",
            "client_name": "Jane Smith",
            "client_email": "jane@example.com",
            "client_phone": "07700900123",
        },
    )

    output = stream.getvalue()
    assert "Jane Smith" not in output
    assert "jane@example.com" not in output
    assert "07700900123" not in output
    assert "[REDACTED]" in output
    assert "CHS-261018-AB12" in output


def test_redacts_nested_fields(capture):
    logger, stream = capture

    logger.info(
        "form.debug",
        extra={"form": {"email": "jane@example.com", "enquiryType": "pricing"}},
    )

    payload = json.loads(stream.getvalue())
    assert payload["form"]["email"] == "[REDACTED]"
    assert payload["form"]["enquiryType"] == "pricing"


def test_safe_fields_pass_through(capture):
    logger, stream = capture

    logger.info(
        "rate_limit.exceeded",
        extra={"client_hash": "abc123", "scope": "booking", "limit": 3},
    )

    payload = json.loads(stream.getvalue())
    assert payload["message"] == "rate_limit.exceeded"
    assert payload["scope"] == "booking"
    assert payload["limit"] == 3
    assert "[REDACTED]" not in stream.getvalue()


def test_request_id_is_attached_from_context(capture):
    logger, stream = capture
    set_request_id("req-abc")

    logger.info("with_context")

    assert json.loads(stream.getvalue())["request_id"] == "req-abc"


def test_hash_identifier_is_stable_and_opaque():
    digest = hash_identifier("booking:203.0.113.9")

    assert digest == hash_identifier("booking:203.0.113.9")
    assert digest != hash_identifier("booking:203.0.113.10")
    assert len(digest) == 16
    assert "." not in digest
