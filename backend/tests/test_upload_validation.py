"""Tests for upload validation: presence, size bound, PDF signature"""
import pytest

from backend.app.services.resume_upload import (
    EmptyInputError,
    InvalidFormatError,
    OversizedInputError,
    UploadStep,
)
from backend.app.services.resume_upload.validation import validate_pdf_upload

TEN_MIB = 10 * 1024 * 1024


@pytest.mark.parametrize("data", [None, b""])
def test_missing_or_empty_file_rejected(data):
    with pytest.raises(EmptyInputError) as exc_info:
        validate_pdf_upload(data)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "No PDF file uploaded."
    assert exc_info.value.step is UploadStep.VALIDATION


def test_exactly_at_limit_accepted():
    validate_pdf_upload(b"%PDF" + b"0" * (TEN_MIB - 4), TEN_MIB)


def test_one_byte_over_limit_rejected():
    with pytest.raises(OversizedInputError) as exc_info:
        validate_pdf_upload(b"%PDF" + b"0" * (TEN_MIB - 3), TEN_MIB)
    assert exc_info.value.details["max_bytes"] == TEN_MIB
    assert "10 MB" in exc_info.value.message


def test_size_checked_before_format():
    """An oversized non-PDF reports the size problem."""
    with pytest.raises(OversizedInputError):
        validate_pdf_upload(b"x" * 20, 10)


@pytest.mark.parametrize("data", [b"%PD", b"hello world", b" %PDF-1.4", b"%pdf-1.4"])
def test_missing_signature_rejected(data):
    with pytest.raises(InvalidFormatError) as exc_info:
        validate_pdf_upload(data)
    assert exc_info.value.message == "Only PDF files are allowed."


def test_signature_only_accepted():
    validate_pdf_upload(b"%PDF")


def test_error_response_shape():
    """to_response: {error, message, details.step}"""
    with pytest.raises(EmptyInputError) as exc_info:
        validate_pdf_upload(b"")
    body = exc_info.value.to_response()
    assert body == {"error": True, "message": "No PDF file uploaded.", "details": {"step": "validation"}}
