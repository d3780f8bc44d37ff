"""
Upload validation - presence, size bound and PDF magic bytes. No side effects.
"""
from backend.app.core.config import PDF_SIGNATURE, settings
from backend.app.services.resume_upload.errors import (
    EmptyInputError,
    InvalidFormatError,
    OversizedInputError,
)
from backend.app.services.resume_upload.steps import UploadStep


def validate_pdf_upload(data: bytes | None, max_bytes: int | None = None) -> None:
    """Raise EmptyInputError, OversizedInputError or InvalidFormatError; return None when the upload is acceptable."""
    limit = max_bytes if max_bytes is not None else settings.max_upload_bytes
    if not data:
        raise EmptyInputError(step=UploadStep.VALIDATION)
    if len(data) > limit:
        raise OversizedInputError(
            f"PDF file is too large. Maximum size is {limit // (1024 * 1024)} MB.",
            step=UploadStep.VALIDATION,
            details={"size_bytes": len(data), "max_bytes": limit},
        )
    if len(data) < len(PDF_SIGNATURE) or data[: len(PDF_SIGNATURE)] != PDF_SIGNATURE:
        raise InvalidFormatError(step=UploadStep.VALIDATION)
