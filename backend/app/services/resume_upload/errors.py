"""
Upload error taxonomy. Every error carries the step it was raised at and the HTTP status it maps to.
"""
from backend.app.services.resume_upload.steps import UploadStep


class ResumeUploadError(Exception):
    status_code = 500
    default_message = "Resume upload failed"

    def __init__(
        self,
        message: str | None = None,
        step: UploadStep | None = None,
        details: dict | None = None,
    ):
        self.step = step
        self.message = message or self._step_message(step)
        self.details = {"step": step.label, **(details or {})} if step is not None else details
        super().__init__(self.message)

    def _step_message(self, step: UploadStep | None) -> str:
        if step is None:
            return self.default_message
        return f"{self.default_message} during step: {step.label}"

    def to_response(self) -> dict:
        body = {"error": True, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class UploadValidationError(ResumeUploadError):
    """Client-caused; nothing has been created yet."""
    status_code = 400
    default_message = "Invalid resume upload"

    def _step_message(self, step: UploadStep | None) -> str:
        return self.default_message


class EmptyInputError(UploadValidationError):
    default_message = "No PDF file uploaded."


class OversizedInputError(UploadValidationError):
    default_message = "PDF file is too large."


class InvalidFormatError(UploadValidationError):
    default_message = "Only PDF files are allowed."


class ParsingFailure(ResumeUploadError):
    """Advisory only - the pipeline continues with fallback metadata."""
    default_message = "Resume parsing failed"


class StorageFailure(ResumeUploadError):
    status_code = 502
    default_message = "Resume upload failed"


class PersistenceFailure(ResumeUploadError):
    status_code = 500
    default_message = "Resume upload failed"


class AssociationFailure(ResumeUploadError):
    """Advisory only - the resume is committed without some tag associations."""
    default_message = "Tag association failed"


class CompensationFailure(ResumeUploadError):
    """Logged only; never replaces the primary error."""
    default_message = "Compensation failed"
