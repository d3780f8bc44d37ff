"""
Resume upload pipeline - validation, best-effort parsing, normalization, storage and persistence with compensation.
"""
from .errors import (
    AssociationFailure,
    CompensationFailure,
    EmptyInputError,
    InvalidFormatError,
    OversizedInputError,
    ParsingFailure,
    PersistenceFailure,
    ResumeUploadError,
    StorageFailure,
    UploadValidationError,
)
from .normalizer import FieldNormalizer, NormalizedResume
from .orchestrator import ResumeUploadPipeline, UploadRequest, UploadResult, build_storage_key
from .steps import STEP_POLICIES, FailurePolicy, UploadStep

__all__ = [
    "AssociationFailure",
    "CompensationFailure",
    "EmptyInputError",
    "FailurePolicy",
    "FieldNormalizer",
    "InvalidFormatError",
    "NormalizedResume",
    "OversizedInputError",
    "ParsingFailure",
    "PersistenceFailure",
    "ResumeUploadError",
    "ResumeUploadPipeline",
    "STEP_POLICIES",
    "StorageFailure",
    "UploadRequest",
    "UploadResult",
    "UploadStep",
    "UploadValidationError",
    "build_storage_key",
]
